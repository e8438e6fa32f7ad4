"""Ingestion layer.

Adapters that turn the backend's raw feeds (CSV text, Icecast status JSON)
into normalized domain records. Parsers here never raise on malformed input;
they fall back to defaults and log.
"""

__all__: list[str] = []
