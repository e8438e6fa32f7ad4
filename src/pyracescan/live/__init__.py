"""Live-state layer.

Derives "what is live right now" from the schedule and drives a live audio
session on top of the client, the auth provider and the stream player.
"""

__all__: list[str] = []
