"""Custom exception hierarchy for pyracescan."""

from __future__ import annotations


class RaceScanError(Exception):
    """Base exception for all pyracescan errors."""


class RaceScanConfigError(RaceScanError):
    """Invalid or missing configuration."""


class RaceScanTransportError(RaceScanError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class RaceScanApiError(RaceScanError):
    """Backend answered with ``success: false``."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class RaceScanAuthenticationError(RaceScanApiError):
    """Login rejected or the session cookie is not (or no longer) valid."""


class RaceScanStreamError(RaceScanError):
    """A single stream candidate could not be opened."""

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class StreamUnavailableError(RaceScanStreamError):
    """Every stream candidate failed.

    ``speculative`` is set when the mount was never reported by Icecast and
    playback was attempted against the computed path only, so the failure
    most likely means the driver is not broadcasting rather than a network
    problem.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str = "",
        attempts: int = 0,
        speculative: bool = False,
    ) -> None:
        self.attempts = attempts
        self.speculative = speculative
        super().__init__(message, url=url)
