"""Client configuration for pyracescan."""

from __future__ import annotations

import dataclasses
import os
from datetime import timedelta
from typing import Any

from pyracescan._constants import BASE_URL, STREAM_EXTENSIONS, STREAM_ORIGINS, STREAM_PROXY_PATH
from pyracescan.exceptions import RaceScanConfigError
from pyracescan.policy import DEFAULT_LIVE_WINDOW, LiveWindowPolicy, StatusPolicy


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise RaceScanConfigError(f"{env_key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class RaceScanConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend origin serving the API, the CSV feeds and the Icecast status.
    stream_proxy_path : str
        Path of the backend stream relay (``/api/stream``).
    stream_origins : tuple[str, ...]
        Origins tried for direct Icecast URLs, in order.
    stream_extensions : tuple[str, ...]
        Extensions appended to mount paths when building candidates.
    request_timeout : float
        Total timeout in seconds for a single backend request.
    live_window : LiveWindowPolicy
        Pre-roll/post-roll window used to decide whether an event is live.
    status_policy : StatusPolicy
        What an empty Icecast status means for driver availability.
    assets_cache_ttl : float
        Seconds the slideshow image listing is served from memory.
    """

    base_url: str = BASE_URL
    stream_proxy_path: str = STREAM_PROXY_PATH
    stream_origins: tuple[str, ...] = STREAM_ORIGINS
    stream_extensions: tuple[str, ...] = STREAM_EXTENSIONS
    request_timeout: float = 15.0
    live_window: LiveWindowPolicy = DEFAULT_LIVE_WINDOW
    status_policy: StatusPolicy = StatusPolicy.ASSUME_LIVE_WHEN_STATUS_UNKNOWN
    assets_cache_ttl: float = 60.0

    def __post_init__(self) -> None:
        if not self.base_url:
            raise RaceScanConfigError("base_url must not be empty")
        if self.request_timeout <= 0:
            raise RaceScanConfigError("request_timeout must be positive")
        # Normalize trailing slashes so URL joins stay predictable.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "stream_origins", tuple(o.rstrip("/") for o in self.stream_origins if o))

    @property
    def stream_proxy_url(self) -> str:
        """Absolute URL of the stream relay endpoint."""
        return f"{self.base_url}{self.stream_proxy_path}"

    @classmethod
    def from_env(cls, **overrides: Any) -> RaceScanConfig:
        """Create configuration from ``RACESCAN_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        RaceScanConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_CONFIG_MAP = {
            "RACESCAN_BASE_URL": "base_url",
            "RACESCAN_STREAM_PROXY_PATH": "stream_proxy_path",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        origins_env = env.get("RACESCAN_STREAM_ORIGINS")
        if origins_env is not None:
            config_kwargs["stream_origins"] = tuple(o.strip() for o in origins_env.split(",") if o.strip())

        timeout_env = env.get("RACESCAN_REQUEST_TIMEOUT")
        if timeout_env is not None:
            config_kwargs["request_timeout"] = _env_float("RACESCAN_REQUEST_TIMEOUT", timeout_env)

        ttl_env = env.get("RACESCAN_ASSETS_CACHE_TTL")
        if ttl_env is not None:
            config_kwargs["assets_cache_ttl"] = _env_float("RACESCAN_ASSETS_CACHE_TTL", ttl_env)

        pre_env = env.get("RACESCAN_PRE_ROLL_MINUTES")
        post_env = env.get("RACESCAN_POST_ROLL_HOURS")
        if "live_window" not in overrides and (pre_env is not None or post_env is not None):
            pre = DEFAULT_LIVE_WINDOW.pre_roll
            post = DEFAULT_LIVE_WINDOW.post_roll
            if pre_env is not None:
                pre = timedelta(minutes=_env_float("RACESCAN_PRE_ROLL_MINUTES", pre_env))
            if post_env is not None:
                post = timedelta(hours=_env_float("RACESCAN_POST_ROLL_HOURS", post_env))
            try:
                config_kwargs["live_window"] = LiveWindowPolicy(pre_roll=pre, post_roll=post)
            except ValueError as exc:
                raise RaceScanConfigError(str(exc)) from exc

        if "status_policy" not in overrides:
            assume = _env_bool(env.get("RACESCAN_ASSUME_LIVE_WHEN_STATUS_UNKNOWN"), True)
            config_kwargs["status_policy"] = (
                StatusPolicy.ASSUME_LIVE_WHEN_STATUS_UNKNOWN if assume else StatusPolicy.REQUIRE_STATUS
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
