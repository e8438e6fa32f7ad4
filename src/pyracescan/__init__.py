"""pyracescan - Async Python client for RaceScan live driver audio."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyracescan")
except PackageNotFoundError:
    __version__ = "0+local"
from pyracescan.access import AccessAction, AuthProvider, access_action
from pyracescan.client import RaceScanClient
from pyracescan.config import RaceScanConfig
from pyracescan.exceptions import (
    RaceScanApiError,
    RaceScanAuthenticationError,
    RaceScanConfigError,
    RaceScanError,
    RaceScanStreamError,
    RaceScanTransportError,
    StreamUnavailableError,
)
from pyracescan.live.session import LiveSession
from pyracescan.live.window import compute_live_info
from pyracescan.models import (
    ActiveMountSet,
    AuthState,
    DayPass,
    DriverRecord,
    DriverStatus,
    EventRecord,
    LiveInfo,
    LiveSnapshot,
    MountMatch,
    SessionInfo,
    UserInfo,
)
from pyracescan.policy import (
    DEFAULT_LIVE_WINDOW,
    HOME_SCREEN_WINDOW,
    LIVE_SCREEN_WINDOW,
    SCHEDULE_WINDOW,
    LiveWindowPolicy,
    StatusPolicy,
)
from pyracescan.streams.candidates import build_stream_candidates
from pyracescan.streams.http_backend import HttpStreamBackend
from pyracescan.streams.player import PlaybackState, StreamPlayer
from pyracescan.streams.resolve import resolve_driver, resolve_drivers

__all__ = [
    "__version__",
    "DEFAULT_LIVE_WINDOW",
    "HOME_SCREEN_WINDOW",
    "LIVE_SCREEN_WINDOW",
    "SCHEDULE_WINDOW",
    "AccessAction",
    "ActiveMountSet",
    "AuthProvider",
    "AuthState",
    "DayPass",
    "DriverRecord",
    "DriverStatus",
    "EventRecord",
    "HttpStreamBackend",
    "LiveInfo",
    "LiveSession",
    "LiveSnapshot",
    "LiveWindowPolicy",
    "MountMatch",
    "PlaybackState",
    "RaceScanApiError",
    "RaceScanAuthenticationError",
    "RaceScanClient",
    "RaceScanConfig",
    "RaceScanConfigError",
    "RaceScanError",
    "RaceScanStreamError",
    "RaceScanTransportError",
    "SessionInfo",
    "StatusPolicy",
    "StreamPlayer",
    "StreamUnavailableError",
    "UserInfo",
    "access_action",
    "build_stream_candidates",
    "compute_live_info",
    "resolve_driver",
    "resolve_drivers",
]
