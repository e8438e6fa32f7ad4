"""Data models for RaceScan feeds and API responses."""

from pyracescan.models._base import RaceScanBaseModel
from pyracescan.models.account import LOGGED_OUT, AuthState, DayPass, SessionInfo, UserInfo
from pyracescan.models.driver import DriverRecord
from pyracescan.models.event import EventRecord
from pyracescan.models.live import LiveInfo, LiveSnapshot
from pyracescan.models.stream import ActiveMountSet, DriverStatus, MountMatch

__all__ = [
    "LOGGED_OUT",
    "ActiveMountSet",
    "AuthState",
    "DayPass",
    "DriverRecord",
    "DriverStatus",
    "EventRecord",
    "LiveInfo",
    "LiveSnapshot",
    "MountMatch",
    "RaceScanBaseModel",
    "SessionInfo",
    "UserInfo",
]
