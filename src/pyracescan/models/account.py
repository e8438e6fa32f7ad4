"""Account, session and day-pass models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyracescan.models._base import RaceScanBaseModel


class UserInfo(RaceScanBaseModel):
    """Profile returned by ``/api/user-info`` for the logged-in user."""

    success: bool = False
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    email_verified: bool = False
    phone: str = ""
    phone_verified: bool = False
    subscribed: bool = False
    subscription_plan: str = ""
    subscription_status: str = ""
    next_billing_date: str | None = None


class SessionInfo(RaceScanBaseModel):
    """Server-side session summary returned by ``/api/session``."""

    logged_in: bool = False
    user_id: int | None = None
    session_id: str | None = None
    first_name: str | None = None
    email_verified: bool = False
    phone_verified: bool = False
    subscribed: bool = False
    tier: str | None = None


class DayPass(RaceScanBaseModel):
    """A single-event access grant."""

    event_id: str = ""
    event_name: str = ""
    event_date: str = ""

    def covers(self, race_id: str | None) -> bool:
        """Whether this pass grants access to *race_id* (case-insensitive)."""
        if not race_id:
            return False
        return self.event_id.strip().upper() == str(race_id).strip().upper()


class AuthState(BaseModel):
    """The user's access state as far as live audio is concerned."""

    model_config = ConfigDict(frozen=True)

    logged_in: bool = False
    subscribed: bool = False
    has_day_pass: bool = False
    session_id: str | None = None

    @property
    def has_access(self) -> bool:
        """Logged in and either subscribed or holding a pass for the live race."""
        return self.logged_in and (self.subscribed or self.has_day_pass)


LOGGED_OUT = AuthState()
