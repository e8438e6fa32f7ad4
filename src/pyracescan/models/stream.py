"""Stream availability models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyracescan.models.driver import DriverRecord


class ActiveMountSet(BaseModel):
    """Mount paths Icecast currently reports as broadcasting.

    ``status_known`` is ``False`` when no usable status payload was
    available at all, as opposed to a payload listing zero sources.
    """

    model_config = ConfigDict(frozen=True)

    mounts: frozenset[str] = Field(default_factory=frozenset)
    status_known: bool = True

    @property
    def is_empty(self) -> bool:
        return not self.mounts

    def contains(self, path: str) -> bool:
        return path in self.mounts

    def sorted_mounts(self) -> list[str]:
        return sorted(self.mounts)


class MountMatch(StrEnum):
    """How a driver's mount was matched against the active set."""

    PLAIN = "plain"
    ICECAST = "icecast"
    HINT = "hint"
    # Nothing matched; the computed plain mount is attempted anyway.
    COMPUTED = "computed"


class DriverStatus(BaseModel):
    """A driver enriched with the mount to play and whether it looks live."""

    model_config = ConfigDict(frozen=True)

    driver: DriverRecord
    active_path: str
    is_active: bool
    match: MountMatch

    @property
    def speculative(self) -> bool:
        """Whether playback would target a mount Icecast never reported."""
        return self.match == MountMatch.COMPUTED
