"""Race event model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from pyracescan._constants import EASTERN_OFFSET


class EventRecord(BaseModel):
    """One scheduled race on the event feed."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    race_id: str
    class_type: str = ""
    track: str = ""
    location: str = ""
    start: datetime

    @field_validator("class_type")
    @classmethod
    def _upper_class(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("start")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=EASTERN_OFFSET)
        return value
