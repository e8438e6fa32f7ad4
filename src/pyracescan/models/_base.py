"""Base model for RaceScan backend JSON responses.

Backend responses inherit from :class:`RaceScanBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields, while snake_case keys (the
  day-pass rows come straight from MySQL) still populate by name.
* A ``model_validator(mode="before")`` that drops ``null`` values so the
  field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RaceScanBaseModel(BaseModel):
    """Base for RaceScan API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep an explicitly passed raw (kwargs construction); otherwise stash the payload.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
