"""Driver model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pyracescan.ingestion.normalize import derive_mounts, normalize_class_list, safe_str


class DriverRecord(BaseModel):
    """A driver on the roster and the mount their radio is published on.

    ``class_type``, ``class_list`` and both mount paths are derived on
    construction from ``number``, ``name`` and the class input, so two
    records built from the same fields always carry the same mounts.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    number: str = ""
    """Car number as printed (``"00"`` stays ``"00"``)."""
    name: str = ""
    """Driver display name."""
    class_type: str = ""
    """Primary class label (first of ``class_list``)."""
    class_list: tuple[str, ...] = Field(default_factory=tuple)
    """Every class the driver runs in, upper-cased, in feed order."""
    plain_mount: str = ""
    """``/<class>-<number>-<name>.mp3``."""
    icecast_mount: str = ""
    """``/icecast`` + ``plain_mount``."""
    logo: str = ""
    """Site-relative path of the number logo, if any."""
    frequency: str = ""
    """Scanner frequency in Hz as published."""

    @model_validator(mode="before")
    @classmethod
    def _derive_fields(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        classes = normalize_class_list(merged.get("class_list") or merged.get("class_type"))
        number = safe_str(merged.get("number"))
        name = safe_str(merged.get("name"))
        merged["number"] = number
        merged["name"] = name
        merged["class_list"] = tuple(classes)
        merged["class_type"] = classes[0] if classes else ""
        merged["plain_mount"], merged["icecast_mount"] = derive_mounts(merged["class_type"], number, name)
        return merged

    @property
    def classes(self) -> tuple[str, ...]:
        """Class labels to match against, never empty when a primary class exists."""
        if self.class_list:
            return self.class_list
        return (self.class_type,) if self.class_type else ()
