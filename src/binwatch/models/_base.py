"""Base model and enum for bin documents.

Every bin model inherits from :class:`BinBaseModel` which provides:

* ``alias_generator=to_camel`` so the camelCase keys stored in the
  database and sent by devices map to snake_case fields.
* ``populate_by_name`` so code can build models with field names.

Status enums inherit from :class:`BinEnum`, which resolves values
case-insensitively (firmware sends ``"on"`` as often as ``"ON"``).
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BinEnum(StrEnum):
    """Base for device status enums."""

    @classmethod
    def _missing_(cls, value: object) -> BinEnum | None:
        if isinstance(value, str):
            folded = value.strip().casefold()
            for member in cls:
                if member.value.casefold() == folded:
                    return member
        return None


class SwitchState(BinEnum):
    ON = "ON"
    OFF = "OFF"


class LidState(BinEnum):
    OPEN = "OPEN"
    CLOSE = "CLOSE"


class BinStatus(BinEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class BinBaseModel(BaseModel):
    """Base for bin documents and ingestion bodies."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )
