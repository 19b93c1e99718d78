"""Inbound update bodies.

Each body carries the bin's identity plus a subset of record fields.
Fields left out of a body are absent from :meth:`patch` and therefore
never touch the stored value.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from binwatch.models._base import BinBaseModel, BinStatus, LidState, SwitchState
from binwatch.models.identity import BinIdentity, clean_location

_IDENTITY_FIELDS = frozenset({"id", "location"})


class _BinUpdate(BinBaseModel):
    id: int
    location: str

    @field_validator("location")
    @classmethod
    def _check_location(cls, value: str) -> str:
        return clean_location(value)

    @property
    def identity(self) -> BinIdentity:
        return BinIdentity(location=self.location, id=self.id)

    def patch(self) -> dict[str, Any]:
        """Fields supplied by the sender, camelCase keyed, identity excluded."""
        return self.model_dump(
            by_alias=True,
            mode="json",
            exclude=set(_IDENTITY_FIELDS),
            exclude_unset=True,
            exclude_none=True,
        )


class BinMetadata(_BinUpdate):
    """Registration body: classification and placement of a bin."""

    bin_type: str = Field(min_length=1)
    bin_color: str | None = None
    geo_location: str | None = None
    max_bin_capacity: float | None = Field(default=None, ge=0)
    last_maintenance: str | None = None


class TelemetryUpdate(_BinUpdate):
    """Distance / fill telemetry. Every reading is optional."""

    distance: float | None = Field(default=None, ge=0)
    filled_bin_percentage: float | None = Field(default=None, ge=0, le=100)
    max_bin_capacity: float | None = Field(default=None, ge=0)
    micro_processor_status: SwitchState | None = None
    sensor_status: SwitchState | None = None
    bin_lid_status: LidState | None = None
    bin_status: BinStatus | None = None


class HeartbeatUpdate(_BinUpdate):
    """Periodic keep-alive from the bin's microcontroller."""

    micro_processor_status: SwitchState
    sensor_status: SwitchState | None = None
