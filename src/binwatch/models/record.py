"""Persisted bin record."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from binwatch.models._base import BinBaseModel, BinStatus, LidState, SwitchState


class BinRecord(BinBaseModel):
    """Merged, up-to-date document for one bin.

    The record is a superset of every field any update type can carry.
    Keys the model does not know about are kept (``extra="allow"``) so a
    merge never drops data written by another producer.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    location: str
    bin_type: str | None = None
    bin_color: str | None = None
    geo_location: str | None = None
    distance: float = Field(default=0, ge=0)
    filled_bin_percentage: float = Field(default=0, ge=0, le=100)
    max_bin_capacity: float | None = Field(default=None, ge=0)
    micro_processor_status: SwitchState = SwitchState.OFF
    sensor_status: SwitchState = SwitchState.OFF
    bin_lid_status: LidState = LidState.CLOSE
    bin_status: BinStatus = BinStatus.INACTIVE
    last_updated: str = ""
    created_at: str = ""
    last_maintenance: str = ""

    def to_document(self) -> dict[str, Any]:
        """Dump with the camelCase keys used in the database."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> BinRecord:
        return cls.model_validate(document)
