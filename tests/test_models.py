"""Tests for the bin document and ingestion models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from binwatch.models import (
    BinIdentity,
    BinMetadata,
    BinRecord,
    BinStatus,
    HeartbeatUpdate,
    LidState,
    SwitchState,
    TelemetryUpdate,
)

# ------------------------------------------------------------------
# Identity
# ------------------------------------------------------------------


class TestBinIdentity:
    def test_location_is_normalised(self) -> None:
        identity = BinIdentity(location="  gYM ", id=1)
        assert identity.location == "Gym"

    def test_path_and_key(self) -> None:
        identity = BinIdentity(location="Gym", id=7)
        assert identity.path == "Gym/Bin-7"
        assert identity.key == "Gym-7"

    def test_equal_identities_hash_equal(self) -> None:
        assert {BinIdentity(location="gym", id=1), BinIdentity(location="Gym", id=1)} == {
            BinIdentity(location="GYM", id=1)
        }

    @pytest.mark.parametrize("location", ["", "   ", "Gym/Annex"])
    def test_rejects_bad_location(self, location: str) -> None:
        with pytest.raises(ValidationError):
            BinIdentity(location=location, id=1)


# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class TestBinEnum:
    def test_values_resolve_case_insensitively(self) -> None:
        assert SwitchState("on") == SwitchState.ON
        assert LidState("Open") == LidState.OPEN
        assert BinStatus("ACTIVE") == BinStatus.ACTIVE

    def test_unknown_value_raises(self) -> None:
        with pytest.raises(ValueError):
            SwitchState("MAYBE")


# ------------------------------------------------------------------
# Update bodies
# ------------------------------------------------------------------


class TestUpdates:
    def test_telemetry_patch_contains_only_sent_fields(self) -> None:
        update = TelemetryUpdate.model_validate({"id": 1, "location": "gym", "distance": 42, "sensorStatus": "on"})
        assert update.patch() == {"distance": 42.0, "sensorStatus": "ON"}
        assert update.identity == BinIdentity(location="Gym", id=1)

    def test_explicit_null_is_not_patched(self) -> None:
        update = TelemetryUpdate.model_validate({"id": 1, "location": "Gym", "distance": None})
        assert update.patch() == {}

    def test_fill_percentage_bounds(self) -> None:
        with pytest.raises(ValidationError):
            TelemetryUpdate.model_validate({"id": 1, "location": "Gym", "filledBinPercentage": 101})
        with pytest.raises(ValidationError):
            TelemetryUpdate.model_validate({"id": 1, "location": "Gym", "distance": -1})

    def test_heartbeat_requires_microprocessor_status(self) -> None:
        with pytest.raises(ValidationError):
            HeartbeatUpdate.model_validate({"id": 1, "location": "Gym"})

    def test_metadata_accepts_snake_case_names(self) -> None:
        metadata = BinMetadata(id=1, location="Gym", bin_type="general", bin_color="green")
        assert metadata.patch() == {"binType": "general", "binColor": "green"}

    def test_metadata_requires_bin_type(self) -> None:
        with pytest.raises(ValidationError):
            BinMetadata.model_validate({"id": 1, "location": "Gym", "binColor": "green"})


# ------------------------------------------------------------------
# Record
# ------------------------------------------------------------------


class TestBinRecord:
    def test_document_uses_camel_case_keys(self) -> None:
        record = BinRecord(id=1, location="Gym", bin_type="general", last_updated="now")
        document = record.to_document()
        assert document["binType"] == "general"
        assert document["microProcessorStatus"] == "OFF"
        assert document["binLidStatus"] == "CLOSE"
        assert document["binStatus"] == "inactive"
        assert "geoLocation" not in document

    def test_unknown_keys_survive_round_trip(self) -> None:
        record = BinRecord.from_document({"id": 1, "location": "Gym", "firmware": "1.2.0"})
        assert record.to_document()["firmware"] == "1.2.0"
