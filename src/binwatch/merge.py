"""Record merge rules.

Pure functions that turn ``(existing record, incoming update)`` into the
record (or partial patch) to persist. Nothing here touches the store;
the service layer reads, calls one of these, and writes the result back.

Merge semantics are deliberately simple: keys in the incoming patch
overwrite, keys absent from it keep their previous value. Pruning of
unset/``None`` fields happens at the model boundary
(:meth:`binwatch.models.updates._BinUpdate.patch`).
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from binwatch.models import (
    BinIdentity,
    BinMetadata,
    BinRecord,
    BinStatus,
    HeartbeatUpdate,
    LidState,
    SwitchState,
)

LAST_UPDATED_KEY = "lastUpdated"


def _merge_patch(target: dict[str, Any], patch: Mapping[str, Any]) -> None:
    if not patch:
        return
    target.update(copy.deepcopy(dict(patch)))


def _default_document(identity: BinIdentity, *, display_now: str) -> dict[str, Any]:
    return {
        "id": identity.id,
        "location": identity.location,
        "distance": 0,
        "filledBinPercentage": 0,
        "microProcessorStatus": SwitchState.OFF.value,
        "sensorStatus": SwitchState.OFF.value,
        "binLidStatus": LidState.CLOSE.value,
        "binStatus": BinStatus.INACTIVE.value,
        "createdAt": display_now,
        LAST_UPDATED_KEY: display_now,
        "lastMaintenance": "",
    }


def new_record(identity: BinIdentity, metadata: BinMetadata, *, display_now: str) -> BinRecord:
    """Build the first record for a bin with defaulted telemetry fields."""
    document = _default_document(identity, display_now=display_now)
    _merge_patch(document, metadata.patch())
    return BinRecord.from_document(document)


def merge_record(existing: BinRecord, patch: Mapping[str, Any], *, display_now: str) -> BinRecord:
    """Overwrite the fields named in *patch*, keep the rest, refresh ``lastUpdated``."""
    document = existing.to_document()
    _merge_patch(document, patch)
    document[LAST_UPDATED_KEY] = display_now
    return BinRecord.from_document(document)


def register_record(
    existing: Mapping[str, Any] | None,
    metadata: BinMetadata,
    *,
    display_now: str,
) -> BinRecord:
    """Record to persist for a registration.

    *existing* is the raw stored document, if any. It may be partial: a
    producer can have written telemetry at the path before the bin was
    registered. Defaults fill whatever it lacks, its own values (telemetry,
    ``createdAt``) win over the defaults, and the identity and the new
    metadata win over both.
    """
    identity = metadata.identity
    if existing is None:
        return new_record(identity, metadata, display_now=display_now)
    document = _default_document(identity, display_now=display_now)
    _merge_patch(document, existing)
    _merge_patch(document, {"id": identity.id, "location": identity.location})
    _merge_patch(document, metadata.patch())
    document[LAST_UPDATED_KEY] = display_now
    return BinRecord.from_document(document)


def heartbeat_patch(update: HeartbeatUpdate, *, display_now: str) -> dict[str, Any]:
    """Partial fields a heartbeat writes with a merge-patch."""
    patch = update.patch()
    patch[LAST_UPDATED_KEY] = display_now
    return patch


def offline_patch(*, display_now: str) -> dict[str, Any]:
    """Partial fields written when the tracker flags a bin offline."""
    return {
        "microProcessorStatus": SwitchState.OFF.value,
        "sensorStatus": SwitchState.OFF.value,
        LAST_UPDATED_KEY: display_now,
    }
