"""Device identity: the ``(location, id)`` pair naming a bin."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


def normalize_location(value: str) -> str:
    """Upper-case the first letter and lower-case the rest (``"gYM"`` -> ``"Gym"``)."""
    return value[:1].upper() + value[1:].lower()


def clean_location(value: str) -> str:
    """Validate and normalise a location coming from a device or the store."""
    location = value.strip()
    if not location:
        raise ValueError("location must be non-empty")
    if "/" in location:
        raise ValueError("location must not contain '/'")
    return normalize_location(location)


class BinIdentity(BaseModel):
    """Stable identity of a bin for its whole lifetime.

    ``path`` addresses the persisted record, ``key`` addresses the
    liveness tracker entry.
    """

    model_config = ConfigDict(frozen=True)

    location: str
    id: int

    @field_validator("location")
    @classmethod
    def _normalize_location(cls, value: str) -> str:
        return clean_location(value)

    @property
    def path(self) -> str:
        return f"{self.location}/Bin-{self.id}"

    @property
    def key(self) -> str:
        return f"{self.location}-{self.id}"

    def __str__(self) -> str:
        return self.key
