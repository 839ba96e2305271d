"""Item model representing a pinned place or library photo snapshot."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

Fingerprint = tuple[float, ...]


class LocationSource(str, Enum):
    """Where an item's coordinates came from."""

    PHOTO = "photo"
    USER = "user"


class Location(BaseModel):
    """Geographic coordinates with their provenance."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    latitude: float = Field(
        ...,
        ge=-90.0,
        le=90.0,
        description="Latitude in decimal degrees",
    )
    longitude: float = Field(
        ...,
        ge=-180.0,
        le=180.0,
        description="Longitude in decimal degrees",
    )
    source: LocationSource = Field(
        default=LocationSource.PHOTO,
        description="Photo-derived default or user-selected location",
    )

    @property
    def is_default_location(self) -> bool:
        """Whether the coordinates are the photo-derived default."""
        return self.source == LocationSource.PHOTO

    def as_tuple(self) -> tuple[float, float]:
        """Return ``(latitude, longitude)``."""
        return (self.latitude, self.longitude)


class Item(BaseModel):
    """Immutable snapshot of a caller-owned record handed to the engine.

    The engine never mutates items; derived results reference them by ``id``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque caller identifier",
    )
    fingerprint: Optional[Fingerprint] = Field(
        default=None,
        description="Image fingerprint (embedding vector), if computed",
    )
    location: Optional[Location] = Field(
        default=None,
        description="Coordinates, if known",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        description="Capture or pin creation time",
    )

    # Searchable text fields
    title: Optional[str] = Field(
        default=None,
        description="Primary title or post text",
    )
    address: Optional[str] = Field(
        default=None,
        description="Location name or address text",
    )
    locations: Optional[str] = Field(
        default=None,
        description="Extended locations text",
    )
    owner_display_name: Optional[str] = Field(
        default=None,
        description="Display name of the original owner",
    )
    owner_handle: Optional[str] = Field(
        default=None,
        description="Handle (username) of the original owner",
    )

    @property
    def has_fingerprint(self) -> bool:
        """Whether a fingerprint is available."""
        return self.fingerprint is not None

    @property
    def coordinates(self) -> Optional[tuple[float, float]]:
        """``(latitude, longitude)`` or None."""
        return self.location.as_tuple() if self.location else None

    def searchable_fields(self) -> list[str]:
        """Text fields used for fuzzy filtering, in ranking order."""
        return [
            value
            for value in (
                self.title,
                self.address,
                self.locations,
                self.owner_display_name,
                self.owner_handle,
            )
            if value
        ]
