"""
Test data factories for PinMatch.

Factories generate realistic test data for:
- Items (pinned places and library photos)
- Fingerprints (unit-direction vectors)
- Locations (photo-derived or user-selected)

Each factory accepts optional overrides for any field.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pinmatch.models.item import Item, Location, LocationSource

REFERENCE_TIME = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

_counter = 0


def _next_id() -> str:
    global _counter
    _counter += 1
    return f"item-{_counter:04d}"


def create_fingerprint(angle_degrees: float = 0.0, dimension: int = 2) -> tuple[float, ...]:
    """
    Generate a unit fingerprint pointing at ``angle_degrees`` in its first plane.

    The cosine similarity of two such fingerprints is the cosine of the angle
    between them, which makes thresholds easy to reason about in tests.
    """
    radians = math.radians(angle_degrees)
    return (math.cos(radians), math.sin(radians)) + (0.0,) * (dimension - 2)


def create_location(
    latitude: float = 37.7749,
    longitude: float = -122.4194,
    source: LocationSource = LocationSource.PHOTO,
) -> Location:
    """Generate a location (San Francisco by default)."""
    return Location(latitude=latitude, longitude=longitude, source=source)


def create_item(
    *,
    id: Optional[str] = None,
    fingerprint: Optional[tuple[float, ...]] = None,
    location: Optional[Location] = None,
    created_at: Optional[datetime] = None,
    seconds_ago: Optional[float] = None,
    title: Optional[str] = None,
    address: Optional[str] = None,
    locations: Optional[str] = None,
    owner_display_name: Optional[str] = None,
    owner_handle: Optional[str] = None,
    **kwargs: Any,
) -> Item:
    """
    Generate an item snapshot.

    Args:
        id: Item ID (auto-generated if None)
        fingerprint: Image fingerprint
        location: Coordinates
        created_at: Creation time
        seconds_ago: Alternative to created_at, relative to REFERENCE_TIME
        title: Title text
        address: Address text
        locations: Extended locations text
        owner_display_name: Owner display name
        owner_handle: Owner handle
        **kwargs: Additional fields to override

    Returns:
        Item instance

    Example:
        item = create_item(title="Golden Gate Bridge", seconds_ago=3600)
    """
    if created_at is None and seconds_ago is not None:
        created_at = REFERENCE_TIME - timedelta(seconds=seconds_ago)

    return Item(
        id=id or _next_id(),
        fingerprint=fingerprint,
        location=location,
        created_at=created_at,
        title=title,
        address=address,
        locations=locations,
        owner_display_name=owner_display_name,
        owner_handle=owner_handle,
        **kwargs,
    )
