"""Pydantic models for PinMatch value objects."""

from pinmatch.models.item import Fingerprint, Item, Location, LocationSource
from pinmatch.models.results import (
    BackfillReport,
    DuplicateGroup,
    EmbeddingStats,
    MatchScore,
    SimilarityResult,
    Stack,
)

__all__ = [
    "BackfillReport",
    "DuplicateGroup",
    "EmbeddingStats",
    "Fingerprint",
    "Item",
    "Location",
    "LocationSource",
    "MatchScore",
    "SimilarityResult",
    "Stack",
]
