"""Result models returned by the similarity, search and stacking passes."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SimilarityResult(BaseModel):
    """A candidate's cosine similarity to a query fingerprint."""

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(
        ...,
        description="ID of the matching item",
    )
    score: float = Field(
        ...,
        ge=-1.0,
        le=1.0,
        description="Cosine similarity (-1 to 1)",
    )

    @property
    def percentage(self) -> int:
        """Similarity as a whole-number percentage."""
        return int(self.score * 100)


class DuplicateGroup(BaseModel):
    """Items judged to be the same or near-identical photo.

    The seed is the item whose scan formed the group; members are the items it
    matched, in descending similarity (ties in input order).
    """

    model_config = ConfigDict(frozen=True)

    seed_id: str = Field(
        ...,
        description="ID of the item whose scan formed the group",
    )
    member_ids: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="IDs matched by the seed",
    )
    similarities: dict[str, float] = Field(
        default_factory=dict,
        description="Member ID to similarity with the seed (clamped to 0-1)",
    )

    @property
    def item_ids(self) -> tuple[str, ...]:
        """Seed followed by members."""
        return (self.seed_id, *self.member_ids)

    @property
    def size(self) -> int:
        return len(self.member_ids) + 1


class MatchScore(BaseModel):
    """Relevance of an item to a text query."""

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(
        ...,
        description="ID of the scored item",
    )
    relevance: float = Field(
        ...,
        ge=0.0,
        description="Unbounded ordering score",
    )


class Stack(BaseModel):
    """Items grouped by capture time, most recent first."""

    model_config = ConfigDict(frozen=True)

    item_ids: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Member IDs, primary first",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp of the primary item",
    )

    @property
    def id(self) -> str:
        """Stable identifier derived from the member IDs."""
        return "-".join(self.item_ids)

    @property
    def primary_id(self) -> str:
        return self.item_ids[0]

    @property
    def count(self) -> int:
        return len(self.item_ids)

    @property
    def is_single(self) -> bool:
        return len(self.item_ids) == 1

    def contains(self, item_id: str) -> bool:
        """Check whether an item belongs to this stack."""
        return item_id in self.item_ids


class EmbeddingStats(BaseModel):
    """Fingerprint coverage over a set of items."""

    model_config = ConfigDict(frozen=True)

    total_items: int = Field(..., ge=0)
    items_with_fingerprints: int = Field(..., ge=0)
    coverage: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_counts(self) -> "EmbeddingStats":
        if self.items_with_fingerprints > self.total_items:
            raise ValueError("items_with_fingerprints cannot exceed total_items")
        return self

    @property
    def coverage_percentage(self) -> int:
        return int(self.coverage * 100)


class BackfillReport(BaseModel):
    """Outcome of one embedding backfill run."""

    processed: int = Field(default=0, ge=0, description="Items visited")
    computed: int = Field(default=0, ge=0, description="Fingerprints computed")
    skipped: int = Field(default=0, ge=0, description="Items already fingerprinted or without image")
    failed: int = Field(default=0, ge=0, description="Items whose computation failed")
    failed_ids: list[str] = Field(
        default_factory=list,
        description="IDs of items that failed after all attempts",
    )
    last_checkpoint_id: Optional[str] = Field(
        default=None,
        description="ID of the last item covered by a checkpoint",
    )
