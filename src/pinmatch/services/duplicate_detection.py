"""Duplicate detection service for grouping near-identical photos."""

from collections.abc import Iterable, Sequence
from typing import Optional

import structlog

from pinmatch.config import Settings
from pinmatch.errors import validate_threshold
from pinmatch.models.item import Item
from pinmatch.models.results import DuplicateGroup
from pinmatch.services.similarity import SimilarityIndex

logger = structlog.get_logger(__name__)


class DuplicateDetectionService:
    """Partitions items into disjoint groups of near-duplicate fingerprints.

    Grouping is greedy and seeded by input order: each unplaced item with a
    fingerprint scans the other unplaced items, and every match joins the
    seed's group. Two members of a group are therefore each close to the seed
    but not necessarily to one another, and which items end up together
    depends on the order items are supplied. This is not a transitive-closure
    clustering.
    """

    def __init__(
        self,
        similarity_index: Optional[SimilarityIndex] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize duplicate detection service.

        Args:
            similarity_index: Index used for each seed's scan
            settings: Engine settings supplying the default duplicate threshold
        """
        self.settings = settings or Settings()
        self.similarity_index = similarity_index or SimilarityIndex(self.settings)

    def find_duplicate_groups(
        self,
        items: Sequence[Item],
        threshold: Optional[float] = None,
        strict: bool = True,
    ) -> list[DuplicateGroup]:
        """Find groups of duplicate items.

        Args:
            items: Items to partition, in seed order
            threshold: Minimum similarity to the seed (0-1), defaults to settings
            strict: Raise on fingerprint dimension mismatch instead of skipping

        Returns:
            Disjoint duplicate groups in the order their seeds were visited;
            items without a match are not reported

        Raises:
            InvalidThresholdError: If threshold is outside [0, 1]
            DimensionMismatchError: If strict and fingerprints differ in length
        """
        threshold = validate_threshold(
            self.settings.duplicate_threshold if threshold is None else threshold
        )

        logger.info(
            "Scanning for duplicates",
            item_count=len(items),
            threshold=threshold,
        )

        groups: list[DuplicateGroup] = []
        processed: set[str] = set()

        for item in items:
            if item.id in processed or item.fingerprint is None:
                continue

            remaining = [
                other for other in items
                if other.id not in processed and other.id != item.id
            ]
            matches = self.similarity_index.find_similar(
                target=item.fingerprint,
                candidates=remaining,
                threshold=threshold,
                limit=len(remaining),
                exclude_id=item.id,
                strict=strict,
            )
            if not matches:
                continue

            group = DuplicateGroup(
                seed_id=item.id,
                member_ids=tuple(m.item_id for m in matches),
                similarities={m.item_id: max(0.0, m.score) for m in matches},
            )
            processed.add(item.id)
            processed.update(group.member_ids)
            groups.append(group)

            logger.debug(
                "Formed duplicate group",
                seed_id=item.id,
                group_size=group.size,
            )

        logger.info(
            "Duplicate scan complete",
            group_count=len(groups),
            duplicate_count=sum(len(g.member_ids) for g in groups),
        )

        return groups


def duplicate_ids(groups: Iterable[DuplicateGroup]) -> list[str]:
    """IDs of every non-seed member across groups, i.e. removal candidates."""
    return [member_id for group in groups for member_id in group.member_ids]
