"""Similarity index: brute-force ranked fingerprint search over a candidate set."""

from collections.abc import Iterable, Sequence
from typing import Optional

import structlog

from pinmatch.config import Settings
from pinmatch.errors import DimensionMismatchError, validate_threshold
from pinmatch.models.item import Item
from pinmatch.models.results import SimilarityResult
from pinmatch.utils.vector_math import cosine_similarity

logger = structlog.get_logger(__name__)


class SimilarityIndex:
    """Ranks candidate items by cosine similarity to a target fingerprint.

    Holds no item state; every query scans the candidates it is given. This is
    a linear scan sized for a single device's library, not an ANN index.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize similarity index.

        Args:
            settings: Engine settings supplying default threshold, limit and
                expected fingerprint dimension
        """
        self.settings = settings or Settings()

    def find_similar(
        self,
        target: Sequence[float],
        candidates: Iterable[Item],
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
        exclude_id: Optional[str] = None,
        strict: bool = True,
    ) -> list[SimilarityResult]:
        """Find candidates whose fingerprints are similar to the target.

        Args:
            target: Query fingerprint
            candidates: Items to compare; those without fingerprints are skipped
            threshold: Minimum similarity (0-1), defaults to settings
            limit: Maximum results, defaults to settings
            exclude_id: Item ID to leave out (typically the query item)
            strict: Raise on dimension mismatch instead of skipping the candidate

        Returns:
            Results sorted by score descending, ties in input order

        Raises:
            InvalidThresholdError: If threshold is outside [0, 1]
            DimensionMismatchError: If strict and a fingerprint length differs
            ValueError: If limit is negative
        """
        threshold = validate_threshold(
            self.settings.similarity_threshold if threshold is None else threshold
        )
        if limit is None:
            limit = self.settings.similarity_limit
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        self._check_dimension(target)

        results: list[SimilarityResult] = []
        for candidate in candidates:
            if candidate.fingerprint is None or candidate.id == exclude_id:
                continue

            try:
                score = cosine_similarity(target, candidate.fingerprint)
            except DimensionMismatchError as e:
                if strict:
                    logger.error(
                        "Fingerprint dimension mismatch",
                        item_id=candidate.id,
                        expected=e.expected,
                        actual=e.actual,
                    )
                    raise DimensionMismatchError(
                        expected=e.expected,
                        actual=e.actual,
                        item_id=candidate.id,
                    ) from e
                logger.warning(
                    "Skipping candidate with mismatched fingerprint",
                    item_id=candidate.id,
                    expected=e.expected,
                    actual=e.actual,
                )
                continue

            if score >= threshold:
                results.append(SimilarityResult(item_id=candidate.id, score=score))

        # list.sort is stable, so equal scores keep input order
        results.sort(key=lambda r: r.score, reverse=True)

        logger.debug(
            "Similarity scan complete",
            match_count=len(results),
            threshold=threshold,
            limit=limit,
        )

        return results[:limit]

    def find_similar_to_item(
        self,
        item: Item,
        candidates: Iterable[Item],
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
        strict: bool = True,
    ) -> list[SimilarityResult]:
        """Find items similar to ``item``, excluding the item itself.

        Returns an empty list if the item has no fingerprint.
        """
        if item.fingerprint is None:
            logger.debug("No fingerprint available for comparison", item_id=item.id)
            return []

        return self.find_similar(
            target=item.fingerprint,
            candidates=candidates,
            threshold=threshold,
            limit=limit,
            exclude_id=item.id,
            strict=strict,
        )

    def _check_dimension(self, target: Sequence[float]) -> None:
        expected = self.settings.fingerprint_dimension
        if expected is not None and len(target) != expected:
            raise DimensionMismatchError(expected=expected, actual=len(target))
