"""Search service for pinned places: fuzzy filtering and relevance ranking.

Scoring weights per field:

    field                 prefix   contains
    title                 10.0     5.0
    address                8.0     3.0
    locations              7.0     3.5
    owner display name      -      2.0
    owner handle            -      1.0

plus a recency bonus decaying linearly from 1.0 to 0 over the decay window.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Optional

import structlog

from pinmatch.config import Settings
from pinmatch.errors import validate_threshold
from pinmatch.models.item import Item
from pinmatch.models.results import MatchScore
from pinmatch.services.fuzzy import contains_fuzzy
from pinmatch.utils.dates import as_utc

logger = structlog.get_logger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

TITLE_PREFIX_SCORE = 10.0
TITLE_CONTAINS_SCORE = 5.0
ADDRESS_PREFIX_SCORE = 8.0
ADDRESS_CONTAINS_SCORE = 3.0
LOCATIONS_PREFIX_SCORE = 7.0
LOCATIONS_CONTAINS_SCORE = 3.5
OWNER_NAME_CONTAINS_SCORE = 2.0
OWNER_HANDLE_CONTAINS_SCORE = 1.0


def normalize_query(query: str) -> str:
    """Trim and lowercase a search query."""
    return query.strip().lower()


def _field_score(
    value: Optional[str],
    query: str,
    prefix_score: Optional[float],
    contains_score: float,
) -> float:
    if not value:
        return 0.0
    value = value.lower()
    if query not in value:
        return 0.0
    if prefix_score is not None and value.startswith(query):
        return prefix_score
    return contains_score


class SearchService:
    """Filters items by fuzzy text match and orders them by relevance.

    Stateless apart from its settings; safe to share across threads.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize search service.

        Args:
            settings: Engine settings supplying the fuzzy threshold and recency
                decay window
        """
        self.settings = settings or Settings()

    def recency_bonus(self, created_at: Optional[datetime], now: datetime) -> float:
        """Linear decay from 1.0 at creation to 0 after the decay window.

        Naive timestamps are treated as UTC. Future timestamps are capped at 1.0.
        """
        if created_at is None:
            return 0.0
        days = (as_utc(now) - as_utc(created_at)).total_seconds() / SECONDS_PER_DAY
        bonus = 1.0 - days / self.settings.recency_decay_days
        return min(1.0, max(0.0, bonus))

    def score_item(
        self,
        item: Item,
        query: str,
        now: Optional[datetime] = None,
    ) -> float:
        """Calculate relevance score for sorting search results.

        Args:
            item: Item to score
            query: Search query
            now: Reference time for the recency bonus (defaults to current UTC)

        Returns:
            Relevance score (higher is better, never negative)
        """
        query = normalize_query(query)
        now = now or datetime.now(timezone.utc)

        score = 0.0
        if query:
            score += _field_score(item.title, query, TITLE_PREFIX_SCORE, TITLE_CONTAINS_SCORE)
            score += _field_score(item.address, query, ADDRESS_PREFIX_SCORE, ADDRESS_CONTAINS_SCORE)
            score += _field_score(
                item.locations, query, LOCATIONS_PREFIX_SCORE, LOCATIONS_CONTAINS_SCORE
            )
            score += _field_score(item.owner_display_name, query, None, OWNER_NAME_CONTAINS_SCORE)
            score += _field_score(item.owner_handle, query, None, OWNER_HANDLE_CONTAINS_SCORE)

        return score + self.recency_bonus(item.created_at, now)

    def score_all(
        self,
        items: Sequence[Item],
        query: str,
        now: Optional[datetime] = None,
    ) -> list[MatchScore]:
        """Score items and return them best first, ties in input order."""
        now = now or datetime.now(timezone.utc)
        scores = [
            MatchScore(item_id=item.id, relevance=self.score_item(item, query, now))
            for item in items
        ]
        scores.sort(key=lambda s: s.relevance, reverse=True)
        return scores

    def sort_by_relevance(
        self,
        items: Sequence[Item],
        query: str,
        now: Optional[datetime] = None,
    ) -> list[Item]:
        """Sort items by relevance, best first.

        The sort is stable so equal-score items keep their input order between
        renders.
        """
        now = now or datetime.now(timezone.utc)
        scored = [(self.score_item(item, query, now), item) for item in items]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [item for _, item in scored]

    def matches(self, item: Item, query: str, threshold: float) -> bool:
        """Whether any searchable field fuzzy-matches the query."""
        query = normalize_query(query)
        return any(
            contains_fuzzy(value, query, threshold)
            for value in item.searchable_fields()
        )

    def filter_items(
        self,
        items: Sequence[Item],
        query: str,
        threshold: Optional[float] = None,
    ) -> list[Item]:
        """Keep items where any text field fuzzy-matches the query.

        A blank query returns all items unchanged.

        Raises:
            InvalidThresholdError: If threshold is outside [0, 1]
        """
        threshold = validate_threshold(
            self.settings.fuzzy_threshold if threshold is None else threshold
        )
        if not normalize_query(query):
            return list(items)
        return [item for item in items if self.matches(item, query, threshold)]

    def filter_then_rank(
        self,
        items: Sequence[Item],
        query: str,
        fuzzy_threshold: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> list[Item]:
        """Fuzzy-filter items then order the survivors by relevance.

        Args:
            items: Candidate items
            query: Search text as typed
            fuzzy_threshold: Minimum field similarity (0-1), defaults to settings
            now: Reference time for the recency bonus

        Returns:
            Matching items, best first; all items unchanged for a blank query

        Raises:
            InvalidThresholdError: If fuzzy_threshold is outside [0, 1]
        """
        if not normalize_query(query):
            validate_threshold(
                self.settings.fuzzy_threshold if fuzzy_threshold is None else fuzzy_threshold
            )
            return list(items)

        matched = self.filter_items(items, query, fuzzy_threshold)
        ranked = self.sort_by_relevance(matched, query, now)

        logger.debug(
            "Search complete",
            query=normalize_query(query),
            candidate_count=len(items),
            match_count=len(ranked),
        )

        return ranked
