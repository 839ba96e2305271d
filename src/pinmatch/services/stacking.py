"""Stacking service: time-window photo stacks and distance filtering."""

from collections.abc import Sequence
from datetime import datetime
from typing import Optional

import structlog

from pinmatch.config import Settings
from pinmatch.errors import DimensionMismatchError, validate_threshold
from pinmatch.models.item import Item
from pinmatch.models.results import Stack
from pinmatch.utils.dates import as_utc
from pinmatch.utils.geo import haversine_distance
from pinmatch.utils.vector_math import cosine_similarity

logger = structlog.get_logger(__name__)


def _stack_of(members: list[Item]) -> Stack:
    return Stack(
        item_ids=tuple(m.id for m in members),
        created_at=members[0].created_at,
    )


class StackingService:
    """Groups items into stacks and selects items by distance.

    Stacks are a derived view recomputed from scratch on each call.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize stacking service.

        Args:
            settings: Engine settings supplying default window, stack size and
                similarity-stacking parameters
        """
        self.settings = settings or Settings()

    def stack(
        self,
        items: Sequence[Item],
        time_window_seconds: Optional[float] = None,
        max_stack_size: Optional[int] = None,
    ) -> list[Stack]:
        """Group items by capture time.

        Items are ordered most recent first; a new stack starts whenever the
        gap to the previous item exceeds the window or the current stack is
        full. Items without a timestamp follow, one stack each.

        Args:
            items: Items to stack
            time_window_seconds: Maximum gap within a stack, defaults to settings
            max_stack_size: Maximum members per stack, defaults to settings
                (unbounded if unset)

        Returns:
            Stacks, most recent first

        Raises:
            ValueError: If the window is negative or the size cap is below 1
        """
        window = (
            self.settings.stack_time_window_seconds
            if time_window_seconds is None
            else time_window_seconds
        )
        if window < 0:
            raise ValueError(f"time_window_seconds must be non-negative, got {window}")
        if max_stack_size is None:
            max_stack_size = self.settings.stack_max_size
        if max_stack_size is not None and max_stack_size < 1:
            raise ValueError(f"max_stack_size must be at least 1, got {max_stack_size}")

        dated = [item for item in items if item.created_at is not None]
        undated = [item for item in items if item.created_at is None]
        dated.sort(key=lambda item: as_utc(item.created_at), reverse=True)

        stacks: list[Stack] = []
        current: list[Item] = []
        previous_time: Optional[datetime] = None

        for item in dated:
            if previous_time is not None:
                gap = abs((previous_time - as_utc(item.created_at)).total_seconds())
                full = max_stack_size is not None and len(current) >= max_stack_size
                if gap > window or full:
                    stacks.append(_stack_of(current))
                    current = []
            current.append(item)
            previous_time = as_utc(item.created_at)

        if current:
            stacks.append(_stack_of(current))

        stacks.extend(_stack_of([item]) for item in undated)

        logger.debug(
            "Built time stacks",
            item_count=len(items),
            stack_count=len(stacks),
            window_seconds=window,
        )

        return stacks

    def similarity_stack(
        self,
        items: Sequence[Item],
        threshold: Optional[float] = None,
        window: Optional[int] = None,
    ) -> list[Stack]:
        """Stack consecutive near-identical photos, preserving input order.

        Each unplaced item seeds a stack and absorbs the following items, up to
        ``window`` of them, while each is more similar to the seed than
        ``threshold``. The first miss, already-placed item, or missing
        fingerprint ends the run. Every item appears in exactly one stack.

        Raises:
            InvalidThresholdError: If threshold is outside [0, 1]
            ValueError: If window is negative
        """
        threshold = validate_threshold(
            self.settings.similarity_stack_threshold if threshold is None else threshold
        )
        if window is None:
            window = self.settings.similarity_stack_window
        if window < 0:
            raise ValueError(f"window must be non-negative, got {window}")

        stacks: list[Stack] = []
        placed: set[str] = set()

        for i, seed in enumerate(items):
            if seed.id in placed:
                continue

            members = [seed]
            placed.add(seed.id)

            for following in items[i + 1 : i + 1 + window]:
                if following.id in placed:
                    break
                if seed.fingerprint is None or following.fingerprint is None:
                    break
                try:
                    score = cosine_similarity(seed.fingerprint, following.fingerprint)
                except DimensionMismatchError:
                    logger.warning(
                        "Cannot compare fingerprints of different dimension",
                        seed_id=seed.id,
                        item_id=following.id,
                    )
                    break
                if score <= threshold:
                    break
                members.append(following)
                placed.add(following.id)

            stacks.append(_stack_of(members))

        logger.debug(
            "Built similarity stacks",
            item_count=len(items),
            stack_count=len(stacks),
            multi_photo_stacks=sum(1 for s in stacks if not s.is_single),
        )

        return stacks

    def filter_by_distance(
        self,
        items: Sequence[Item],
        center: tuple[float, float],
        max_meters: float,
    ) -> list[Item]:
        """Keep items within ``max_meters`` (inclusive) of ``center``.

        Items without coordinates are excluded. Input order is preserved.
        """
        if max_meters < 0:
            return []
        return [
            item
            for item in items
            if item.coordinates is not None
            and haversine_distance(center, item.coordinates) <= max_meters
        ]

    def sort_by_distance(
        self,
        items: Sequence[Item],
        center: tuple[float, float],
    ) -> list[Item]:
        """Order located items nearest first; items without coordinates are dropped."""
        located = [
            (haversine_distance(center, item.coordinates), item)
            for item in items
            if item.coordinates is not None
        ]
        located.sort(key=lambda pair: pair[0])
        return [item for _, item in located]
