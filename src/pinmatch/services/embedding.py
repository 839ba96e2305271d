"""Embedding backfill: compute missing fingerprints through an injected model."""

import dataclasses
import time
from collections.abc import Sequence
from typing import Callable, Optional, Protocol, runtime_checkable

import structlog

from pinmatch.config import Settings
from pinmatch.models.item import Fingerprint, Item
from pinmatch.models.results import BackfillReport, EmbeddingStats
from pinmatch.utils.retry import RetryableError, RetryConfig, retry_with_backoff

logger = structlog.get_logger(__name__)


@runtime_checkable
class EmbeddingGenerator(Protocol):
    """Image embedding model. May be slow and may fail.

    Implementations return None, or raise, when no fingerprint can be
    produced. Each deployment fixes and documents its fingerprint dimension.
    """

    def compute_fingerprint(self, image_bytes: bytes) -> Optional[Fingerprint]:
        ...


class EmbeddingFailedError(RetryableError):
    """Raised internally when the generator produced no fingerprint."""

    pass


def embedding_stats(items: Sequence[Item]) -> EmbeddingStats:
    """Report how many items carry a fingerprint."""
    total = len(items)
    with_fingerprints = sum(1 for item in items if item.fingerprint is not None)
    return EmbeddingStats(
        total_items=total,
        items_with_fingerprints=with_fingerprints,
        coverage=with_fingerprints / total if total else 0.0,
    )


class EmbeddingBackfillService:
    """Computes fingerprints for items that lack them, chunk by chunk.

    This is a caller-side batch helper around the comparison functions: it
    owns the retry policy for the embedding model and reports progress through
    a checkpoint callback so an interrupted run can resume without redoing
    completed chunks. Input items are never mutated; updated copies are handed
    to the checkpoint.
    """

    def __init__(
        self,
        generator: EmbeddingGenerator,
        settings: Optional[Settings] = None,
        retry_config: Optional[RetryConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize embedding backfill service.

        Args:
            generator: Embedding model used to compute fingerprints
            settings: Engine settings supplying chunk size and attempt count
            retry_config: Backoff timing between attempts; its retry count is
                replaced by ``settings.backfill_max_attempts - 1``
            sleep: Function used to wait between attempts
        """
        self.generator = generator
        self.settings = settings or Settings()
        self.retry_config = dataclasses.replace(
            retry_config or RetryConfig(),
            max_retries=self.settings.backfill_max_attempts - 1,
        )
        self._compute = retry_with_backoff(self.retry_config, sleep=sleep)(
            self._compute_once
        )

    def _compute_once(self, image_bytes: bytes) -> Fingerprint:
        fingerprint = self.generator.compute_fingerprint(image_bytes)
        if fingerprint is None:
            raise EmbeddingFailedError("Embedding generator returned no fingerprint")
        return tuple(float(x) for x in fingerprint)

    def compute(self, item: Item, image_bytes: bytes) -> Optional[Fingerprint]:
        """Compute one fingerprint, retrying per policy.

        Returns:
            The fingerprint, or None if every attempt failed
        """
        try:
            return self._compute(image_bytes)
        except Exception as e:
            logger.warning(
                "Failed to compute fingerprint",
                item_id=item.id,
                error=str(e),
            )
            return None

    def backfill(
        self,
        items: Sequence[Item],
        load_image: Callable[[Item], Optional[bytes]],
        checkpoint: Optional[Callable[[list[Item]], None]] = None,
    ) -> BackfillReport:
        """Compute fingerprints for every item that lacks one.

        Args:
            items: Items to visit, in processing order
            load_image: Returns an item's image bytes, or None if unavailable
            checkpoint: Called after every chunk (and at the end) with the
                items updated since the previous checkpoint

        Returns:
            Counts of computed, skipped and failed items
        """
        chunk_size = self.settings.backfill_chunk_size
        report = BackfillReport()
        pending: list[Item] = []
        started = time.perf_counter()

        logger.info(
            "Starting embedding backfill",
            item_count=len(items),
            chunk_size=chunk_size,
        )

        for item in items:
            report.processed += 1

            if item.fingerprint is not None:
                report.skipped += 1
            else:
                image_bytes = load_image(item)
                if image_bytes is None:
                    logger.debug("No image available", item_id=item.id)
                    report.skipped += 1
                else:
                    fingerprint = self.compute(item, image_bytes)
                    if fingerprint is None:
                        report.failed += 1
                        report.failed_ids.append(item.id)
                    else:
                        report.computed += 1
                        pending.append(item.model_copy(update={"fingerprint": fingerprint}))

            if report.processed % chunk_size == 0:
                self._checkpoint(checkpoint, pending, item, report)
                pending = []

        if items and report.processed % chunk_size != 0:
            self._checkpoint(checkpoint, pending, items[-1], report)

        logger.info(
            "Embedding backfill complete",
            processed=report.processed,
            computed=report.computed,
            skipped=report.skipped,
            failed=report.failed,
            elapsed_seconds=round(time.perf_counter() - started, 3),
        )

        return report

    def stats(self, items: Sequence[Item]) -> EmbeddingStats:
        """Report fingerprint coverage over ``items``."""
        return embedding_stats(items)

    @staticmethod
    def _checkpoint(
        checkpoint: Optional[Callable[[list[Item]], None]],
        updated: list[Item],
        last_item: Item,
        report: BackfillReport,
    ) -> None:
        if checkpoint is not None:
            checkpoint(updated)
        report.last_checkpoint_id = last_item.id
        logger.debug(
            "Backfill checkpoint",
            processed=report.processed,
            updated_count=len(updated),
            last_item_id=last_item.id,
        )
