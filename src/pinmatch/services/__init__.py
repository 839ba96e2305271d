"""Services for PinMatch similarity, search and stacking passes."""

from pinmatch.services.duplicate_detection import (
    DuplicateDetectionService,
    duplicate_ids,
)
from pinmatch.services.embedding import (
    EmbeddingBackfillService,
    EmbeddingGenerator,
    embedding_stats,
)
from pinmatch.services.fuzzy import contains_fuzzy, levenshtein_distance, similarity
from pinmatch.services.search import SearchService
from pinmatch.services.similarity import SimilarityIndex
from pinmatch.services.stacking import StackingService

__all__ = [
    "DuplicateDetectionService",
    "EmbeddingBackfillService",
    "EmbeddingGenerator",
    "SearchService",
    "SimilarityIndex",
    "StackingService",
    "contains_fuzzy",
    "duplicate_ids",
    "embedding_stats",
    "levenshtein_distance",
    "similarity",
]
