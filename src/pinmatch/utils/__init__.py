"""Utility modules for PinMatch."""

from pinmatch.utils.dates import as_utc
from pinmatch.utils.geo import EARTH_RADIUS_METERS, format_distance, haversine_distance
from pinmatch.utils.retry import RetryableError, RetryConfig, retry_with_backoff
from pinmatch.utils.vector_math import (
    cosine_similarity,
    deserialize,
    hamming_distance,
    serialize,
)

__all__ = [
    # Vector math
    "cosine_similarity",
    "serialize",
    "deserialize",
    "hamming_distance",
    # Dates and geography
    "as_utc",
    "EARTH_RADIUS_METERS",
    "haversine_distance",
    "format_distance",
    # Retry utilities
    "RetryConfig",
    "RetryableError",
    "retry_with_backoff",
]
