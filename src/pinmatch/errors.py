"""Typed, recoverable errors raised by the similarity and search engine."""

from typing import Optional


class PinMatchError(Exception):
    """Base exception for engine errors."""

    pass


class DimensionMismatchError(PinMatchError):
    """Raised when two fingerprints of different lengths are compared."""

    def __init__(self, expected: int, actual: int, item_id: Optional[str] = None):
        message = f"Fingerprint dimension mismatch: expected {expected}, got {actual}"
        if item_id is not None:
            message += f" (item {item_id})"
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.item_id = item_id


class CorruptDataError(PinMatchError):
    """Raised when serialized fingerprint bytes cannot be decoded."""

    def __init__(self, message: str = "Serialized fingerprint data is corrupt"):
        super().__init__(message)
        self.message = message


class InvalidThresholdError(PinMatchError):
    """Raised when a similarity threshold falls outside [0, 1]."""

    def __init__(self, threshold: float):
        super().__init__(f"Threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold


def validate_threshold(threshold: float) -> float:
    """Check a threshold lies in [0, 1].

    Args:
        threshold: Threshold to check

    Returns:
        The threshold unchanged

    Raises:
        InvalidThresholdError: If threshold is outside [0, 1] or NaN
    """
    if not 0.0 <= threshold <= 1.0:
        raise InvalidThresholdError(threshold)
    return threshold
