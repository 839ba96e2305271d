"""Fingerprint vector primitives: cosine similarity and byte (de)serialization."""

from collections.abc import Sequence

import numpy as np

from pinmatch.errors import CorruptDataError, DimensionMismatchError

# Little-endian IEEE-754 single precision
FLOAT32_LE = np.dtype("<f4")
_UINT64_MASK = (1 << 64) - 1


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two fingerprints.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Similarity in [-1, 1]; 0.0 if either vector has zero magnitude or
        holds a non-finite component

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    dot = float(np.dot(va, vb))
    # Corrupt stored fingerprints can carry NaN or inf
    if not np.isfinite([dot, norm_a, norm_b]).all():
        return 0.0
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = dot / (norm_a * norm_b)
    return max(-1.0, min(1.0, score))


def serialize(vector: Sequence[float]) -> bytes:
    """Encode a fingerprint as little-endian 32-bit floats.

    Args:
        vector: Fingerprint values

    Returns:
        Raw bytes, 4 per component
    """
    return np.asarray(vector, dtype=FLOAT32_LE).tobytes()


def deserialize(data: bytes) -> tuple[float, ...]:
    """Decode bytes written by :func:`serialize`.

    Args:
        data: Raw little-endian float32 bytes

    Returns:
        Fingerprint as a tuple of floats

    Raises:
        CorruptDataError: If the length is not a multiple of 4
    """
    if len(data) % FLOAT32_LE.itemsize != 0:
        raise CorruptDataError(
            f"Fingerprint byte length {len(data)} is not a multiple of {FLOAT32_LE.itemsize}"
        )
    return tuple(float(x) for x in np.frombuffer(data, dtype=FLOAT32_LE))


def hamming_distance(a: int, b: int) -> int:
    """Count differing bits between two 64-bit perceptual hashes.

    Signed hashes are accepted; both values are taken modulo 2**64.
    """
    return bin((a ^ b) & _UINT64_MASK).count("1")
