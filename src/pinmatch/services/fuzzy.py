"""Approximate string matching based on Levenshtein edit distance."""

from rapidfuzz.distance import Levenshtein

# Queries shorter than this only match by exact containment
MIN_FUZZY_QUERY_LENGTH = 2

DEFAULT_FUZZY_THRESHOLD = 0.6


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum insertions, deletions and substitutions turning ``a`` into ``b``."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Edit similarity normalized by the longer string, in [0, 1].

    Two empty strings score 1.0.
    """
    return Levenshtein.normalized_similarity(a, b)


def contains_fuzzy(
    text: str,
    query: str,
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> bool:
    """Case-insensitive approximate containment of ``query`` in ``text``.

    Exact substring containment always matches. Otherwise the whole-string
    normalized edit similarity must reach ``threshold``; single-character
    queries never match fuzzily.

    Args:
        text: Text to search in
        query: Search query
        threshold: Minimum similarity (0-1)

    Returns:
        False for empty inputs or a threshold outside [0, 1]
    """
    if not text or not query:
        return False
    if not 0.0 <= threshold <= 1.0:
        return False

    text = text.lower()
    query = query.lower()

    if query in text:
        return True

    if len(query) < MIN_FUZZY_QUERY_LENGTH:
        return False

    return similarity(text, query) >= threshold
