"""Edit-distance similarity between two texts."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit-cost insert, delete and substitute."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Similarity percentage in [0, 100].

    ``(max_len - distance) / max_len * 100``.  Two empty strings are
    identical by vacuity and score 100.0.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0
    score = (max_len - edit_distance(a, b)) / max_len * 100
    return min(100.0, max(0.0, score))
