"""LabelSimilarity: cached edit-distance similarity between node labels.

Labels are the non-child strings that identify a node: field names, argument
labels, constructor and assoc tags.  Two labels are compared with normalised
Levenshtein similarity::

    1.0 - levenshtein(a, b) / max(len(a), len(b), 1)

Results are memoised in a per-instance ``cachetools.LRUCache``; eviction is
silent once ``max_size`` entries are held.
"""

from __future__ import annotations

from cachetools import LRUCache

__all__ = ["LabelSimilarity", "levenshtein_distance"]


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the Levenshtein (edit) distance between two strings.

    Uses a rolling single-row DP with the shorter string on the inner loop.
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    prev_row = list(range(len(b) + 1))
    for i, ch_a in enumerate(a):
        curr_row = [i + 1] + [0] * len(b)
        for j, ch_b in enumerate(b):
            curr_row[j + 1] = min(
                curr_row[j] + 1,
                prev_row[j + 1] + 1,
                prev_row[j] + (ch_a != ch_b),
            )
        prev_row = curr_row
    return prev_row[-1]


class LabelSimilarity:
    """Label similarity in [0, 1] with an LRU memo.

    ``None`` stands for "no label" (positional Arg, unlabelled variants): two
    missing labels are identical, a missing label against a present one
    scores 0.0.

    Example::

        labels = LabelSimilarity(max_size=256)
        labels.similarity("Point", "Point")   # 1.0
        labels.similarity("Point", "Pint")    # 0.8
        labels.similarity(None, "x")          # 0.0
    """

    def __init__(self, max_size: int = 512) -> None:
        self._cache: LRUCache[tuple[str, str], float] = LRUCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        """The maximum number of label pairs this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of label pairs stored in the cache."""
        return int(self._cache.currsize)

    def similarity(self, a: str | None, b: str | None) -> float:
        if a == b:
            return 1.0
        if a is None or b is None:
            return 0.0
        # Symmetric: store each unordered pair once.
        key = (a, b) if a <= b else (b, a)
        cached = self._cache.get(key)
        if cached is None:
            cached = 1.0 - levenshtein_distance(a, b) / max(len(a), len(b), 1)
            self._cache[key] = cached
        return cached
