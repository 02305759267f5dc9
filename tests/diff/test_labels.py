"""Tests for levenshtein_distance and the LRU-backed LabelSimilarity."""

from __future__ import annotations

import pytest

from repr_tree.diff.labels import LabelSimilarity, levenshtein_distance


class TestLevenshtein:
    """levenshtein_distance."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("", "", 0),
            ("abc", "abc", 0),
            ("", "abc", 3),
            ("abc", "", 3),
            ("kitten", "sitting", 3),
            ("Point", "Pint", 1),
            ("flaw", "lawn", 2),
        ],
    )
    def test_distance(self, a: str, b: str, expected: int) -> None:
        """Classic edit distances, including empty strings."""
        assert levenshtein_distance(a, b) == expected

    def test_symmetric(self) -> None:
        """Distance does not depend on argument order."""
        assert levenshtein_distance("Some", "None") == levenshtein_distance("None", "Some")


class TestLabelSimilarity:
    """Normalised label similarity and its LRU cache."""

    def test_identical_labels(self) -> None:
        """Equal labels score 1.0."""
        assert LabelSimilarity().similarity("Point", "Point") == 1.0

    def test_both_missing(self) -> None:
        """Two missing labels are equal."""
        assert LabelSimilarity().similarity(None, None) == 1.0

    def test_one_missing(self) -> None:
        """A missing label against a present one scores 0.0."""
        labels = LabelSimilarity()
        assert labels.similarity(None, "x") == 0.0
        assert labels.similarity("x", None) == 0.0

    def test_partial_similarity(self) -> None:
        """One edit in five characters scores 0.8."""
        assert LabelSimilarity().similarity("Point", "Pint") == pytest.approx(0.8)

    def test_unrelated_single_chars(self) -> None:
        """Two different one-character labels score 0.0."""
        assert LabelSimilarity().similarity("x", "y") == 0.0

    def test_results_are_cached_once_per_unordered_pair(self) -> None:
        """(a, b) and (b, a) share one cache entry."""
        labels = LabelSimilarity()
        labels.similarity("alpha", "beta")
        labels.similarity("beta", "alpha")
        assert labels.curr_size == 1

    def test_identical_labels_are_not_cached(self) -> None:
        """The equal-label shortcut skips the cache."""
        labels = LabelSimilarity()
        labels.similarity("x", "x")
        assert labels.curr_size == 0

    def test_lru_eviction_is_silent(self) -> None:
        """The cache stays at max_size without errors."""
        labels = LabelSimilarity(max_size=2)
        labels.similarity("a", "b")
        labels.similarity("a", "c")
        labels.similarity("a", "d")
        assert labels.max_size == 2
        assert labels.curr_size == 2

    def test_separate_instances_do_not_share(self) -> None:
        """Each LabelSimilarity owns its cache."""
        first, second = LabelSimilarity(), LabelSimilarity()
        first.similarity("a", "b")
        assert second.curr_size == 0
