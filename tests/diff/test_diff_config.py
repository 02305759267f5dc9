"""Tests for DiffConfig frozen dataclass and ChildMatching StrEnum.

Covers:
- Default values (w_s=0.5, w_c=0.5, lambda_unmatched=0.1, AUTO, no coercion)
- Immutability (FrozenInstanceError on assignment)
- Validation: weights in [0, 1] summing to 1.0, lambda_unmatched >= 0.0
- ChildMatching has exactly three values: ordered, unordered, auto
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from repr_tree.diff.config import ChildMatching, DiffConfig


class TestChildMatching:
    """ChildMatching members."""

    def test_has_exactly_three_members(self) -> None:
        """ChildMatching has ORDERED, UNORDERED and AUTO."""
        assert len(list(ChildMatching)) == 3

    def test_values(self) -> None:
        """Member values are the lowercased names."""
        assert ChildMatching.ORDERED == "ordered"
        assert ChildMatching.UNORDERED == "unordered"
        assert ChildMatching.AUTO == "auto"


class TestDiffConfigDefaults:
    """Default values and immutability."""

    def test_defaults(self) -> None:
        """Defaults are equal weights, lambda 0.1, AUTO matching and no numeric coercion."""
        config = DiffConfig()
        assert config.w_s == 0.5
        assert config.w_c == 0.5
        assert config.lambda_unmatched == 0.1
        assert config.child_matching == ChildMatching.AUTO
        assert config.numeric_coercion is False

    def test_frozen(self) -> None:
        """DiffConfig is immutable."""
        config = DiffConfig()
        with pytest.raises(FrozenInstanceError):
            config.w_s = 0.7  # type: ignore[misc]


class TestDiffConfigValidation:
    """__post_init__ validation."""

    def test_custom_weights(self) -> None:
        """Weights other than 0.5/0.5 are accepted when they sum to 1."""
        config = DiffConfig(w_s=0.7, w_c=0.3)
        assert config.w_s == 0.7

    def test_weights_must_sum_to_one(self) -> None:
        """w_s + w_c must be 1.0."""
        with pytest.raises(ValueError, match="sum to 1.0"):
            DiffConfig(w_s=0.6, w_c=0.6)

    @pytest.mark.parametrize(("w_s", "w_c"), [(-0.1, 1.1), (1.1, -0.1)])
    def test_weights_must_be_in_unit_interval(self, w_s: float, w_c: float) -> None:
        """Each weight must lie in [0, 1]."""
        with pytest.raises(ValueError, match="must be in"):
            DiffConfig(w_s=w_s, w_c=w_c)

    def test_lambda_must_be_non_negative(self) -> None:
        """A negative unmatched penalty is rejected."""
        with pytest.raises(ValueError, match="lambda_unmatched"):
            DiffConfig(lambda_unmatched=-0.5)

    def test_child_matching_string_is_coerced(self) -> None:
        """A plain string is coerced to ChildMatching."""
        config = DiffConfig(child_matching="ordered")  # type: ignore[arg-type]
        assert config.child_matching is ChildMatching.ORDERED

    def test_unknown_child_matching(self) -> None:
        """An unknown child_matching is a ValueError naming the field."""
        with pytest.raises(ValueError, match="child_matching"):
            DiffConfig(child_matching="random")  # type: ignore[arg-type]
