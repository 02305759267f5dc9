"""pytest plugin for repr-tree.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from repr_tree import DiffConfig, compare


@pytest.fixture(scope="session")
def assert_repr_equal() -> Any:
    """Fixture that returns a callable Repr tree asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh ReprComparator per call).

    Usage in tests::

        def test_point(assert_repr_equal):
            assert_repr_equal(actual_tree, expected_tree)

        def test_close_enough(assert_repr_equal):
            assert_repr_equal(actual_tree, expected_tree, threshold=0.8)

    Returns:
        A callable ``_assert(actual, expected, threshold=1.0, config=None) -> None``
        that raises ``AssertionError`` when the trees differ (threshold 1.0) or
        score below ``threshold``.
    """

    def _assert(
        actual: Any,
        expected: Any,
        threshold: float = 1.0,
        config: DiffConfig | None = None,
    ) -> None:
        """Assert that two Repr trees are equal, or at least ``threshold`` similar.

        Raises:
            AssertionError: With the similarity score, threshold and one line
                per REPLACE/INSERT/DELETE change.
        """
        if actual == expected:
            return
        result = compare(actual, expected, config=config)
        if threshold < 1.0 and result.similarity_score >= threshold:
            return
        lines = [
            f"Repr trees differ: "
            f"similarity={result.similarity_score:.4f} threshold={threshold}",
        ]
        for change in result.changes:
            lines.append(
                f"  {change.kind} left={change.left_path} right={change.right_path}: "
                f"{change.old!r} -> {change.new!r}"
            )
        raise AssertionError("\n".join(lines))

    return _assert
