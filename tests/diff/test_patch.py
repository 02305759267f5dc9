"""Tests for ReprDiffer, apply_patch and list_changes.

The central law is ``apply_patch(a, diff(a, b)) == b``; it is checked over
pairs that exercise every edit kind and every variant.
"""

from __future__ import annotations

import pytest

from repr_tree.diff.patch import (
    Change,
    Edit,
    EditKind,
    ReprDiffer,
    apply_patch,
    list_changes,
    same_shape,
)
from repr_tree.errors import PatchError
from repr_tree.tree import build as r
from repr_tree.tree.nodes import Prop, Repr


@pytest.fixture
def differ() -> ReprDiffer:
    return ReprDiffer()


PAIRS: list[tuple[str, Repr, Repr]] = [
    ("equal", r.int_(1), r.int_(1)),
    ("leaf-change", r.int_(1), r.int_(2)),
    ("kind-change", r.unit(), r.record({})),
    ("append", r.tuple_([r.int_(1)]), r.tuple_([r.int_(1), r.int_(2)])),
    ("drop-first", r.tuple_([r.int_(1), r.int_(2)]), r.tuple_([r.int_(2)])),
    ("unit-to-items", r.unit(), r.tuple_([r.string("a"), r.string("b")])),
    (
        "record-value",
        r.record({"x": r.int_(1), "y": r.int_(2)}),
        r.record({"x": r.int_(1), "y": r.int_(3)}),
    ),
    (
        "record-rename",
        r.record({"x": r.int_(1)}),
        r.record({"z": r.int_(1)}),
    ),
    (
        "record-reorder",
        r.record({"x": r.int_(1), "y": r.int_(2)}),
        r.record({"y": r.int_(2), "x": r.int_(1)}),
    ),
    ("ctor-tag", r.ctor("Some", [r.int_(1)]), r.ctor("None")),
    (
        "ctor-nested",
        r.ctor("Point", [r.arg("x", r.int_(1)), r.arg("tags", r.tuple_([r.string("a")]))]),
        r.ctor(
            "Point",
            [r.arg("x", r.int_(1)), r.arg("tags", r.tuple_([r.string("a"), r.string("b")]))],
        ),
    ),
    (
        "arg-relabel",
        r.ctor("A", [r.arg("x", r.int_(1))]),
        r.ctor("A", [r.arg(r.int_(1))]),
    ),
    (
        "assoc-insert",
        r.assoc("Map", [(r.string("a"), r.int_(1))]),
        r.assoc("Map", [(r.string("a"), r.int_(1)), (r.string("b"), r.int_(2))]),
    ),
    (
        "assoc-key-change",
        r.assoc("Map", [(r.string("a"), r.int_(1))]),
        r.assoc("Map", [(r.string("b"), r.int_(1))]),
    ),
    ("opaque", r.opaque("fn", "<a>"), r.opaque("fn", "<b>")),
]


class TestPatchLaw:
    """The apply-after-diff law."""

    @pytest.mark.parametrize(
        ("left", "right"), [(a, b) for _, a, b in PAIRS], ids=[n for n, _, _ in PAIRS]
    )
    def test_apply_diff_yields_right(
        self, differ: ReprDiffer, left: Repr, right: Repr
    ) -> None:
        """apply_patch(a, diff(a, b)) == b for every sample pair."""
        assert apply_patch(left, differ.diff(left, right)) == right

    @pytest.mark.parametrize(
        ("left", "right"), [(a, b) for _, a, b in PAIRS], ids=[n for n, _, _ in PAIRS]
    )
    def test_strict_apply_accepts_its_own_patch(
        self, differ: ReprDiffer, left: Repr, right: Repr
    ) -> None:
        """A patch always passes strict checks against its own left tree."""
        assert apply_patch(left, differ.diff(left, right), strict=True) == right


class TestEditShapes:
    """Which edit kinds the differ produces."""

    def test_equal_trees_keep(self, differ: ReprDiffer) -> None:
        """Equal trees give KEEP, and applying it returns the input."""
        tree = r.record({"x": r.int_(1)})
        edit = differ.diff(tree, r.record({"x": r.int_(1)}))
        assert edit.kind == EditKind.KEEP
        assert apply_patch(tree, edit) is tree

    def test_leaf_change_replaces(self, differ: ReprDiffer) -> None:
        """A changed leaf is replaced wholesale."""
        edit = differ.diff(r.int_(1), r.int_(2))
        assert edit == Edit(EditKind.REPLACE, r.int_(1), r.int_(2))

    def test_append_is_keep_then_insert(self, differ: ReprDiffer) -> None:
        """Appending an item keeps the old one and inserts the new."""
        edit = differ.diff(r.tuple_([r.int_(1)]), r.tuple_([r.int_(1), r.int_(2)]))
        assert edit.kind == EditKind.UPDATE
        assert [c.kind for c in edit.children] == [EditKind.KEEP, EditKind.INSERT]
        assert edit.children[1].new == r.int_(2)

    def test_drop_first_is_delete_then_keep(self, differ: ReprDiffer) -> None:
        """Dropping the first item deletes it and keeps the rest."""
        edit = differ.diff(r.tuple_([r.int_(1), r.int_(2)]), r.tuple_([r.int_(2)]))
        assert [c.kind for c in edit.children] == [EditKind.DELETE, EditKind.KEEP]

    def test_fixed_arity_nodes_diff_positionally(self, differ: ReprDiffer) -> None:
        """A Prop's value is diffed in place."""
        edit = differ.diff(Prop("x", r.int_(1)), Prop("x", r.int_(2)))
        assert edit.kind == EditKind.UPDATE
        assert edit.children == (Edit(EditKind.REPLACE, r.int_(1), r.int_(2)),)

    def test_renamed_prop_is_replaced(self, differ: ReprDiffer) -> None:
        """A renamed field is not the same shape, so it is replaced."""
        edit = differ.diff(r.record({"x": r.int_(1)}), r.record({"z": r.int_(1)}))
        assert [c.kind for c in edit.children] == [EditKind.REPLACE]


class TestSameShape:
    """same_shape() decides between UPDATE and REPLACE."""

    def test_leaves_need_equality(self) -> None:
        """Leaves have the same shape only when equal."""
        assert same_shape(r.int_(1), r.int_(1))
        assert not same_shape(r.int_(1), r.int_(2))

    def test_labels_must_match(self) -> None:
        """Labelled nodes need equal labels; child counts may differ."""
        assert same_shape(r.ctor("A", [r.int_(1)]), r.ctor("A"))
        assert not same_shape(r.ctor("A"), r.ctor("B"))

    def test_variants_must_match(self) -> None:
        """Different variants never have the same shape."""
        assert not same_shape(r.unit(), r.ctor("A"))


class TestListChanges:
    """Flattened changes and their paths."""

    def test_keep_has_no_changes(self, differ: ReprDiffer) -> None:
        """A KEEP patch flattens to nothing."""
        assert list_changes(differ.diff(r.unit(), r.unit())) == []

    def test_root_replace(self, differ: ReprDiffer) -> None:
        """A root REPLACE has empty paths on both sides."""
        (change,) = list_changes(differ.diff(r.int_(1), r.int_(2)))
        assert change.kind == EditKind.REPLACE
        assert change.left_path == ()
        assert change.right_path == ()

    def test_nested_replace_paths(self, differ: ReprDiffer) -> None:
        """Paths lead from the root to the changed leaf."""
        left = r.record({"x": r.int_(1), "y": r.int_(2)})
        right = r.record({"x": r.int_(1), "y": r.int_(3)})
        (change,) = list_changes(differ.diff(left, right))
        assert change.left_path == (1, 0)
        assert change.right_path == (1, 0)
        assert (change.old, change.new) == (r.int_(2), r.int_(3))

    def test_insert_and_delete_paths(self, differ: ReprDiffer) -> None:
        """DELETE carries a left path and INSERT a right path."""
        left = r.tuple_([r.string("x"), r.int_(1), r.int_(2), r.int_(3)])
        right = r.tuple_([r.int_(1), r.int_(2), r.int_(3), r.bool_(True)])
        changes = list_changes(differ.diff(left, right))
        assert changes == [
            Change(EditKind.DELETE, (0,), None, r.string("x"), None),
            Change(EditKind.INSERT, None, (3,), None, r.bool_(True)),
        ]
        assert apply_patch(left, differ.diff(left, right)) == right


class TestApplyErrors:
    """Scripts that do not fit the target tree."""

    def test_insert_at_root_is_rejected(self) -> None:
        """INSERT cannot be the root edit."""
        with pytest.raises(PatchError, match="only valid inside"):
            apply_patch(r.unit(), Edit(EditKind.INSERT, new=r.int_(1)))

    def test_script_longer_than_children(self, differ: ReprDiffer) -> None:
        """A script for more children than present is rejected."""
        patch = differ.diff(r.tuple_([r.int_(1), r.int_(2)]), r.tuple_([r.int_(1), r.int_(3)]))
        with pytest.raises(PatchError, match="consumes more"):
            apply_patch(r.tuple_([r.int_(1)]), patch)

    def test_script_shorter_than_children(self, differ: ReprDiffer) -> None:
        """Leftover children are rejected."""
        patch = differ.diff(r.tuple_([r.int_(1)]), r.tuple_([r.int_(2)]))
        with pytest.raises(PatchError, match="unconsumed"):
            apply_patch(r.tuple_([r.int_(1), r.int_(5)]), patch)

    def test_strict_detects_a_different_target(self, differ: ReprDiffer) -> None:
        """Strict mode checks the REPLACE target; lenient mode does not."""
        patch = differ.diff(r.int_(1), r.int_(2))
        assert apply_patch(r.int_(5), patch) == r.int_(2)
        with pytest.raises(PatchError, match="expects"):
            apply_patch(r.int_(5), patch, strict=True)

    def test_strict_detects_a_different_deleted_child(self, differ: ReprDiffer) -> None:
        """Strict mode checks what a DELETE removes."""
        patch = differ.diff(r.tuple_([r.int_(1), r.int_(2)]), r.tuple_([r.int_(2)]))
        with pytest.raises(PatchError, match="DELETE"):
            apply_patch(r.tuple_([r.int_(7), r.int_(2)]), patch, strict=True)

    def test_strict_detects_a_different_variant(self, differ: ReprDiffer) -> None:
        """Strict mode checks the UPDATE target's shape."""
        patch = differ.diff(r.tuple_([r.int_(1)]), r.tuple_([r.int_(2)]))
        with pytest.raises(PatchError):
            apply_patch(r.ctor("A", [r.int_(1)]), patch, strict=True)

    def test_patch_error_is_a_value_error(self) -> None:
        """PatchError subclasses ValueError."""
        with pytest.raises(ValueError):
            apply_patch(r.unit(), Edit(EditKind.DELETE, old=r.unit()))


def _cons_list(n: int, last: int | None = None) -> Repr:
    node: Repr = r.ctor("Nil")
    for i in reversed(range(n)):
        head = last if last is not None and i == n - 1 else i
        node = r.ctor("Cons", [r.int_(head), node])
    return node


class TestDeepTrees:
    """Diffing, applying and flattening use explicit stacks."""

    DEEP = 2000

    def test_equal_deep_lists_keep(self, differ: ReprDiffer) -> None:
        """Equal lists give a single KEEP at the root."""
        edit = differ.diff(_cons_list(self.DEEP), _cons_list(self.DEEP))
        assert edit.kind == EditKind.KEEP

    def test_change_at_the_bottom(self, differ: ReprDiffer) -> None:
        """The innermost head is replaced and the patch rebuilds the right list."""
        left = _cons_list(self.DEEP)
        right = _cons_list(self.DEEP, last=-1)
        patch = differ.diff(left, right)
        path = (1,) * (self.DEEP - 1) + (0,)
        assert list_changes(patch) == [
            Change(EditKind.REPLACE, path, path, r.int_(self.DEEP - 1), r.int_(-1))
        ]
        assert apply_patch(left, patch, strict=True) == right

    def test_deep_patches_compare_equal(self, differ: ReprDiffer) -> None:
        """Two diffs of the same deep pair are equal patches with equal hashes."""
        left = _cons_list(self.DEEP)
        right = _cons_list(self.DEEP, last=-1)
        first = differ.diff(left, right)
        second = differ.diff(left, right)
        assert first == second
        assert hash(first) == hash(second)
        assert first != differ.diff(left, left)
