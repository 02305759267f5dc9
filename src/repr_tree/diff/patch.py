"""Edit scripts between Repr trees.

``ReprDiffer.diff(left, right)`` returns a patch tree of ``Edit`` nodes that
mirrors the left tree:

- KEEP:    the subtree is unchanged.
- REPLACE: the subtree is swapped for ``new`` wholesale.
- UPDATE:  same variant and label on both sides; ``children`` holds one edit
           script over the node's children.
- INSERT:  (child scripts only) ``new`` is inserted at this position.
- DELETE:  (child scripts only) the next left child is dropped.

``apply_patch`` rebuilds the tree through ``with_children`` only, so it is
variant-agnostic.  Law: ``apply_patch(a, differ.diff(a, b)) == b``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum, auto

from repr_tree.diff.matcher import AlignOp, align_sequence
from repr_tree.diff.similarity import ReprSimilarity, SimilarityMemo
from repr_tree.errors import PatchError
from repr_tree.tree.nodes import Repr
from repr_tree.tree.traversal import Path, is_leaf, label

__all__ = [
    "Change",
    "Edit",
    "EditKind",
    "ReprDiffer",
    "apply_patch",
    "list_changes",
    "same_shape",
]


class EditKind(StrEnum):
    KEEP = auto()
    REPLACE = auto()
    UPDATE = auto()
    INSERT = auto()
    DELETE = auto()


@dataclass(frozen=True, slots=True, eq=False)
class Edit:
    """One node of a patch tree.

    Attributes:
        kind:     What happens at this position (see EditKind).
        old:      The left subtree (None for INSERT).
        new:      The right subtree (None for DELETE).
        children: Child edit script; only non-empty for UPDATE.
    """

    kind: EditKind
    old: Repr | None = None
    new: Repr | None = None
    children: tuple[Edit, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edit):
            return NotImplemented
        stack: list[tuple[Edit, Edit]] = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            if (a.kind, a.old, a.new) != (b.kind, b.old, b.new):
                return False
            if len(a.children) != len(b.children):
                return False
            stack.extend(zip(a.children, b.children, strict=True))
        return True

    def __hash__(self) -> int:
        return hash((self.kind, self.old, self.new, len(self.children)))


@dataclass(frozen=True, slots=True)
class Change:
    """A flattened non-KEEP edit.

    Attributes:
        kind:       REPLACE, INSERT or DELETE.
        left_path:  Child-index path in the left tree (None for INSERT).
        right_path: Child-index path in the right tree (None for DELETE).
        old:        The removed or replaced subtree (None for INSERT).
        new:        The inserted or replacing subtree (None for DELETE).
    """

    kind: EditKind
    left_path: Path | None
    right_path: Path | None
    old: Repr | None
    new: Repr | None


# A child-script slot: a finished edit, or a child pair still to be diffed.
_Slot = Edit | tuple[Repr, Repr]


def same_shape(left: Repr, right: Repr) -> bool:
    """True if ``right`` can be reached from ``left`` by editing children only.

    Leaves must be equal; other nodes need the same variant and label.
    """
    if type(left) is not type(right):
        return False
    if is_leaf(left):
        return left == right
    return label(left) == label(right)


class ReprDiffer:
    """Computes edit scripts between two Repr trees.

    Fixed-arity nodes (Prop, Arg, AssocProp) are diffed position by position.
    Variable-length children are aligned in order with DP edit distance,
    using ``ReprSimilarity`` distances as substitution costs, so a child that
    merely changed is updated in place rather than deleted and re-inserted.

    Example::

        from repr_tree.tree import build as r

        differ = ReprDiffer()
        patch = differ.diff(r.tuple_([r.int_(1)]), r.tuple_([r.int_(1), r.int_(2)]))
        # Edit(UPDATE, children=(Edit(KEEP, ...), Edit(INSERT, new=IntLit(2))))
    """

    def __init__(self, similarity: ReprSimilarity | None = None) -> None:
        self._similarity = similarity if similarity is not None else ReprSimilarity()

    def diff(
        self, left: Repr, right: Repr, memo: SimilarityMemo | None = None
    ) -> Edit:
        """Return the edit script turning ``left`` into ``right``.

        ``memo`` may carry scores already computed for this pair of trees;
        every level of the diff reads and extends it.
        """
        if memo is None:
            memo = SimilarityMemo(left, right)
        results: list[Edit] = []
        stack: list[tuple[Repr, Repr, list[_Slot] | None]] = [(left, right, None)]
        while stack:
            a, b, plan = stack.pop()
            if plan is not None:
                pending = sum(1 for slot in plan if not isinstance(slot, Edit))
                done: list[Edit] = []
                if pending:
                    done = results[-pending:]
                    del results[-pending:]
                filled = iter(done)
                edits = tuple(
                    slot if isinstance(slot, Edit) else next(filled) for slot in plan
                )
                results.append(Edit(EditKind.UPDATE, a, b, edits))
                continue
            if memo.equal(a, b):
                results.append(Edit(EditKind.KEEP, a, b))
                continue
            if not same_shape(a, b):
                results.append(Edit(EditKind.REPLACE, a, b))
                continue
            plan = self._plan(a, b, memo)
            stack.append((a, b, plan))
            stack.extend(
                (x, y, None) for x, y in reversed(
                    [slot for slot in plan if not isinstance(slot, Edit)]
                )
            )
        return results[0]

    def _plan(self, left: Repr, right: Repr, memo: SimilarityMemo) -> list[_Slot]:
        """Child script of ``left`` -> ``right``: ready edits and pairs to diff."""
        kids_left = left.children()
        kids_right = right.children()
        if left.arity is not None:
            return list(zip(kids_left, kids_right, strict=True))

        costs = self._similarity.cost_matrix(kids_left, kids_right, memo)
        _, steps = align_sequence(costs)
        plan: list[_Slot] = []
        for step in steps:
            if step.op == AlignOp.MATCH:
                plan.append((kids_left[step.left], kids_right[step.right]))  # type: ignore[index]
            elif step.op == AlignOp.DELETE:
                plan.append(Edit(EditKind.DELETE, old=kids_left[step.left]))  # type: ignore[index]
            else:
                plan.append(Edit(EditKind.INSERT, new=kids_right[step.right]))  # type: ignore[index]
        return plan


def apply_patch(node: Repr, edit: Edit, strict: bool = False) -> Repr:
    """Apply an edit script to ``node`` and return the rebuilt tree.

    Args:
        node:   The tree the script was computed against (or one shaped like it).
        edit:   A root-level Edit (KEEP, REPLACE or UPDATE).
        strict: When True, check that every KEEP, REPLACE and DELETE target
            equals the edit's ``old`` and every UPDATE target has its shape.

    Raises:
        PatchError: If the script does not fit ``node``.
        ShapeMismatchError: If an edit produces children the variant cannot hold.
    """
    results: list[Repr] = []
    stack: list[tuple[Repr, Edit, list[Repr | None] | None]] = [(node, edit, None)]
    while stack:
        current, step, plan = stack.pop()
        if plan is not None:
            pending = sum(1 for kid in plan if kid is None)
            done: list[Repr] = []
            if pending:
                done = results[-pending:]
                del results[-pending:]
            filled = iter(done)
            kids = [kid if kid is not None else next(filled) for kid in plan]
            results.append(current.with_children(kids))
            continue

        _check_target(current, step, strict)
        if step.kind == EditKind.KEEP:
            results.append(current)
        elif step.kind == EditKind.REPLACE:
            results.append(step.new)  # type: ignore[arg-type]
        elif step.kind == EditKind.UPDATE:
            plan, targets = _plan_children(current.children(), step.children, strict)
            stack.append((current, step, plan))
            stack.extend(reversed(targets))
        else:
            msg = f"{step.kind} edits are only valid inside a parent's child script"
            raise PatchError(msg)
    return results[0]


def _check_target(node: Repr, edit: Edit, strict: bool) -> None:
    if not strict or edit.old is None:
        return
    fits = (
        same_shape(node, edit.old)
        if edit.kind == EditKind.UPDATE
        else node == edit.old
    )
    if not fits:
        msg = f"{edit.kind} edit expects {edit.old!r}, found {node!r}"
        raise PatchError(msg)


def _plan_children(
    old: Sequence[Repr], edits: Sequence[Edit], strict: bool
) -> tuple[list[Repr | None], list[tuple[Repr, Edit, None]]]:
    """Walk a child script against ``old``.

    Returns the new child list, with None where a child still has to be
    patched, and the ``(child, edit)`` pairs that fill those holes in order.
    """
    remaining = iter(old)
    plan: list[Repr | None] = []
    targets: list[tuple[Repr, Edit, None]] = []
    for edit in edits:
        if edit.kind == EditKind.INSERT:
            plan.append(edit.new)
            continue
        child = next(remaining, None)
        if child is None:
            msg = f"child script consumes more than the {len(old)} children present"
            raise PatchError(msg)
        if edit.kind == EditKind.DELETE:
            if strict and child != edit.old:
                msg = f"DELETE edit expects {edit.old!r}, found {child!r}"
                raise PatchError(msg)
            continue
        plan.append(None)
        targets.append((child, edit, None))
    if next(remaining, None) is not None:
        msg = f"child script leaves some of the {len(old)} children unconsumed"
        raise PatchError(msg)
    return plan, targets


def list_changes(edit: Edit) -> list[Change]:
    """Flatten a patch tree into its REPLACE/INSERT/DELETE changes, in order."""
    changes: list[Change] = []
    stack: list[Change | tuple[Edit, Path, Path]] = [(edit, (), ())]
    while stack:
        item = stack.pop()
        if isinstance(item, Change):
            changes.append(item)
            continue
        current, left_path, right_path = item
        if current.kind == EditKind.REPLACE:
            changes.append(
                Change(EditKind.REPLACE, left_path, right_path, current.old, current.new)
            )
            continue
        if current.kind != EditKind.UPDATE:
            continue

        i = j = 0
        queued: list[Change | tuple[Edit, Path, Path]] = []
        for child in current.children:
            if child.kind == EditKind.INSERT:
                queued.append(
                    Change(EditKind.INSERT, None, (*right_path, j), None, child.new)
                )
                j += 1
            elif child.kind == EditKind.DELETE:
                queued.append(
                    Change(EditKind.DELETE, (*left_path, i), None, child.old, None)
                )
                i += 1
            else:
                queued.append((child, (*left_path, i), (*right_path, j)))
                i += 1
                j += 1
        stack.extend(reversed(queued))
    return changes
