"""ReprEncoder: projects a Repr tree onto plain JSON-compatible Python values.

The projection is one-way and lossy (there is no ``from_json``),
but it is total over well-formed trees and deterministic:

- IntLit / BoolLit / StringLit -> the JSON scalar
- FloatLit                     -> number; NaN and infinities -> "NaN",
                                  "Infinity", "-Infinity"
- Opaque                       -> its text
- Tuple                        -> array (unit -> [])
- Record                       -> object, one entry per Prop
- Ctor                         -> see ``CtorEncoding``
- Assoc                        -> object if every key is a StringLit, else an
                                  array of [key, value] pairs; the tag is dropped

Prop, Arg and AssocProp are unwrapped by their parent.  Reaching one any other
way raises ``MalformedContextError``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable
from typing import Any, NamedTuple

from repr_tree.errors import MalformedContextError
from repr_tree.export.config import CtorEncoding, DuplicateKeyPolicy, JsonConfig
from repr_tree.tree.nodes import (
    Arg,
    Assoc,
    AssocProp,
    BoolLit,
    Ctor,
    FloatLit,
    IntLit,
    Opaque,
    Prop,
    Record,
    Repr,
    StringLit,
    Tuple,
)
from repr_tree.tree.traversal import fold

__all__ = ["JsonValue", "ReprEncoder", "to_json", "to_json_string"]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


class _Entry(NamedTuple):
    """An encoded Prop, Arg or AssocProp waiting for its parent to unwrap it."""

    node: Repr
    values: list[JsonValue]


class ReprEncoder:
    """Converts Repr trees to JSON values under a fixed ``JsonConfig``.

    Trees are encoded bottom-up with ``fold``, so arbitrarily deep trees
    convert without hitting the recursion limit.

    Example::

        from repr_tree.tree import build as r

        encoder = ReprEncoder()
        encoder.encode(r.record({"user": r.string("alice"), "age": r.int_(30)}))
        # {"user": "alice", "age": 30}
    """

    def __init__(self, config: JsonConfig | None = None) -> None:
        self._config = config if config is not None else JsonConfig()

    @property
    def config(self) -> JsonConfig:
        return self._config

    def encode(self, node: Repr) -> JsonValue:
        """Convert ``node`` to a JSON value.

        Raises:
            MalformedContextError: If a Prop, Arg or AssocProp is reached
                outside its parent variant.
        """
        result = fold(node, self._encode_node)
        if isinstance(result, _Entry):
            raise _misplaced(result.node)
        return result

    def _encode_node(self, node: Repr, kids: list[Any]) -> Any:
        if isinstance(node, (Prop, Arg, AssocProp)):
            return _Entry(node, _values(kids))

        if isinstance(node, (IntLit, BoolLit, StringLit)):
            return node.value

        if isinstance(node, FloatLit):
            return _encode_float(node.value)

        if isinstance(node, Opaque):
            return node.text

        if isinstance(node, Tuple):
            return _values(kids)

        if isinstance(node, Record):
            return self._encode_object((e.node.name, e.values[0]) for e in kids)

        if isinstance(node, Ctor):
            return self._encode_ctor(node, kids)

        if isinstance(node, Assoc):
            return self._encode_assoc(kids)

        msg = f"cannot encode {type(node).__name__}"
        raise TypeError(msg)

    def _encode_object(
        self, entries: Iterable[tuple[str, JsonValue]]
    ) -> dict[str, Any]:
        out: dict[str, Any] = {}
        first_wins = self._config.duplicate_keys == DuplicateKeyPolicy.FIRST_WINS
        for key, value in entries:
            if first_wins and key in out:
                continue
            out[key] = value
        return out

    def _encode_ctor(self, node: Ctor, kids: list[Any]) -> JsonValue:
        args = [_split_arg(kid) for kid in kids]

        if self._config.ctor_encoding == CtorEncoding.TAGGED:
            return {
                "tag": node.tag,
                "args": [{"label": name, "value": value} for name, value in args],
            }

        # COMPACT
        labels = [name for name, _ in args]
        if args and None not in labels and len(set(labels)) == len(labels):
            payload: JsonValue = {name: value for name, value in args}  # type: ignore[misc]
        else:
            payload = [value if name is None else {name: value} for name, value in args]
        return {node.tag: payload}

    def _encode_assoc(self, kids: list[_Entry]) -> JsonValue:
        if all(isinstance(e.node.key, StringLit) for e in kids):  # type: ignore[attr-defined]
            return self._encode_object(
                (e.node.key.value, e.values[1]) for e in kids  # type: ignore[attr-defined]
            )
        return [list(e.values) for e in kids]


def _misplaced(node: Repr) -> MalformedContextError:
    return MalformedContextError(
        f"{type(node).__name__} cannot be converted on its own; "
        "it is only valid directly inside its parent"
    )


def _values(kids: list[Any]) -> list[JsonValue]:
    """Return ``kids`` unchanged, rejecting any context-bound child among them."""
    for kid in kids:
        if isinstance(kid, _Entry):
            raise _misplaced(kid.node)
    return kids


def _split_arg(kid: Any) -> tuple[str | None, JsonValue]:
    if not isinstance(kid, _Entry):
        return None, kid
    if not isinstance(kid.node, Arg):
        raise _misplaced(kid.node)
    return kid.node.label, kid.values[0]


def _encode_float(value: float) -> float | str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


def to_json(node: Repr, config: JsonConfig | None = None) -> JsonValue:
    """Project ``node`` onto a JSON value.

    Args:
        node:   A well-formed Repr tree.
        config: Export policies.  Defaults to ``JsonConfig()`` when None.

    Returns:
        Nested dicts, lists and scalars accepted by ``json.dumps``.
    """
    return ReprEncoder(config).encode(node)


def to_json_string(
    node: Repr, config: JsonConfig | None = None, indent: int | None = None
) -> str:
    """Serialise ``to_json(node, config)`` with the standard ``json`` module."""
    return json.dumps(to_json(node, config), indent=indent, ensure_ascii=False)

