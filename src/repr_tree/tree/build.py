"""Smart constructors: the sanctioned way to build Repr trees.

Raw variant classes are public so callers can ``isinstance`` / ``match`` on
them, but producers should build trees through these functions.  Besides
allocating the node they reject context-bound nodes (``Prop``, ``Arg``,
``AssocProp``) wherever a plain value is expected, so a tree built only
from these functions always passes ``validate``.

Names that would shadow builtins carry a trailing underscore::

    from repr_tree.tree import build as r

    point = r.ctor("Point", [r.arg("x", r.int_(1)), r.arg("y", r.int_(2))])
    user = r.record({"name": r.string("alice"), "age": r.int_(30)})
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, Mapping

from repr_tree.errors import MalformedContextError
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

__all__ = [
    "arg",
    "assoc",
    "assoc_prop",
    "bool_",
    "ctor",
    "float_",
    "int_",
    "opaque",
    "prop",
    "record",
    "string",
    "tuple_",
    "unit",
]

_CONTEXT_BOUND = (Prop, Arg, AssocProp)


def _value(where: str, node: Repr) -> Repr:
    """Check that ``node`` may stand as a plain value inside ``where``."""
    if isinstance(node, _CONTEXT_BOUND):
        msg = f"{type(node).__name__} cannot be used as a value in {where}"
        raise MalformedContextError(msg)
    return node


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def int_(value: int) -> IntLit:
    # bool is an int subclass: store a plain int
    return IntLit(operator.index(value))


def float_(value: float) -> FloatLit:
    return FloatLit(float(value))


def bool_(value: bool) -> BoolLit:
    return BoolLit(bool(value))


def string(value: str) -> StringLit:
    return StringLit(value)


def opaque(label: str, text: str) -> Opaque:
    """Wrap a value that has no structural decomposition."""
    return Opaque(label, text)


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


def tuple_(items: Iterable[Repr] = ()) -> Tuple:
    return Tuple(tuple(_value("tuple", item) for item in items))


def unit() -> Tuple:
    """The canonical unit value, ``Tuple(())``."""
    return Tuple(())


def prop(name: str, value: Repr) -> Prop:
    return Prop(name, _value(f"field {name!r}", value))


def record(fields: Mapping[str, Repr] | Iterable[tuple[str, Repr]]) -> Record:
    """Build a Record with one Prop per entry, in the order supplied.

    Args:
        fields: A mapping (insertion order is kept) or an iterable of
            ``(name, value)`` pairs.  Duplicate names can only be expressed
            with the pairs form; they are kept as separate Props.

    Returns:
        A Record whose children are Prop nodes.
    """
    pairs = fields.items() if isinstance(fields, Mapping) else fields
    return Record(tuple(prop(name, value) for name, value in pairs))


def arg(label: str | Repr | None, value: Repr | None = None) -> Arg:
    """Build a constructor argument.

    ``arg(v)`` is positional; ``arg("x", v)`` is labelled and ``arg(None, v)``
    is positional again.
    """
    if value is None:
        if not isinstance(label, Repr):
            msg = "arg() needs a value: call arg(value) or arg(label, value)"
            raise TypeError(msg)
        return Arg(None, _value("arg", label))
    if isinstance(label, Repr):
        msg = f"arg() label must be a str or None, got {type(label).__name__}"
        raise TypeError(msg)
    return Arg(label, _value("arg", value))


def ctor(tag: str, args: Iterable[Repr] = ()) -> Ctor:
    """Build a tagged constructor application.

    Bare values and Arg nodes may be mixed freely; order is preserved.
    """
    children = tuple(
        item if isinstance(item, Arg) else _value(f"ctor {tag!r}", item)
        for item in args
    )
    return Ctor(tag, children)


def assoc_prop(key: Repr, value: Repr) -> AssocProp:
    return AssocProp(_value("assoc key", key), _value("assoc value", value))


def assoc(tag: str, pairs: Iterable[tuple[Repr, Repr]] = ()) -> Assoc:
    """Build a map-like value; order and duplicate keys are preserved."""
    return Assoc(tag, tuple(assoc_prop(key, value) for key, value in pairs))
