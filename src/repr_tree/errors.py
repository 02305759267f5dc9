"""Exception taxonomy for repr-tree.

- ReprError:             base class for every error raised by this package.
- ShapeMismatchError:    ``with_children`` received children that do not fit
                         the variant (wrong count or wrong child kind).
- MalformedContextError: a ``Prop``/``Arg``/``AssocProp`` appeared outside its
                         parent variant.
- PatchError:            an edit script does not fit the node it is applied to.
"""

from __future__ import annotations

__all__ = ["MalformedContextError", "PatchError", "ReprError", "ShapeMismatchError"]


class ReprError(Exception):
    """Base class for repr-tree errors."""


class ShapeMismatchError(ReprError, ValueError):
    """Replacement children do not match the shape the variant expects."""


class MalformedContextError(ReprError, TypeError):
    """A context-bound node was found outside its expected parent."""


class PatchError(ReprError, ValueError):
    """An edit script cannot be applied to the given node."""
