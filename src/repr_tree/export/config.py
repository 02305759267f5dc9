"""JsonConfig, CtorEncoding and DuplicateKeyPolicy for Repr -> JSON export.

JsonConfig is a frozen (immutable) dataclass holding the two interchange
policies that JSON cannot express directly: how constructor applications are
encoded and what happens to repeated object keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["CtorEncoding", "DuplicateKeyPolicy", "JsonConfig"]


class CtorEncoding(StrEnum):
    """How ``Ctor`` nodes are written.

    - TAGGED:  ``{"tag": "Point", "args": [{"label": "x", "value": 1}, ...]}``.
               Positional arguments carry ``"label": null``.  Keeps order and
               the labelled/positional distinction.
    - COMPACT: ``{"Point": {"x": 1, "y": 2}}`` when every argument is labelled
               with a distinct label, else ``{"Point": [1, {"y": 2}]}``.
    """

    TAGGED = auto()
    COMPACT = auto()


class DuplicateKeyPolicy(StrEnum):
    """Which value survives when a Record or Assoc repeats a key.

    - LAST_WINS:  The last value is kept (at the key's first position).
    - FIRST_WINS: The first value is kept; later repeats are ignored.
    """

    LAST_WINS = auto()
    FIRST_WINS = auto()


@dataclass(frozen=True, slots=True)
class JsonConfig:
    """Immutable configuration for ``to_json``.

    Attributes:
        ctor_encoding:  Encoding of constructor applications.  Default TAGGED.
        duplicate_keys: Policy for repeated record field names and repeated
            string keys in assocs.  Default LAST_WINS.
    """

    ctor_encoding: CtorEncoding = CtorEncoding.TAGGED
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "ctor_encoding", CtorEncoding(self.ctor_encoding))
        except ValueError:
            msg = f"unknown ctor_encoding {self.ctor_encoding!r}"
            raise ValueError(msg) from None
        try:
            object.__setattr__(
                self, "duplicate_keys", DuplicateKeyPolicy(self.duplicate_keys)
            )
        except ValueError:
            msg = f"unknown duplicate_keys policy {self.duplicate_keys!r}"
            raise ValueError(msg) from None
