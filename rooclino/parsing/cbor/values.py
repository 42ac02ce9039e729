"""
The decoded value tree.

Every item is one of a closed set of frozen dataclasses deriving from
``CborValue``. Variants compare by type and payload, so ``Integer(1)``,
``Float(1.0)`` and ``TRUE`` are distinct map keys. All variants are hashable,
including ``Map``, which hashes over its entries.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


class CborValue:
    """Base class of all decoded items."""
    __slots__ = ()


@dataclass(frozen=True)
class Integer(CborValue):
    value: int


@dataclass(frozen=True)
class ByteString(CborValue):
    value: bytes


@dataclass(frozen=True)
class TextString(CborValue):
    value: str


@dataclass(frozen=True)
class Float(CborValue):
    value: float


@dataclass(frozen=True)
class Array(CborValue):
    items: tuple[CborValue, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[CborValue]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]


@dataclass(frozen=True)
class Map(CborValue):
    """
    An unordered mapping between decoded items.

    Attributes:
        entries: Key -> value mapping in wire order. When a key appears more
            than once on the wire, the last value is kept.
    """
    entries: dict[CborValue, CborValue] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: CborValue, default: Any = None) -> Any:
        return self.entries.get(key, default)


@dataclass(frozen=True)
class Tagged(CborValue):
    tag: int
    value: CborValue


@dataclass(frozen=True)
class Simple(CborValue):
    """
    A major type 7 simple value.

    Attributes:
        code: The simple-value number (20-23 for the predefined constants).
        value: Application payload for codes defined by a simple-value
            handler; ``None`` for the predefined constants.
    """
    code: int
    value: Any = None


SIMPLE_FALSE = 20
SIMPLE_TRUE = 21
SIMPLE_NULL = 22
SIMPLE_UNDEFINED = 23

FALSE = Simple(SIMPLE_FALSE)
TRUE = Simple(SIMPLE_TRUE)
NULL = Simple(SIMPLE_NULL)
UNDEFINED = Simple(SIMPLE_UNDEFINED)


__all__ = [
    "CborValue",
    "Integer",
    "ByteString",
    "TextString",
    "Float",
    "Array",
    "Map",
    "Tagged",
    "Simple",
    "FALSE",
    "TRUE",
    "NULL",
    "UNDEFINED",
    "SIMPLE_FALSE",
    "SIMPLE_TRUE",
    "SIMPLE_NULL",
    "SIMPLE_UNDEFINED",
]
