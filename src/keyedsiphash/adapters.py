"""
``Hashable`` wrappers for built-in Python values.

Composite types are expected to implement ``hash_into`` themselves; these
adapters only cover the leaves they are built from, plus plain sequences of
them, so that ``SipHasher.hash`` can be called on ordinary data.
"""

from __future__ import annotations

import operator
import struct
from dataclasses import dataclass
from typing import Any, Sequence

from .hashable import ByteSink, Hashable

try:
    import numpy as _np  # type: ignore

    _NUMPY_GENERIC = _np.generic  # type: ignore[attr-defined]
except ImportError:  # pragma: no cover - numpy is optional
    _NUMPY_GENERIC = ()  # type: ignore[assignment]

_MIN_WORD = -(1 << 63)
_MAX_WORD = (1 << 64) - 1


@dataclass(frozen=True)
class RawBytes:
    """Bytes written verbatim, so the digest is plain SipHash-2-4 of ``data``."""

    data: bytes

    def hash_into(self, sink: ByteSink) -> None:
        sink.write(self.data)


@dataclass(frozen=True)
class Text:
    value: str

    def hash_into(self, sink: ByteSink) -> None:
        # 0xff never occurs in UTF-8, so ("ab", "c") and ("a", "bc") differ
        sink.write(self.value.encode("utf-8"))
        sink.write(b"\xff")


@dataclass(frozen=True)
class Flag:
    value: bool

    def hash_into(self, sink: ByteSink) -> None:
        sink.write(b"\x01" if self.value else b"\x00")


@dataclass(frozen=True)
class Word:
    """A 64-bit integer; negatives are written as two's complement."""

    value: int

    def __post_init__(self):
        if not _MIN_WORD <= self.value <= _MAX_WORD:
            raise ValueError(f"{self.value} does not fit in a 64-bit word")

    def hash_into(self, sink: ByteSink) -> None:
        sink.write(struct.pack("<Q", self.value & _MAX_WORD))


@dataclass(frozen=True)
class Items:
    """A count-prefixed run of values, each adapted in turn."""

    values: Sequence[Any]

    def hash_into(self, sink: ByteSink) -> None:
        sink.write(struct.pack("<Q", len(self.values)))
        for item in self.values:
            as_hashable(item).hash_into(sink)


class _Nothing:
    def hash_into(self, sink: ByteSink) -> None:
        pass


NOTHING = _Nothing()


def as_hashable(value: Any) -> Hashable:
    """
    Return ``value`` itself if it implements ``hash_into``, otherwise wrap it.

    Supported built-ins: bytes-like (raw), str, bool, int (64-bit), None,
    list and tuple. numpy scalars are unwrapped with ``.item()`` first.

    Raises:
        TypeError: If value is of an unsupported type
        ValueError: If an int does not fit in 64 bits
    """
    if isinstance(value, Hashable) and not isinstance(value, type):
        return value
    if _NUMPY_GENERIC and isinstance(value, _NUMPY_GENERIC):
        value = value.item()

    if value is None:
        return NOTHING
    if isinstance(value, bool):
        return Flag(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RawBytes(bytes(value))
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, (list, tuple)):
        return Items(value)
    try:
        return Word(operator.index(value))
    except TypeError:
        raise TypeError(f"Unsupported type for hashing: {type(value)!r}") from None


__all__ = ["Flag", "Items", "NOTHING", "RawBytes", "Text", "Word", "as_hashable"]
