from __future__ import annotations

from typing import Protocol, runtime_checkable


class ByteSink(Protocol):
    """Anything that accepts a stream of byte buffers, e.g. ``SipState``."""

    def write(self, data: bytes) -> object:
        ...


@runtime_checkable
class Hashable(Protocol):
    """
    A value that knows how to feed its canonical bytes into a ``ByteSink``.

    Implementations may call ``sink.write`` any number of times, recursing
    into their fields as needed. Two values that write the same byte stream
    hash identically, so the order of writes is part of the contract.
    """

    def hash_into(self, sink: ByteSink) -> None:
        ...


__all__ = ["ByteSink", "Hashable"]
