from __future__ import annotations

import operator
import struct
from typing import Tuple

_MASK_64 = 0xFFFFFFFFFFFFFFFF

# "somepseu", "dorandom", "lygenera", "tedbytes" read as little-endian words.
_IV0 = 0x736F6D6570736575
_IV1 = 0x646F72616E646F6D
_IV2 = 0x6C7967656E657261
_IV3 = 0x7465646279746573

_State = Tuple[int, int, int, int]


def _rotl(x: int, b: int) -> int:
    """Rotate left for 64-bit values."""
    return ((x << b) | (x >> (64 - b))) & _MASK_64


def _u8to64_le(buf: bytes, start: int, length: int = 8) -> int:
    """Pack ``length`` bytes of ``buf`` from ``start`` into a little-endian word."""
    return int.from_bytes(buf[start:start + length], "little")


def _compress(v0: int, v1: int, v2: int, v3: int) -> _State:
    v0 = (v0 + v1) & _MASK_64
    v1 = _rotl(v1, 13)
    v1 ^= v0
    v0 = _rotl(v0, 32)

    v2 = (v2 + v3) & _MASK_64
    v3 = _rotl(v3, 16)
    v3 ^= v2

    v0 = (v0 + v3) & _MASK_64
    v3 = _rotl(v3, 21)
    v3 ^= v0

    v2 = (v2 + v1) & _MASK_64
    v1 = _rotl(v1, 17)
    v1 ^= v2
    v2 = _rotl(v2, 32)

    return v0, v1, v2, v3


def _check_key(name: str, value: int) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got bool")
    try:
        value = operator.index(value)
    except TypeError:
        raise TypeError(f"{name} must be an int, got {type(value).__name__}") from None
    if not 0 <= value <= _MASK_64:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer")
    return value


def split_key(key: bytes) -> Tuple[int, int]:
    """Split a 16-byte key into the two little-endian 64-bit SipHash keys."""
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise TypeError("key must be bytes-like")
    key_bytes = bytes(key)
    if len(key_bytes) != 16:
        raise ValueError("SipHash24 key must be exactly 16 bytes")
    return struct.unpack("<QQ", key_bytes)


class SipState:
    """
    Streaming SipHash-2-4 state over a sequence of byte buffers.

    The result does not depend on how the input is split across ``write``
    calls. ``result()`` leaves the state untouched, so more data can be
    written after inspecting an intermediate digest.

    Instances are plain values: ``copy()`` gives a fully independent state.
    A single instance must not be written to from several threads at once.
    """

    name = "siphash24"
    digest_size = 8
    block_size = 8

    __slots__ = ("_k0", "_k1", "_v0", "_v1", "_v2", "_v3", "_tail", "_ntail", "_length")

    def __init__(self, key0: int = 0, key1: int = 0):
        self._k0 = _check_key("key0", key0)
        self._k1 = _check_key("key1", key1)
        self.reset()

    @classmethod
    def from_key(cls, key: bytes) -> "SipState":
        """Build a state from a 16-byte key (two little-endian words)."""
        return cls(*split_key(key))

    @property
    def key0(self) -> int:
        return self._k0

    @property
    def key1(self) -> int:
        return self._k1

    @property
    def length(self) -> int:
        """Total bytes written since the last reset, modulo 2**64."""
        return self._length

    def reset(self) -> None:
        """Return to the freshly constructed state, keeping the keys."""
        self._length = 0
        self._v0 = self._k0 ^ _IV0
        self._v1 = self._k1 ^ _IV1
        self._v2 = self._k0 ^ _IV2
        self._v3 = self._k1 ^ _IV3
        self._tail = 0
        self._ntail = 0

    def copy(self) -> "SipState":
        dup = self.__class__.__new__(self.__class__)
        for slot in self.__slots__:
            setattr(dup, slot, getattr(self, slot))
        return dup

    __copy__ = copy

    def write(self, data: bytes) -> "SipState":
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes-like")

        msg = bytes(data)
        length = len(msg)
        self._length = (self._length + length) & _MASK_64

        needed = 0
        if self._ntail:
            needed = 8 - self._ntail
            if length < needed:
                self._tail |= _u8to64_le(msg, 0, length) << (8 * self._ntail)
                self._ntail += length
                return self

            m = self._tail | _u8to64_le(msg, 0, needed) << (8 * self._ntail)
            self._message_round(m)
            self._ntail = 0

        # Pending tail is flushed, absorb the rest as whole words.
        left = (length - needed) & 0x7
        end = length - left
        if end > needed:
            for (m,) in struct.iter_unpack("<Q", msg[needed:end]):
                self._message_round(m)

        self._tail = _u8to64_le(msg, end, left)
        self._ntail = left
        return self

    update = write

    def result(self) -> int:
        """Return the 64-bit digest of everything written so far."""
        v0, v1, v2, v3 = self._v0, self._v1, self._v2, self._v3

        b = ((self._length & 0xFF) << 56) | self._tail

        v3 ^= b
        v0, v1, v2, v3 = _compress(v0, v1, v2, v3)
        v0, v1, v2, v3 = _compress(v0, v1, v2, v3)
        v0 ^= b

        v2 ^= 0xFF
        for _ in range(4):
            v0, v1, v2, v3 = _compress(v0, v1, v2, v3)

        return v0 ^ v1 ^ v2 ^ v3

    intdigest = result

    def digest(self) -> bytes:
        return struct.pack("<Q", self.result())

    def hexdigest(self) -> str:
        return self.digest().hex()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} length={self._length} ntail={self._ntail}>"

    # Internal helpers -------------------------------------------------
    def _message_round(self, m: int) -> None:
        v3 = self._v3 ^ m
        v0, v1, v2, v3 = _compress(self._v0, self._v1, self._v2, v3)
        v0, v1, v2, v3 = _compress(v0, v1, v2, v3)
        self._v0, self._v1, self._v2, self._v3 = v0 ^ m, v1, v2, v3


def siphash24(key0: int = 0, key1: int = 0) -> SipState:
    """Convenience constructor matching hashlib-style usage."""
    return SipState(key0, key1)


__all__ = ["SipState", "siphash24", "split_key"]
