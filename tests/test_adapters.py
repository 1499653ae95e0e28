import os
import struct
import sys
from unittest.mock import patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

import pytest

from keyedsiphash.adapters import (
    NOTHING,
    Flag,
    Items,
    RawBytes,
    Text,
    Word,
    as_hashable,
)


class RecordingSink:
    def __init__(self):
        self.chunks = []

    def write(self, data):
        self.chunks.append(bytes(data))

    def getvalue(self):
        return b"".join(self.chunks)


def written(value):
    sink = RecordingSink()
    as_hashable(value).hash_into(sink)
    return sink.getvalue()


class Tagged:
    def __init__(self, tag):
        self.tag = tag

    def hash_into(self, sink):
        sink.write(b"<" + self.tag + b">")


def test_hashable_values_pass_through():
    tagged = Tagged(b"x")
    assert as_hashable(tagged) is tagged
    assert written([Tagged(b"a"), Tagged(b"b")]) == struct.pack("<Q", 2) + b"<a><b>"


def test_builtin_dispatch():
    assert as_hashable(None) is NOTHING
    assert as_hashable(True) == Flag(True)
    assert as_hashable(b"ab") == RawBytes(b"ab")
    assert as_hashable(bytearray(b"ab")) == RawBytes(b"ab")
    assert as_hashable(memoryview(b"ab")) == RawBytes(b"ab")
    assert as_hashable("ab") == Text("ab")
    assert as_hashable(7) == Word(7)
    assert as_hashable((1, 2)) == Items((1, 2))


def test_bytes_are_written_verbatim():
    assert written(b"") == b""
    assert written(b"hello") == b"hello"


def test_none_writes_nothing():
    assert written(None) == b""


def test_text_is_terminated():
    assert written("é") == "é".encode("utf-8") + b"\xff"
    assert written(("ab", "c")) != written(("a", "bc"))


def test_bool_is_not_int():
    assert written(True) == b"\x01"
    assert written(False) == b"\x00"
    assert written(True) != written(1)


def test_word_encoding():
    assert written(0) == struct.pack("<Q", 0)
    assert written(0x0102) == b"\x02\x01" + b"\x00" * 6
    assert written(-1) == b"\xff" * 8
    assert written(2**64 - 1) == b"\xff" * 8
    assert written(-(2**63)) == struct.pack("<q", -(2**63))


@pytest.mark.parametrize("too_big", [2**64, -(2**63) - 1])
def test_word_out_of_range(too_big):
    with pytest.raises(ValueError):
        as_hashable(too_big)


def test_items_are_count_prefixed():
    assert written([]) == struct.pack("<Q", 0)
    assert written([1, b"x"]) == struct.pack("<Q", 2) + struct.pack("<Q", 1) + b"x"
    assert written([[1], []]) != written([[], [1]])
    assert written([1, 2]) == written((1, 2))


def test_numpy_scalars_are_unwrapped():
    """Scalars matching the numpy generic type are unwrapped with .item()."""

    class FakeNumpyInt:
        __slots__ = ("val",)

        def __init__(self, val):
            self.val = val

        def item(self):
            return self.val

    with patch("keyedsiphash.adapters._NUMPY_GENERIC", (FakeNumpyInt,)):
        assert written(FakeNumpyInt(99)) == written(99)
        assert written(FakeNumpyInt(b"raw")) == b"raw"


@pytest.mark.parametrize("value", [1.5, {1, 2}, {"k": 1}, object()])
def test_rejects_unsupported_type(value):
    with pytest.raises(TypeError) as excinfo:
        as_hashable(value)
    assert "Unsupported type" in str(excinfo.value)


def test_rejects_class_objects():
    with pytest.raises(TypeError) as excinfo:
        as_hashable(Tagged)
    assert "Unsupported type" in str(excinfo.value)
