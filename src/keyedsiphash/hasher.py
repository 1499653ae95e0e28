from __future__ import annotations

from typing import Any

from .adapters import as_hashable
from .siphash import SipState, _check_key, split_key


class SipHasher:
    """
    Keyed SipHash-2-4 hasher for Python values.

    Holds only the two 64-bit keys. Every call to ``hash`` runs on its own
    fresh ``SipState``, so one hasher can be shared across threads.
    """

    __slots__ = ("_k0", "_k1")

    def __init__(self, key0: int = 0, key1: int = 0):
        self._k0 = _check_key("key0", key0)
        self._k1 = _check_key("key1", key1)

    @classmethod
    def from_key(cls, key: bytes) -> "SipHasher":
        return cls(*split_key(key))

    @property
    def key0(self) -> int:
        return self._k0

    @property
    def key1(self) -> int:
        return self._k1

    def state(self) -> SipState:
        """Return a fresh streaming state keyed like this hasher."""
        return SipState(self._k0, self._k1)

    def hash(self, value: Any) -> int:
        """
        Hash a value to an unsigned 64-bit integer.

        Values implementing ``Hashable`` feed themselves through ``hash_into``;
        built-ins are wrapped by ``as_hashable`` (bytes are written raw).

        Raises:
            TypeError: If value contains an unsupported type
            ValueError: If an int in value does not fit in 64 bits
        """
        state = self.state()
        as_hashable(value).hash_into(state)
        return state.result()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key0={self._k0:#x}, key1={self._k1:#x})"


def hash(value: Any) -> int:
    """
    Hash a value with the all-zero key.

    The result is deterministic across runs and processes, but the key is
    public: this offers no protection against hash-flooding. Use
    ``hash_with_keys`` with secret keys for untrusted input.
    """
    return SipHasher().hash(value)


def hash_with_keys(key0: int, key1: int, value: Any) -> int:
    """Hash a value with SipHash-2-4 under the given pair of 64-bit keys."""
    return SipHasher(key0, key1).hash(value)


__all__ = ["SipHasher", "hash", "hash_with_keys"]
