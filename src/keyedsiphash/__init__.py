"""
SipHash-2-4 keyed hashing: a streaming engine plus hashers for Python values.
"""

from .adapters import RawBytes, as_hashable
from .hashable import ByteSink, Hashable
from .hasher import SipHasher, hash, hash_with_keys
from .siphash import SipState, siphash24

__all__ = [
    "ByteSink",
    "Hashable",
    "RawBytes",
    "SipHasher",
    "SipState",
    "as_hashable",
    "hash",
    "hash_with_keys",
    "siphash24",
]
