"""Domain-separated deterministic RNG using xxhash.

The same seed and the same sequence of placement calls always produce the
same board, which keeps tests and replays of a session reproducible.

Formula: RNG_Value = Hash(Seed, Domain, Key, Salt)
"""

from __future__ import annotations

import struct

import xxhash

from tilegame.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, salt), with no
    internal mutable state.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, salt: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, key, salt)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, salt: int = 0) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, salt) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, salt: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, salt)
        return low + int(f * (high - low + 1))

    def choice_index(self, domain: Domain, key: int, salt: int, size: int) -> int:
        """Uniform index into a sequence of *size* elements."""
        if size <= 0:
            raise ValueError("cannot choose from an empty sequence")
        # float rounding can land exactly on 1.0 for hashes near 2**64
        return min(self.next_int(domain, key, salt, 0, size - 1), size - 1)
