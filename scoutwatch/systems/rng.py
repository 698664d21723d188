"""Seeded, stateless random draws for the simulated world.

Every draw is ``xxh64(domain, key, tick)`` seeded with the world seed, so a
headless run with the same seed replays the same movements, spawns and
damage, no matter how many other draws happen in between.
"""

from __future__ import annotations

import struct
from typing import Sequence, TypeVar

import xxhash

from scoutwatch.core.enums import Domain

T = TypeVar("T")

_PACK = struct.Struct("<iqq")
_SPAN = float(1 << 53)


class DeterministicRNG:
    """Pure-function RNG keyed by (domain, key, tick)."""

    __slots__ = ("_seed",)

    def __init__(self, seed: int) -> None:
        # xxh64 takes an unsigned 64-bit seed
        self._seed = seed & 0xFFFF_FFFF_FFFF_FFFF

    @property
    def seed(self) -> int:
        return self._seed

    def raw(self, domain: Domain, key: int, tick: int) -> int:
        return xxhash.xxh64_intdigest(_PACK.pack(int(domain), key, tick), seed=self._seed)

    def next_float(self, domain: Domain, key: int, tick: int) -> float:
        """Uniform float in [0.0, 1.0)."""
        return (self.raw(domain, key, tick) >> 11) / _SPAN

    def next_int(self, domain: Domain, key: int, tick: int, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends included."""
        return low + int(self.next_float(domain, key, tick) * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, tick: int, probability: float = 0.5) -> bool:
        return self.next_float(domain, key, tick) < probability

    def choice(self, domain: Domain, key: int, tick: int, options: Sequence[T]) -> T:
        return options[self.next_int(domain, key, tick, 0, len(options) - 1)]
