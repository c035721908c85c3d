"""Seeded, domain-separated RNG stream using xxhash.

Draw N of a battle is a pure function of (seed, domain, N): replaying the
same seed against the same sequence of turns reproduces every roll.

Formula: RNG_Value = Hash(Seed, Domain, DrawIndex)
"""

from __future__ import annotations

import logging
import random
import struct

import xxhash

from battlers.core.enums import Domain

logger = logging.getLogger(__name__)


class DiceRNG:
    """Single-owner pseudo-random stream.

    Unlike a stateless hash RNG keyed by entity and tick, the battle has one
    actor acting at a time, so a monotonically increasing draw index is the
    only state needed. Never share an instance between threads.
    """

    __slots__ = ("_seed", "_draws")

    # Top 53 bits only: a double holds them exactly, so the result stays below 1.0.
    _FLOAT_BITS = 53

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._draws = 0

    @classmethod
    def from_seed(cls, seed: int | None) -> DiceRNG:
        """Build a stream, drawing a fresh OS seed when *seed* is None."""
        if seed is None:
            seed = random.SystemRandom().getrandbits(63)
            logger.info("No seed configured, using seed=%d", seed)
        return cls(seed)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of values consumed so far."""
        return self._draws

    def _hash(self, domain: Domain, draw: int) -> int:
        payload = struct.pack("<qiq", self._seed, domain.value, draw)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain) -> float:
        """Return the next float in [0.0, 1.0)."""
        value = (self._hash(domain, self._draws) >> (64 - self._FLOAT_BITS)) / (1 << self._FLOAT_BITS)
        self._draws += 1
        return value

    def next_int(self, domain: Domain, low: int, high: int) -> int:
        """Return the next integer in [low, high] inclusive."""
        f = self.next_float(domain)
        return low + int(f * (high - low + 1))
