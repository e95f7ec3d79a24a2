"""
DeterministicRng - Seeded Random Source

TigerStyle: All randomness is seeded and reproducible.
Based on Python's random.Random (Mersenne Twister) for simplicity.
Generators only ever see the RandomSource protocol, so any bit source
exposing the same six operations can be plugged in.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ..constants import FLOAT32_MANTISSA_BITS, SEED_MASK_64


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for the bit source consumed by generators.

    TigerStyle: Abstract interface allows swapping the underlying PRNG.
    """

    def next_int32(self) -> int:
        """Next signed 32-bit integer."""
        ...

    def next_int64(self) -> int:
        """Next signed 64-bit integer."""
        ...

    def next_double(self) -> float:
        """Next double in [0.0, 1.0)."""
        ...

    def next_float(self) -> float:
        """Next single-precision float in [0.0, 1.0)."""
        ...

    def next_bit(self) -> bool:
        """Next boolean bit."""
        ...

    def next_int(self, bound: int) -> int:
        """Next integer in [0, bound)."""
        ...

    def set_seed(self, seed: int) -> None:
        """Reset the stream deterministically."""
        ...


def _signed(bits: int, width: int) -> int:
    """Interpret an unsigned draw as two's-complement."""
    if bits >= 1 << (width - 1):
        return bits - (1 << width)
    return bits


@dataclass
class DeterministicRng:
    """Deterministic random source.

    TigerStyle:
    - All operations are deterministic given the same seed
    - Never use global random state
    """

    _seed: int
    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._seed &= SEED_MASK_64
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        """Get the most recently applied seed."""
        return self._seed

    def next_int32(self) -> int:
        return _signed(self._rng.getrandbits(32), 32)

    def next_int64(self) -> int:
        return _signed(self._rng.getrandbits(64), 64)

    def next_double(self) -> float:
        return self._rng.random()

    def next_float(self) -> float:
        """Float in [0.0, 1.0) with single-precision granularity."""
        return self._rng.getrandbits(FLOAT32_MANTISSA_BITS) / float(1 << FLOAT32_MANTISSA_BITS)

    def next_bit(self) -> bool:
        return self._rng.getrandbits(1) == 1

    def next_int(self, bound: int) -> int:
        """Generate a random integer in [0, bound).

        TigerStyle: Explicit bounds. randrange rejects rather than reduces,
        so there is no modulo bias.
        """
        assert bound > 0, f"bound ({bound}) must be positive"
        return self._rng.randrange(bound)

    def set_seed(self, seed: int) -> None:
        """Reseed in place.

        Seeds are masked to 64 bits so negative seeds stay distinct and
        reproducible.
        """
        self._seed = seed & SEED_MASK_64
        self._rng.seed(self._seed)
