"""
GenContext - Generation Context

TigerStyle: One random source and one size budget, threaded through every
generator invoked while producing a single value. The context borrows the
random source; it never owns or copies it.
"""

from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from .rng import DeterministicRng, RandomSource
from ..constants import INT64_VALUE_MAX

logger = logging.getLogger(__name__)


@dataclass
class GenContext:
    """Context handed to ``Gen.run``.

    TigerStyle:
    - Size is always non-negative
    - Size overrides are scoped and always restored
    - Every draw goes through ``rnd`` in call order
    """

    rnd: RandomSource
    size: int

    def __post_init__(self) -> None:
        assert self.rnd is not None, "rnd must not be None"
        assert self.size >= 0, f"size ({self.size}) must be non-negative"

    def next_bit(self) -> bool:
        return self.rnd.next_bit()

    def next_size(self) -> int:
        """Return a count in [0, size]."""
        return self.rnd.next_int(self.size + 1)

    def next_size_min1(self) -> int:
        """Return a count in [1, max(size, 1)]."""
        return self.rnd.next_int(max(self.size, 1)) + 1

    def set_seed(self, seed: int) -> None:
        self.rnd.set_seed(seed)

    @contextmanager
    def sized(self, size: int) -> Iterator[GenContext]:
        """Temporarily override the size budget.

        Usage:
            with ctx.sized(3):
                small = gen.run(ctx)
        """
        assert size >= 0, f"size ({size}) must be non-negative"
        previous = self.size
        self.size = size
        try:
            yield self
        finally:
            self.size = previous

    @classmethod
    def with_seed(cls, seed: int, size: int | None = None) -> GenContext:
        """Create a context over a fresh DeterministicRng.

        Args:
            seed: The deterministic seed to use.
            size: Size budget; defaults to the configured size.
        """
        if size is None:
            from tane.core.config import get_settings
            size = get_settings().size
        return cls(rnd=DeterministicRng(_seed=seed), size=size)

    @classmethod
    def from_env_or_random(cls, size: int | None = None) -> GenContext:
        """Create a context from TANE_SEED or a random seed.

        TigerStyle: Always log the seed for reproducibility.
        Replay any run by setting TANE_SEED=<seed>.
        """
        from tane.core.config import get_settings

        settings = get_settings()
        if settings.seed is not None:
            seed = settings.seed
            logger.info(f"Using seed from environment: {seed}")
        else:
            seed = random.randint(0, INT64_VALUE_MAX)
            logger.info(f"Generated random seed (replay with TANE_SEED={seed})")

        return cls.with_seed(seed, settings.size if size is None else size)
