"""
SizeSpec - How Many Elements

A size policy answers two questions as generators: "how many, possibly
zero" (``gen``) and "how many, at least one" (``gen1``). Collection-shaped
combinators accept anything ``as_size_spec`` understands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple, Union, runtime_checkable

from .gen import Gen


@runtime_checkable
class SizeSpec(Protocol):
    """Protocol for size policies."""

    @property
    def gen(self) -> Gen[int]:
        """Non-negative count."""
        ...

    @property
    def gen1(self) -> Gen[int]:
        """Positive count."""
        ...


@dataclass(frozen=True)
class DefaultSize:
    """Count drawn from the context's size budget."""

    @property
    def gen(self) -> Gen[int]:
        return Gen(lambda ctx: ctx.next_size())

    @property
    def gen1(self) -> Gen[int]:
        return Gen(lambda ctx: ctx.next_size_min1())


@dataclass(frozen=True)
class ExactSize:
    """Always the same count; ``gen1`` never goes below one."""

    count: int

    def __post_init__(self) -> None:
        assert self.count >= 0, f"count ({self.count}) must be non-negative"

    @property
    def gen(self) -> Gen[int]:
        return Gen.pure(self.count)

    @property
    def gen1(self) -> Gen[int]:
        return Gen.pure(max(self.count, 1))


@dataclass(frozen=True)
class RangeSize:
    """Uniform count in [low, high], inclusive."""

    low: int
    high: int

    def __post_init__(self) -> None:
        assert self.low >= 0, f"low ({self.low}) must be non-negative"
        assert self.high >= self.low, f"high ({self.high}) must be >= low ({self.low})"

    @staticmethod
    def _between(low: int, high: int) -> Gen[int]:
        span = high - low + 1
        return Gen(lambda ctx: low + ctx.rnd.next_int(span))

    @property
    def gen(self) -> Gen[int]:
        return self._between(self.low, self.high)

    @property
    def gen1(self) -> Gen[int]:
        return self._between(max(self.low, 1), max(self.high, 1))


DEFAULT_SIZE = DefaultSize()

SizeLike = Union[SizeSpec, int, range, Tuple[int, int], None]


def as_size_spec(value: SizeLike) -> SizeSpec:
    """Coerce a size argument into a SizeSpec.

    - ``None``: driven by the context size
    - ``int``: exactly that many
    - ``range`` / ``(low, high)``: uniform in the inclusive bounds
    """
    if value is None:
        return DEFAULT_SIZE
    if isinstance(value, bool):
        raise TypeError("size must not be a bool")
    if isinstance(value, int):
        return ExactSize(value)
    if isinstance(value, range):
        assert value.step == 1, "size range must have step 1"
        return RangeSize(value.start, value.stop - 1)
    if isinstance(value, tuple):
        low, high = value
        return RangeSize(low, high)
    if isinstance(value, SizeSpec):
        return value
    raise TypeError(f"cannot use {type(value).__name__} as a size")
