"""Small structural types produced by generators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Tuple, TypeVar

if TYPE_CHECKING:
    from .gen import Gen

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class Left(Generic[A]):
    """Left branch of a two-way sum."""

    value: A


@dataclass(frozen=True)
class Right(Generic[B]):
    """Right branch of a two-way sum."""

    value: B


# Weight (> 0) paired with the generator it selects.
Freq = Tuple[int, "Gen[A]"]
