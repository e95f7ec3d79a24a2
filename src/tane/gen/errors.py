"""
Generator Errors

TigerStyle: Explicit error types. Configuration mistakes (bad weights,
negative sizes) are assertions; everything here is raised at the point
of use and is never retried.
"""

from __future__ import annotations

from typing import Any


class GenError(Exception):
    """Base error for generator operations."""

    pass


class PredicateUnsatisfiedError(GenError):
    """A filtered generator produced a value its predicate rejected."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Gen.with_filter predicate is not satisfied (value: {value!r})")
        self.value = value


class PropertyFailedError(GenError):
    """A property raised on a generated sample.

    Carries everything needed to replay the failure.
    """

    def __init__(self, seed: int, index: int, value: Any, cause: BaseException) -> None:
        super().__init__(
            f"property failed on sample #{index} (replay with TANE_SEED={seed}): "
            f"{type(cause).__name__}: {cause} [value: {value!r}]"
        )
        self.seed = seed
        self.index = index
        self.value = value
