"""
Runner - Seeded Property Checks

TigerStyle: A single seed controls every sample of a check, and it is
always reported on failure so the run can be replayed.

Usage:
    @gen_test(choose_int(0, 100).list())
    def test_sorted_is_idempotent(xs):
        assert sorted(sorted(xs)) == sorted(xs)

Run with seed:
    TANE_SEED=12345 pytest tests/
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, TypeVar

from .context import GenContext
from .errors import PropertyFailedError
from .gen import Gen

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _context_for(seed: int | None, size: int | None) -> GenContext:
    if seed is not None:
        return GenContext.with_seed(seed, size)
    return GenContext.from_env_or_random(size=size)


def check(
    gen: Gen[T],
    prop: Callable[[T], Any],
    samples: int | None = None,
    seed: int | None = None,
    size: int | None = None,
) -> int:
    """Run ``prop`` against ``samples`` values drawn from one context.

    Args:
        gen: Generator of inputs.
        prop: Raises (typically AssertionError) when the property fails.
        samples: Number of samples; defaults to the configured count.
        seed: Explicit seed; otherwise TANE_SEED or a random one.
        size: Size budget; otherwise the configured size.

    Returns:
        The seed used, for logging or replay.

    Raises:
        PropertyFailedError: On the first sample that fails to generate or
            fails the property. No shrinking.
    """
    if samples is None:
        from tane.core.config import get_settings
        samples = get_settings().samples_count
    assert samples > 0, f"samples ({samples}) must be positive"

    ctx = _context_for(seed, size)
    used_seed = ctx.rnd.seed

    for index in range(samples):
        # None when generation itself raised
        value = None
        try:
            value = gen.run(ctx)
            prop(value)
        except Exception as e:
            logger.error(f"Property failed on sample #{index} (replay with TANE_SEED={used_seed})")
            raise PropertyFailedError(used_seed, index, value, e) from e

    logger.debug(f"Property held for {samples} samples (seed={used_seed})")
    return used_seed


def gen_test(
    gen: Gen[T],
    *,
    samples: int | None = None,
    seed: int | None = None,
    size: int | None = None,
):
    """Decorator turning ``fn(value)`` into a zero-argument seeded check.

    Usage:
        @gen_test(ascii_string(), samples=500)
        def test_roundtrip(s):
            assert s.encode("ascii").decode("ascii") == s

        @gen_test(int32, seed=12345)
        def test_reproducible(i):
            ...
    """

    def decorator(test_func: Callable[[T], Any]):
        @functools.wraps(test_func)
        def wrapper() -> None:
            check(gen, test_func, samples=samples, seed=seed, size=size)

        # Hide the value parameter so pytest does not treat it as a fixture.
        wrapper.__signature__ = inspect.Signature()
        return wrapper

    return decorator
