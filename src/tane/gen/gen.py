"""
Gen - Composable Random Value Generator

A ``Gen[T]`` is nothing more than a function ``GenContext -> T``. Every
combinator builds a new ``Gen`` around the old one; nothing is mutated.

TigerStyle:
- Composition threads the *same* context left to right, so for a fixed seed
  the sequence of random draws is fixed by the shape of the expression
- No implicit retries anywhere

Usage:
    from tane.gen import Gen, GenContext, choose_int

    pairs = choose_int(0, 9).flat_map(lambda n: Gen.pure(n).pair())
    for value in pairs.samples_with(GenContext.with_seed(42)):
        ...
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Hashable, Iterable, Iterator, TypeVar

from . import sampling
from .context import GenContext
from .errors import PredicateUnsatisfiedError
from .types import Left, Right

if TYPE_CHECKING:
    from .size import SizeLike

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
B = TypeVar("B")
K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class Gen(Generic[T]):
    """Generator of values of type ``T``."""

    run: Callable[[GenContext], T]

    # =========================================================================
    # Sampling entry points
    # =========================================================================

    def samples(self) -> Iterator[T]:
        """Infinite stream of samples using the default size policy.

        The seed comes from TANE_SEED, otherwise it is random and logged.
        Use ``itertools.islice`` for a finite number of samples.
        """
        return self.samples_with(GenContext.from_env_or_random())

    def samples_sized(self, size: int) -> Iterator[T]:
        """Infinite stream of samples with an explicit size budget."""
        return self.samples_with(GenContext.from_env_or_random(size=size))

    def samples_with(self, ctx: GenContext) -> Iterator[T]:
        """Infinite stream of samples drawn from ``ctx``.

        Nothing is buffered; each pull is one fresh ``run``.
        """
        while True:
            yield self.run(ctx)

    def sample(self, ctx: GenContext, count: int) -> list[T]:
        """Draw exactly ``count`` samples from ``ctx``."""
        assert count >= 0, f"count ({count}) must be non-negative"
        return list(itertools.islice(self.samples_with(ctx), count))

    # =========================================================================
    # Monadic core
    # =========================================================================

    @staticmethod
    def pure(value: U) -> Gen[U]:
        """Always ``value``; consumes no randomness."""
        return Gen(lambda ctx: value)

    def map(self, f: Callable[[T], U]) -> Gen[U]:
        run = self.run
        return Gen(lambda ctx: f(run(ctx)))

    def flat_map(self, f: Callable[[T], Gen[U]]) -> Gen[U]:
        """Run this generator, then the one ``f`` builds from its value.

        Both stages see the same context, outer first.
        """
        run = self.run

        def _run(ctx: GenContext) -> U:
            return f(run(ctx)).run(ctx)

        return Gen(_run)

    def flatten(self: Gen[Gen[U]]) -> Gen[U]:
        return self.flat_map(lambda g: g)

    def with_filter(self, predicate: Callable[[T], bool]) -> Gen[T]:
        """Fail, rather than resample, when ``predicate`` rejects a value.

        Shape the distribution so the predicate almost always holds.

        Raises:
            PredicateUnsatisfiedError: from ``run`` when the value is rejected.
        """

        def _check(value: T) -> T:
            if predicate(value):
                return value
            raise PredicateUnsatisfiedError(value)

        return self.map(_check)

    # =========================================================================
    # Structural composition
    # =========================================================================

    def option(self) -> Gen[T | None]:
        """``None`` when the single bit is set, otherwise a value."""
        run = self.run
        return Gen(lambda ctx: None if ctx.next_bit() else run(ctx))

    def pair(self) -> Gen[tuple[T, T]]:
        run = self.run
        return Gen(lambda ctx: (run(ctx), run(ctx)))

    def triple(self) -> Gen[tuple[T, T, T]]:
        run = self.run
        return Gen(lambda ctx: (run(ctx), run(ctx), run(ctx)))

    def strength_l(self, b: B) -> Gen[tuple[B, T]]:
        return self.map(lambda a: (b, a))

    def strength_r(self, b: B) -> Gen[tuple[T, B]]:
        return self.map(lambda a: (a, b))

    def product(self, other: Gen[U]) -> Gen[tuple[T, U]]:
        """This value then ``other``'s, as a pair."""
        return self.flat_map(lambda a: other.map(lambda b: (a, b)))

    def either(self, other: Gen[U]) -> Gen[Left[T] | Right[U]]:
        """One bit picks the branch: set means ``Left`` from this generator."""
        run = self.run
        return Gen(lambda ctx: Left(run(ctx)) if ctx.next_bit() else Right(other.run(ctx)))

    def resize(self, size: int) -> Gen[T]:
        """Run with a different size budget; the caller's size is restored."""
        assert size >= 0, f"size ({size}) must be non-negative"
        run = self.run

        def _run(ctx: GenContext) -> T:
            with ctx.sized(size):
                return run(ctx)

        return Gen(_run)

    # =========================================================================
    # Collection-shaped generation
    # =========================================================================

    def fill_fold(self, n: int, zero: B, combine: Callable[[B, T], B]) -> Gen[B]:
        """Fold ``n`` generated values into ``zero`` without collecting them."""
        assert n >= 0, f"n ({n}) must be non-negative"
        return Gen(lambda ctx: sampling.fill_fold(self, n, zero, combine, ctx))

    def fill_fold_ss(self, ss: SizeLike, zero: B, combine: Callable[[B, T], B]) -> Gen[B]:
        from .size import as_size_spec
        return as_size_spec(ss).gen.flat_map(lambda n: self.fill_fold(n, zero, combine))

    def fill_fold_ss1(self, ss: SizeLike, zero: B, combine: Callable[[B, T], B]) -> Gen[B]:
        from .size import as_size_spec
        return as_size_spec(ss).gen1.flat_map(lambda n: self.fill_fold(n, zero, combine))

    def fill(self, n: int, into: Callable[[list[T]], Any] | None = None) -> Gen[Any]:
        """Exactly ``n`` values, in generation order.

        Args:
            n: Number of values to generate.
            into: Builds the result from the generated list (default: list).
        """
        assert n >= 0, f"n ({n}) must be non-negative"
        sampling.warn_large_fill(n)
        if into is None:
            return Gen(lambda ctx: sampling.fill_list(self, n, ctx))
        return Gen(lambda ctx: into(sampling.fill_list(self, n, ctx)))

    def fill_ss(self, ss: SizeLike = None, into: Callable[[list[T]], Any] | None = None) -> Gen[Any]:
        """Resolve a possibly-zero count from ``ss``, then fill."""
        from .size import as_size_spec
        return as_size_spec(ss).gen.flat_map(lambda n: self.fill(n, into))

    def fill_ss1(self, ss: SizeLike = None, into: Callable[[list[T]], Any] | None = None) -> Gen[Any]:
        """Resolve an at-least-one count from ``ss``, then fill."""
        from .size import as_size_spec
        return as_size_spec(ss).gen1.flat_map(lambda n: self.fill(n, into))

    def shuffle(self) -> Gen[Any]:
        """Uniform permutation of the generated sequence."""
        run = self.run

        def _run(ctx: GenContext) -> Any:
            original = run(ctx)
            buf = list(sampling.replayable(original))
            sampling.run_shuffle(buf, ctx.rnd)
            return sampling.rebuild(original, buf)

        return Gen(_run)

    def subset(self) -> Gen[Any]:
        """Uniform subset of the generated sequence, order preserved."""
        run = self.run

        def _run(ctx: GenContext) -> Any:
            original = run(ctx)
            kept = sampling.run_subset(sampling.replayable(original), ctx)
            return sampling.rebuild(original, kept)

        return Gen(_run)

    def subset1(self) -> Gen[Any]:
        """Non-empty subset, unless the generated sequence is itself empty."""
        run = self.run

        def _run(ctx: GenContext) -> Any:
            original = run(ctx)
            kept = sampling.run_subset1(sampling.replayable(original), ctx)
            return sampling.rebuild(original, kept)

        return Gen(_run)

    def take(self, n: SizeLike, empty: Callable[[], Any] = list) -> Gen[Any]:
        """Up to ``n`` distinct positions of the generated sequence, in random order.

        The count is drawn before the sequence is generated. A zero count
        returns ``empty()`` without running this generator.
        """
        from .size import as_size_spec

        count_run = as_size_spec(n).gen.run
        run = self.run

        def _run(ctx: GenContext) -> Any:
            count = count_run(ctx)
            if count == 0:
                return empty()
            original = run(ctx)
            taken = sampling.run_take(sampling.replayable(original), count, ctx.rnd)
            return sampling.rebuild(original, taken)

        return Gen(_run)

    def map_by(self, key_gen: Gen[K], ss: SizeLike = None) -> Gen[dict[K, T]]:
        """Dict of a drawn count of key/value pairs.

        Keys that collide overwrite earlier values, so the result may hold
        fewer entries than the count drawn.
        """
        from .size import as_size_spec

        count_run = as_size_spec(ss).gen.run
        run = self.run

        def _run(ctx: GenContext) -> dict[K, T]:
            result: dict[K, T] = {}
            for _ in range(count_run(ctx)):
                key = key_gen.run(ctx)
                result[key] = run(ctx)
            return result

        return Gen(_run)

    def map_to(self, value_gen: Gen[U], ss: SizeLike = None) -> Gen[dict[T, U]]:
        """Dict keyed by this generator's values."""
        return value_gen.map_by(self, ss)

    def map_by_key_subset(self, legal_keys: Iterable[K]) -> Gen[dict[K, T]]:
        """For each legal key, one bit decides whether a value is drawn for it."""
        keys = tuple(sampling.replayable(legal_keys))
        run = self.run

        def _run(ctx: GenContext) -> dict[K, T]:
            result: dict[K, T] = {}
            for key in keys:
                if ctx.next_bit():
                    result[key] = run(ctx)
            return result

        return Gen(_run)

    def map_by_each_key(self, keys: Iterable[K]) -> Gen[dict[K, T]]:
        """A fresh value for every key."""
        keys = tuple(sampling.replayable(keys))
        run = self.run
        return Gen(lambda ctx: {key: run(ctx) for key in keys})

    # =========================================================================
    # Named collection shapes
    #
    # Defined last: ``list``/``set``/``tuple`` shadow the builtins inside the
    # class body from here on.
    # =========================================================================

    def list(self, ss: SizeLike = None) -> Gen[list[T]]:
        return self.fill_ss(ss)

    def list1(self, ss: SizeLike = None) -> Gen[list[T]]:
        return self.fill_ss1(ss)

    def set(self, ss: SizeLike = None) -> Gen[set[T]]:
        """Set from a drawn count of values; duplicates coalesce."""
        return self.fill_ss(ss, set)

    def set1(self, ss: SizeLike = None) -> Gen[set[T]]:
        return self.fill_ss1(ss, set)

    def tuple(self, ss: SizeLike = None) -> Gen[tuple[T, ...]]:
        return self.fill_ss(ss, tuple)

    def tuple1(self, ss: SizeLike = None) -> Gen[tuple[T, ...]]:
        return self.fill_ss1(ss, tuple)

    def string(self: Gen[str], ss: SizeLike = None) -> Gen[str]:
        """String of this character generator's output."""
        from .combinators import string_of
        return string_of(self, ss)

    def string1(self: Gen[str], ss: SizeLike = None) -> Gen[str]:
        from .combinators import string_of1
        return string_of1(self, ss)
