"""
Derived Generators

Everything here is built from ``Gen`` and the sampling procedures:
constants and deferred generators, numeric ranges, characters and strings,
choice, weighted choice, traversal and tuples.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Optional, Sequence, TypeVar

from . import sampling
from .context import GenContext
from .gen import Gen
from .size import SizeLike, as_size_spec
from .types import Freq
from ..constants import (
    CHAR_DRAW_COUNT,
    INT32_VALUE_MAX,
    INT32_VALUE_MIN,
    INT64_VALUE_MAX,
    INT64_VALUE_MIN,
    SURROGATE_COUNT,
    SURROGATE_FIRST,
)

A = TypeVar("A")
B = TypeVar("B")


# =============================================================================
# Constants, seeding and deferral
# =============================================================================


def pure(value: A) -> Gen[A]:
    """Always ``value``; consumes no randomness."""
    return Gen.pure(value)


unit: Gen[None] = pure(None)


def set_seed(seed: int) -> Gen[None]:
    """Reseed the context's random source when run."""
    return Gen(lambda ctx: ctx.set_seed(seed))


choose_size: Gen[int] = Gen(lambda ctx: ctx.next_size())
"""A number in [0, size]."""

choose_size_min1: Gen[int] = Gen(lambda ctx: ctx.next_size_min1())
"""A number in [1, max(size, 1)]."""


def sized(f: Callable[[int], Gen[A]]) -> Gen[A]:
    """Build a generator from the current size budget."""
    return Gen(lambda ctx: f(ctx.size).run(ctx))


class _Need(Generic[A]):
    """Single-assignment cell: the thunk runs at most once."""

    __slots__ = ("_thunk", "_value", "_forced")

    def __init__(self, thunk: Callable[[], A]) -> None:
        self._thunk: Optional[Callable[[], A]] = thunk
        self._value: Optional[A] = None
        self._forced = False

    def get(self) -> A:
        if not self._forced:
            assert self._thunk is not None
            self._value = self._thunk()
            self._forced = True
            self._thunk = None
        return self._value  # type: ignore[return-value]


def by_name(thunk: Callable[[], Gen[A]]) -> Gen[A]:
    """Rebuild the generator from ``thunk`` on every run."""
    return Gen(lambda ctx: thunk().run(ctx))


def by_need(thunk: Callable[[], Gen[A]]) -> Gen[A]:
    """Build the generator on first run and reuse it afterwards.

    Useful for recursive definitions:

        tree = lazily(lambda: frequency((3, leaf), (1, tree.pair())))
    """
    cell = _Need(thunk)
    return Gen(lambda ctx: cell.get().run(ctx))


lazily = by_need


# =============================================================================
# Primitive numbers
# =============================================================================


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


int32: Gen[int] = Gen(lambda ctx: ctx.rnd.next_int32())
int64: Gen[int] = Gen(lambda ctx: ctx.rnd.next_int64())
int16: Gen[int] = int32.map(lambda i: _wrap(i, 16))
int8: Gen[int] = int32.map(lambda i: _wrap(i, 8))
float64: Gen[float] = Gen(lambda ctx: ctx.rnd.next_double())
float32: Gen[float] = Gen(lambda ctx: ctx.rnd.next_float())
boolean: Gen[bool] = Gen(lambda ctx: ctx.next_bit())

# Magnitudes are clamped so the minimum value stays inside its width.
positive_int32: Gen[int] = int32.map(lambda i: min(abs(i), INT32_VALUE_MAX))
positive_int64: Gen[int] = int64.map(lambda i: min(abs(i), INT64_VALUE_MAX))
positive_float64: Gen[float] = float64.map(abs)
positive_float32: Gen[float] = float32.map(abs)
negative_int32: Gen[int] = positive_int32.map(lambda i: -i)
negative_int64: Gen[int] = positive_int64.map(lambda i: -i)
negative_float64: Gen[float] = positive_float64.map(lambda x: -x)
negative_float32: Gen[float] = positive_float32.map(lambda x: -x)


# =============================================================================
# Ranges
# =============================================================================


def _choose_range(low: int, high: int) -> Gen[int]:
    # Index into the enumerated range; never reduce a wider draw modulo the span.
    values = range(low, high + 1)
    span = high - low + 1
    return Gen(lambda ctx: values[ctx.rnd.next_int(span)])


def choose_int(low: int, high: int | None = None) -> Gen[int]:
    """Uniform int.

    ``choose_int(bound)`` is in [0, bound); ``choose_int(low, high)`` is in
    [low, high], both inclusive.
    """
    if high is None:
        bound = low
        assert bound > 0, f"bound ({bound}) must be positive"
        return Gen(lambda ctx: ctx.rnd.next_int(bound))
    assert INT32_VALUE_MIN <= low <= INT32_VALUE_MAX, f"low ({low}) must fit in int32"
    assert INT32_VALUE_MIN <= high <= INT32_VALUE_MAX, f"high ({high}) must fit in int32"
    assert low <= high, f"low ({low}) must be <= high ({high})"
    return _choose_range(low, high)


def choose_long(low: int, high: int) -> Gen[int]:
    """Uniform 64-bit int in [low, high], both inclusive."""
    assert INT64_VALUE_MIN <= low <= INT64_VALUE_MAX, f"low ({low}) must fit in int64"
    assert INT64_VALUE_MIN <= high <= INT64_VALUE_MAX, f"high ({high}) must fit in int64"
    assert low <= high, f"low ({low}) must be <= high ({high})"
    return _choose_range(low, high)


def choose_double(low: float, high: float) -> Gen[float]:
    """Uniform double between the bounds; reversed bounds are swapped."""
    if high < low:
        low, high = high, low
    diff = high - low
    return float64.map(lambda x: x * diff + low)


def choose_float(low: float, high: float) -> Gen[float]:
    """Uniform single-precision draw between the bounds.

    Intervals straddling zero use ``low*(1-x) + high*x``; scale-and-shift
    would lose precision to cancellation near zero.
    """
    if high < low:
        low, high = high, low
    if (low <= 0 and high <= 0) or (low >= 0 and high >= 0):
        diff = high - low
        return float32.map(lambda x: low + diff * x)
    return float32.map(lambda x: low * (1 - x) + high * x)


# =============================================================================
# Choice
# =============================================================================


def choose_indexed(items: Sequence[A]) -> Gen[A]:
    """Uniformly pick one element. ``items`` must not be empty."""
    assert len(items) > 0, "items must not be empty"
    count = len(items)
    return Gen(lambda ctx: items[ctx.rnd.next_int(count)])


def choose_seq(items: Iterable[A]) -> Gen[A]:
    """Uniformly pick one element of any non-empty iterable.

    Sets are sorted first so a seed picks the same element in every process.
    """
    return choose_indexed(sampling.replayable(items))


def choose(first: A, *rest: A) -> Gen[A]:
    return choose_indexed((first,) + rest)


def choose_gen(first: Gen[A], *rest: Gen[A]) -> Gen[A]:
    """Uniformly pick a generator, then run it."""
    return choose(first, *rest).flatten()


def try_choose(items: Sequence[A]) -> Gen[Optional[A]]:
    """``None`` for no items, otherwise an optional uniform pick."""
    if len(items) == 0:
        return pure(None)
    return choose_seq(items).option()


def try_gen_choose(items: Sequence[A]) -> Optional[Gen[A]]:
    """A picker over ``items``, or ``None`` when there is nothing to pick."""
    if len(items) == 0:
        return None
    return choose_seq(items)


def new_or_old(new_gen: Callable[[], Gen[A]], old: Callable[[], Sequence[A]]) -> Gen[A]:
    """One bit decides between a fresh value and one from a known set.

    Falls back to a fresh value while the known set is empty. Both thunks
    are forced at most once.
    """
    fresh = _Need(new_gen)
    known = _Need(lambda: try_gen_choose(old()) or fresh.get())

    def _run(ctx: GenContext) -> A:
        gen = fresh.get() if ctx.next_bit() else known.get()
        return gen.run(ctx)

    return Gen(_run)


def frequency(first: Freq[A], *rest: Freq[A]) -> Gen[A]:
    """Weighted choice; each weight must be > 0.

    Usage:
        frequency((1, choose("a")), (3, choose("b")))
    """
    return frequency_list((first,) + rest)


def frequency_list(freqs: Sequence[Freq[A]]) -> Gen[A]:
    """Weighted choice over a non-empty sequence of (weight, generator).

    Each generator is chosen with probability exactly weight/total.
    """
    freqs = tuple(freqs)
    assert len(freqs) > 0, "freqs must not be empty"
    total = sampling.frequency_total([weight for weight, _ in freqs])
    if len(freqs) == 1:
        return freqs[0][1]

    def _run(ctx: GenContext) -> A:
        n = ctx.rnd.next_int(total)
        return sampling.frequency_pick(freqs, n).run(ctx)

    return Gen(_run)


# =============================================================================
# Characters and strings
# =============================================================================


def _char(ctx: GenContext) -> str:
    i = ctx.rnd.next_int(CHAR_DRAW_COUNT) + 1
    if i >= SURROGATE_FIRST:
        i += SURROGATE_COUNT
    return chr(i)


char: Gen[str] = Gen(_char)
"""Any code point from U+0001 to U+10FFFF except the surrogate block."""


def _char_span(first: str, last: str) -> tuple[str, ...]:
    return tuple(chr(i) for i in range(ord(first), ord(last) + 1))


CHARS_NUMERIC = _char_span("0", "9")
CHARS_UPPER = _char_span("A", "Z")
CHARS_LOWER = _char_span("a", "z")
CHARS_ALPHA = CHARS_UPPER + CHARS_LOWER
CHARS_ALPHA_NUMERIC = CHARS_ALPHA + CHARS_NUMERIC
CHARS_ASCII = _char_span(" ", "~")

numeric: Gen[str] = choose_indexed(CHARS_NUMERIC)
upper: Gen[str] = choose_indexed(CHARS_UPPER)
lower: Gen[str] = choose_indexed(CHARS_LOWER)
alpha: Gen[str] = choose_indexed(CHARS_ALPHA)
alpha_numeric: Gen[str] = choose_indexed(CHARS_ALPHA_NUMERIC)
ascii: Gen[str] = choose_indexed(CHARS_ASCII)


def choose_char(c: str, s: str = "", *ranges: tuple[str, str]) -> Gen[str]:
    """Uniform pick from ``s``, ``c`` and any inclusive (first, last) ranges.

    Usage:
        identifier_start = choose_char("_", "", ("a", "z"), ("A", "Z"))
    """
    chars = tuple(s) + (c,)
    for first, last in ranges:
        chars += _char_span(first, last)
    return choose_indexed(chars)


def _mk_string(chars: Gen[str], size: Gen[int]) -> Gen[str]:
    size_run = size.run
    char_run = chars.run

    def _run(ctx: GenContext) -> str:
        i = size_run(ctx)
        if i == 0:
            return ""
        buf = [""] * i
        while i > 0:
            i -= 1
            buf[i] = char_run(ctx)
        return "".join(buf)

    return Gen(_run)


def string_of(chars: Gen[str], ss: SizeLike = None) -> Gen[str]:
    return _mk_string(chars, as_size_spec(ss).gen)


def string_of1(chars: Gen[str], ss: SizeLike = None) -> Gen[str]:
    return _mk_string(chars, as_size_spec(ss).gen1)


def string(ss: SizeLike = None) -> Gen[str]:
    return string_of(char, ss)


def string1(ss: SizeLike = None) -> Gen[str]:
    return string_of1(char, ss)


def upper_string(ss: SizeLike = None) -> Gen[str]:
    return string_of(upper, ss)


def upper_string1(ss: SizeLike = None) -> Gen[str]:
    return string_of1(upper, ss)


def lower_string(ss: SizeLike = None) -> Gen[str]:
    return string_of(lower, ss)


def lower_string1(ss: SizeLike = None) -> Gen[str]:
    return string_of1(lower, ss)


def alpha_string(ss: SizeLike = None) -> Gen[str]:
    return string_of(alpha, ss)


def alpha_string1(ss: SizeLike = None) -> Gen[str]:
    return string_of1(alpha, ss)


def numeric_string(ss: SizeLike = None) -> Gen[str]:
    return string_of(numeric, ss)


def numeric_string1(ss: SizeLike = None) -> Gen[str]:
    return string_of1(numeric, ss)


def alpha_numeric_string(ss: SizeLike = None) -> Gen[str]:
    return string_of(alpha_numeric, ss)


def alpha_numeric_string1(ss: SizeLike = None) -> Gen[str]:
    return string_of1(alpha_numeric, ss)


def ascii_string(ss: SizeLike = None) -> Gen[str]:
    return string_of(ascii, ss)


def ascii_string1(ss: SizeLike = None) -> Gen[str]:
    return string_of1(ascii, ss)


# =============================================================================
# Plain-value sampling
# =============================================================================


def shuffle(items: Iterable[A]) -> Gen[Any]:
    return pure(sampling.reusable(items)).shuffle()


def subset(items: Iterable[A]) -> Gen[Any]:
    return pure(sampling.reusable(items)).subset()


def subset1(items: Iterable[A]) -> Gen[Any]:
    """Non-empty subset, unless ``items`` is empty."""
    return pure(sampling.reusable(items)).subset1()


def take(items: Iterable[A], n: SizeLike) -> Gen[Any]:
    """Up to ``n`` distinct elements; a zero count keeps the input's shape."""
    items = sampling.reusable(items)
    return pure(items).take(n, empty=lambda: sampling.rebuild(items, []))


# =============================================================================
# Traversal and tuples
# =============================================================================


def traverse(items: Iterable[A], f: Callable[[A], Gen[B]]) -> Gen[Any]:
    """Run ``f(item)`` for each item in order; tuples stay tuples."""
    as_tuple = isinstance(items, tuple)
    items = tuple(sampling.replayable(items))

    def _run(ctx: GenContext) -> Any:
        results = [f(item).run(ctx) for item in items]
        return tuple(results) if as_tuple else results

    return Gen(_run)


def traverse_gens(gens: Iterable[Gen[A]], f: Callable[[A], Gen[B]]) -> Gen[Any]:
    """Run each generator, then the generator ``f`` builds from its value."""
    as_tuple = isinstance(gens, tuple)
    gens = tuple(gens)

    def _run(ctx: GenContext) -> Any:
        results = [f(g.run(ctx)).run(ctx) for g in gens]
        return tuple(results) if as_tuple else results

    return Gen(_run)


def sequence(gens: Iterable[Gen[A]]) -> Gen[Any]:
    return traverse(gens, lambda g: g)


def tuple_of(*gens: Gen[Any]) -> Gen[tuple]:
    """One value from each generator, left to right."""
    runs = tuple(g.run for g in gens)
    return Gen(lambda ctx: tuple(run(ctx) for run in runs))


def map_n(fn: Callable[..., B], *gens: Gen[Any]) -> Gen[B]:
    """Apply ``fn`` to one value from each generator, left to right."""
    return tuple_of(*gens).map(lambda values: fn(*values))
