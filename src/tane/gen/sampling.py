"""
Sampling Algorithms

Stateless procedures that consume a context's random source: Fisher-Yates
shuffle, Bernoulli subset, weighted pick and bounded fill. ``Gen`` and the
module-level combinators are thin wrappers over these.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, MutableSequence, Sequence, TypeVar

from ..constants import FREQUENCY_WEIGHT_TOTAL_MAX

if TYPE_CHECKING:
    from .context import GenContext
    from .gen import Gen
    from .rng import RandomSource
    from .types import Freq

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")


def rebuild(original: Any, items: list) -> Any:
    """Return ``items`` in the same shape as ``original`` where possible."""
    if isinstance(original, str):
        return "".join(items)
    if isinstance(original, (list, tuple)):
        return type(original)(items)
    if isinstance(original, (set, frozenset)):
        return type(original)(items)
    return items


def reusable(items: Iterable[A]) -> Any:
    """``items`` itself when it can be iterated again, otherwise a list of it."""
    if isinstance(items, (str, list, tuple, range, set, frozenset)):
        return items
    return list(items)


def replayable(items: Iterable[A]) -> Sequence[A]:
    """A sequence whose order does not depend on the process.

    Sets iterate in hash order, which changes with PYTHONHASHSEED, so they
    are sorted before any draw is matched to an element.
    """
    if isinstance(items, (set, frozenset)):
        try:
            ordered = sorted(items)
        except TypeError:
            ordered = None
        assert ordered is not None, \
            f"set elements must be orderable to draw from them reproducibly: {items!r}"
        return ordered
    if isinstance(items, (str, list, tuple, range)):
        return items
    return list(items)


def run_shuffle(buf: MutableSequence[A], rnd: RandomSource) -> None:
    """Fisher-Yates shuffle in place.

    Walks the index down from len-1 to 1, swapping with a uniform index in
    [0, i]. Consumes exactly len-1 draws (none for len <= 1).
    """
    i = len(buf) - 1
    while i > 0:
        k = rnd.next_int(i + 1)
        buf[i], buf[k] = buf[k], buf[i]
        i -= 1


def run_subset(items: Iterable[A], ctx: GenContext) -> list[A]:
    """Keep each element iff its own coin flip comes up set.

    Every one of the 2^n subsets is equally likely and kept elements stay in
    their original relative order.
    """
    return [item for item in items if ctx.next_bit()]


def run_subset1(items: Sequence[A], ctx: GenContext) -> list[A]:
    """Like ``run_subset`` but never empty for non-empty input."""
    kept = run_subset(items, ctx)
    if not kept and len(items) > 0:
        kept = [items[ctx.rnd.next_int(len(items))]]
    return kept


def run_take(items: Iterable[A], count: int, rnd: RandomSource) -> list[A]:
    """Shuffle a working copy then keep the first ``count`` elements."""
    buf = list(items)
    run_shuffle(buf, rnd)
    return buf[: min(count, len(buf))]


def frequency_total(weights: Sequence[int]) -> int:
    """Sum the weights of a weighted choice.

    TigerStyle: Bad weights are programmer error, so they are assertions.
    """
    report = "{" + ", ".join(str(w) for w in weights) + "}"
    total = 0
    for weight in weights:
        assert weight > 0, f"Gen.frequency: weight must be > 0, found {weight} in {report}."
        total += weight
        assert total <= FREQUENCY_WEIGHT_TOTAL_MAX, \
            f"Gen.frequency: Overflow detected adding {report}."
    return total


def frequency_pick(freqs: Sequence[Freq[A]], n: int) -> Gen[A]:
    """Select the entry whose cumulative weight first exceeds ``n``.

    Falls back to the last entry if ``n`` runs past the end.
    """
    for weight, gen in freqs:
        if n < weight:
            return gen
        n -= weight
    return freqs[-1][1]


def fill_fold(
    gen: Gen[A],
    count: int,
    zero: B,
    combine: Callable[[B, A], B],
    ctx: GenContext,
) -> B:
    """Run ``gen`` exactly ``count`` times, folding each value into ``zero``."""
    acc = zero
    for _ in range(count):
        acc = combine(acc, gen.run(ctx))
    return acc


def fill_list(gen: Gen[A], count: int, ctx: GenContext) -> list[A]:
    """Run ``gen`` exactly ``count`` times, preserving generation order."""
    return [gen.run(ctx) for _ in range(count)]


def warn_large_fill(count: int) -> None:
    """Log an advisory when a fill is unusually large. Never refuses."""
    from tane.core.config import get_settings

    threshold = get_settings().fill_warn_count
    if count >= threshold:
        logger.warning(f"Gen.fill instructed to create very large data: n={count}")
