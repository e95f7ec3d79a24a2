"""
Shared test fixtures for the Tane test suite.

Provides fixtures for:
- Seeded generation contexts
- Isolated settings (no TANE_* leakage between tests)
- Counting generators
"""

import pytest

from tane.core.config import get_settings
from tane.gen import Gen, GenContext


# =============================================================================
# Settings Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Clear TANE_* variables and the cached settings around every test."""
    for var in ("TANE_SEED", "TANE_SIZE", "TANE_FILL_WARN_COUNT", "TANE_SAMPLES_COUNT", "TANE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Contexts
# =============================================================================

@pytest.fixture
def ctx() -> GenContext:
    """A context seeded with 42 and the default size."""
    return GenContext.with_seed(42)


@pytest.fixture
def make_ctx() -> callable:
    """Factory for seeded contexts."""

    def _make_ctx(seed: int = 42, size: int | None = None) -> GenContext:
        return GenContext.with_seed(seed, size)

    return _make_ctx


# =============================================================================
# Counting Generators
# =============================================================================

class CountingGen:
    """Generator wrapper that counts how often it runs."""

    def __init__(self, inner: Gen | None = None) -> None:
        self.calls = 0
        self._inner = inner

    def _run(self, ctx: GenContext):
        self.calls += 1
        if self._inner is None:
            return self.calls
        return self._inner.run(ctx)

    @property
    def gen(self) -> Gen:
        return Gen(self._run)


@pytest.fixture
def make_counting() -> callable:
    """Factory for counting generators.

    Without an inner generator the value is the call number (1, 2, ...).
    """

    def _make_counting(inner: Gen | None = None) -> CountingGen:
        return CountingGen(inner)

    return _make_counting


# =============================================================================
# Instrumented Random Sources
# =============================================================================

class RecordingRng:
    """RandomSource that delegates to DeterministicRng and counts draws."""

    def __init__(self, seed: int = 42) -> None:
        from tane.gen import DeterministicRng

        self._inner = DeterministicRng(_seed=seed)
        self.calls: dict[str, int] = {}

    def _record(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    @property
    def seed(self) -> int:
        return self._inner.seed

    @property
    def total(self) -> int:
        return sum(self.calls.values())

    def next_int32(self) -> int:
        self._record("next_int32")
        return self._inner.next_int32()

    def next_int64(self) -> int:
        self._record("next_int64")
        return self._inner.next_int64()

    def next_double(self) -> float:
        self._record("next_double")
        return self._inner.next_double()

    def next_float(self) -> float:
        self._record("next_float")
        return self._inner.next_float()

    def next_bit(self) -> bool:
        self._record("next_bit")
        return self._inner.next_bit()

    def next_int(self, bound: int) -> int:
        self._record("next_int")
        return self._inner.next_int(bound)

    def set_seed(self, seed: int) -> None:
        self._record("set_seed")
        self._inner.set_seed(seed)


class ScriptedRng:
    """RandomSource that replays scripted draws, for exact-mapping tests."""

    def __init__(self, ints=(), floats=(), doubles=(), bits=()) -> None:
        self._ints = list(ints)
        self._floats = list(floats)
        self._doubles = list(doubles)
        self._bits = list(bits)
        self.bounds: list[int] = []

    def next_int32(self) -> int:
        return self._ints.pop(0)

    def next_int64(self) -> int:
        return self._ints.pop(0)

    def next_double(self) -> float:
        return self._doubles.pop(0)

    def next_float(self) -> float:
        return self._floats.pop(0)

    def next_bit(self) -> bool:
        return self._bits.pop(0)

    def next_int(self, bound: int) -> int:
        self.bounds.append(bound)
        value = self._ints.pop(0)
        assert 0 <= value < bound, f"scripted {value} outside [0, {bound})"
        return value

    def set_seed(self, seed: int) -> None:
        pass


@pytest.fixture
def recording_ctx() -> GenContext:
    """Context whose random source counts every draw (see ``ctx.rnd.calls``)."""
    return GenContext(rnd=RecordingRng(42), size=10)


@pytest.fixture
def make_scripted_ctx() -> callable:
    """Factory for contexts over a ScriptedRng."""

    def _make_scripted_ctx(size: int = 10, **draws) -> GenContext:
        return GenContext(rnd=ScriptedRng(**draws), size=size)

    return _make_scripted_ctx
