"""
Derived Generator Tests

Numeric ranges, characters, strings, choice, deferral and traversal.
"""

import os
import subprocess
import sys

import pytest

from tane.constants import CHAR_DRAW_COUNT, INT64_VALUE_MAX, INT64_VALUE_MIN
from tane.gen import (
    GenContext,
    alpha,
    alpha_numeric,
    alpha_numeric_string,
    ascii,
    ascii_string,
    by_name,
    by_need,
    char,
    choose,
    choose_char,
    choose_double,
    choose_float,
    choose_gen,
    choose_int,
    choose_long,
    choose_seq,
    choose_size,
    choose_size_min1,
    frequency,
    int8,
    int16,
    int32,
    lazily,
    lower,
    map_n,
    negative_int32,
    new_or_old,
    numeric,
    positive_int32,
    pure,
    sequence,
    set_seed,
    string,
    string_of,
    string_of1,
    traverse,
    traverse_gens,
    try_choose,
    try_gen_choose,
    tuple_of,
    unit,
    upper,
    upper_string,
)


# =============================================================================
# Integer Range Tests
# =============================================================================


class TestIntegerRanges:
    """Tests for choose_int and choose_long."""

    def test_choose_int_bounds(self, ctx):
        """Test values stay in [low, high] and hit both ends."""
        values = choose_int(-2, 3).sample(ctx, 1000)

        assert all(-2 <= v <= 3 for v in values)
        assert set(values) == {-2, -1, 0, 1, 2, 3}

    def test_choose_int_single_value(self, ctx):
        """Test low == high is a constant."""
        assert set(choose_int(5, 5).sample(ctx, 20)) == {5}

    def test_choose_int_bound_only(self, ctx):
        """Test the one-argument form is [0, bound)."""
        assert set(choose_int(4).sample(ctx, 500)) == {0, 1, 2, 3}

    def test_choose_int_one_draw(self, make_scripted_ctx):
        """Test the value is the enumerated range at the drawn index."""
        ctx = make_scripted_ctx(ints=[0, 5])

        assert choose_int(10, 15).run(ctx) == 10
        assert choose_int(10, 15).run(ctx) == 15
        assert ctx.rnd.bounds == [6, 6]

    def test_choose_int_reversed_fails(self):
        """Test reversed integer bounds fail assertion."""
        with pytest.raises(AssertionError):
            choose_int(3, 1)

    def test_choose_int_outside_int32_fails(self):
        """Test int32 limits are enforced."""
        with pytest.raises(AssertionError):
            choose_int(0, 2**31)

    def test_choose_long_full_width(self, ctx):
        """Test the full 64-bit range is supported."""
        values = choose_long(INT64_VALUE_MIN, INT64_VALUE_MAX).sample(ctx, 200)

        assert all(INT64_VALUE_MIN <= v <= INT64_VALUE_MAX for v in values)
        assert any(v < 0 for v in values)
        assert any(v > 0 for v in values)

    def test_choose_long_narrow(self, ctx):
        """Test narrow 64-bit ranges."""
        base = 2**40
        assert set(choose_long(base, base + 2).sample(ctx, 200)) == {base, base + 1, base + 2}

    def test_primitive_widths(self, ctx):
        """Test narrow widths and signs."""
        assert all(-(2**15) <= v < 2**15 for v in int16.sample(ctx, 500))
        assert all(-128 <= v < 128 for v in int8.sample(ctx, 500))
        assert all(v >= 0 for v in positive_int32.sample(ctx, 500))
        assert all(v <= 0 for v in negative_int32.sample(ctx, 500))


# =============================================================================
# Floating Range Tests
# =============================================================================


class TestFloatRanges:
    """Tests for choose_double and choose_float."""

    def test_choose_double_bounds(self, ctx):
        """Test values stay between the bounds."""
        assert all(-10.0 <= v <= 10.0 for v in choose_double(-10.0, 10.0).sample(ctx, 1000))

    def test_choose_double_reversed(self, ctx):
        """Test reversed bounds are swapped."""
        assert all(1.0 <= v <= 2.0 for v in choose_double(2.0, 1.0).sample(ctx, 500))

    def test_choose_double_equal_bounds(self, ctx):
        """Test equal bounds collapse to a constant."""
        assert set(choose_double(2.5, 2.5).sample(ctx, 20)) == {2.5}

    def test_choose_double_scale_and_shift(self, make_scripted_ctx):
        """Test x maps to low + x * (high - low)."""
        ctx = make_scripted_ctx(doubles=[0.0, 0.5])

        assert choose_double(4.0, 8.0).run(ctx) == 4.0
        assert choose_double(8.0, 4.0).run(ctx) == 6.0

    def test_choose_float_bounds(self, ctx):
        """Test straddling, positive and reversed intervals."""
        assert all(-1.0 <= v <= 1.0 for v in choose_float(-1.0, 1.0).sample(ctx, 1000))
        assert all(2.0 <= v <= 4.0 for v in choose_float(2.0, 4.0).sample(ctx, 1000))
        assert all(-4.0 <= v <= -2.0 for v in choose_float(-2.0, -4.0).sample(ctx, 1000))

    def test_choose_float_equal_bounds(self, ctx):
        """Test equal bounds collapse to a constant."""
        assert set(choose_float(-3.0, -3.0).sample(ctx, 20)) == {-3.0}

    def test_choose_float_straddling_uses_convex_combination(self, make_scripted_ctx):
        """Test low*(1-x) + high*x across zero."""
        ctx = make_scripted_ctx(floats=[0.0, 0.5, 0.25])

        assert choose_float(-3.0, 1.0).run(ctx) == -3.0
        assert choose_float(1.0, -3.0).run(ctx) == -1.0
        assert choose_float(-4.0, 4.0).run(ctx) == -2.0

    def test_choose_float_one_sided(self, make_scripted_ctx):
        """Test scale-and-shift when the interval does not cross zero."""
        ctx = make_scripted_ctx(floats=[0.5, 0.75])

        assert choose_float(2.0, 4.0).run(ctx) == 3.0
        assert choose_float(-4.0, 0.0).run(ctx) == -1.0


# =============================================================================
# Character Tests
# =============================================================================


class TestCharacters:
    """Tests for char and the character classes."""

    def test_char_never_surrogate(self, ctx):
        """Test no UTF-16 surrogate code point is ever produced."""
        for c in char.sample(ctx, 20_000):
            code = ord(c)
            assert 1 <= code <= 0x10FFFF
            assert not 0xD800 <= code <= 0xDFFF

    def test_char_mapping_skips_surrogates(self, make_scripted_ctx):
        """Test draws past the surrogate start are shifted over the block."""
        ctx = make_scripted_ctx(ints=[0, 0xD7FE, 0xD7FF, CHAR_DRAW_COUNT - 1])

        assert ord(char.run(ctx)) == 0x0001
        assert ord(char.run(ctx)) == 0xD7FF
        assert ord(char.run(ctx)) == 0xE000
        assert ord(char.run(ctx)) == 0x10FFFF

    def test_char_encodes_as_utf8(self, ctx):
        """Test generated strings are always valid UTF-8."""
        for s in string(20).sample(ctx, 200):
            assert s.encode("utf-8").decode("utf-8") == s

    def test_character_classes(self, ctx):
        """Test each class only yields its own characters."""
        assert all(c in "0123456789" for c in numeric.sample(ctx, 200))
        assert all("A" <= c <= "Z" for c in upper.sample(ctx, 200))
        assert all("a" <= c <= "z" for c in lower.sample(ctx, 200))
        assert all(c.isascii() and c.isalpha() for c in alpha.sample(ctx, 200))
        assert all(c.isascii() and c.isalnum() for c in alpha_numeric.sample(ctx, 200))
        assert all(32 <= ord(c) <= 126 for c in ascii.sample(ctx, 500))

    def test_character_class_coverage(self, ctx):
        """Test classes are uniform over their full tables."""
        assert len(set(numeric.sample(ctx, 500))) == 10
        assert len(set(alpha_numeric.sample(ctx, 5000))) == 62

    def test_choose_char(self, ctx):
        """Test picks come from the single char, the string and the ranges."""
        values = set(choose_char("_", "xy", ("a", "c")).sample(ctx, 500))
        assert values == {"_", "x", "y", "a", "b", "c"}


# =============================================================================
# String Tests
# =============================================================================


class TestStrings:
    """Tests for string assembly."""

    def test_empty_string_draws_nothing_else(self, recording_ctx):
        """Test a zero count short-circuits to the empty string."""
        assert string_of(upper, 0).run(recording_ctx) == ""
        assert recording_ctx.rnd.total == 0

    def test_exact_length(self, ctx):
        """Test exact sizes."""
        assert all(len(s) == 5 for s in ascii_string(5).sample(ctx, 50))

    def test_string_of1_never_empty(self, ctx):
        """Test at-least-one strings with size 0."""
        assert all(len(s) == 1 for s in string_of1(lower, 0).sample(ctx, 20))

    def test_char_generator_runs_count_times(self, ctx, make_counting):
        """Test the character generator is invoked exactly count times."""
        counting = make_counting(inner=upper)

        result = string_of(counting.gen, 6).run(ctx)

        assert len(result) == 6
        assert counting.calls == 6

    def test_class_strings(self, ctx):
        """Test class-specific string generators."""
        assert all(s.isupper() for s in upper_string(range(1, 8)).sample(ctx, 50))
        assert all(s.isalnum() for s in alpha_numeric_string((1, 8)).sample(ctx, 50))

    def test_string_method(self, ctx):
        """Test character generators build strings directly."""
        assert all(s.isdigit() and len(s) == 4 for s in numeric.string(4).sample(ctx, 20))
        assert all(len(s) >= 1 for s in lower.string1().sample(ctx, 20))


# =============================================================================
# Choice Tests
# =============================================================================


class TestChoice:
    """Tests for uniform choice helpers."""

    def test_choose(self, ctx):
        """Test every option is reachable."""
        assert set(choose("a", "b", "c").sample(ctx, 200)) == {"a", "b", "c"}

    def test_choose_seq_from_iterable(self, ctx):
        """Test arbitrary iterables are materialised."""
        assert set(choose_seq(x for x in "xyz").sample(ctx, 200)) == {"x", "y", "z"}

    def test_choose_empty_fails(self):
        """Test an empty choice fails assertion."""
        with pytest.raises(AssertionError):
            choose_seq([])

    def test_choose_gen(self, ctx):
        """Test a generator is picked then run."""
        assert set(choose_gen(pure(1), pure(2)).sample(ctx, 100)) == {1, 2}

    def test_try_choose(self, ctx):
        """Test empty gives None, otherwise optional picks."""
        assert set(try_choose([]).sample(ctx, 10)) == {None}
        assert set(try_choose([1]).sample(ctx, 100)) == {None, 1}
        assert try_gen_choose([]) is None
        assert try_gen_choose([1]).run(ctx) == 1

    def test_new_or_old(self, ctx):
        """Test both fresh and known values occur."""
        values = set(new_or_old(lambda: pure("new"), lambda: ["old"]).sample(ctx, 100))
        assert values == {"new", "old"}

    def test_new_or_old_empty_known(self, ctx):
        """Test an empty known set always falls back to fresh values."""
        assert set(new_or_old(lambda: pure("new"), lambda: []).sample(ctx, 50)) == {"new"}


# =============================================================================
# Deferral and Seeding Tests
# =============================================================================


class TestDeferral:
    """Tests for constants, by_name, by_need and set_seed."""

    def test_unit(self, ctx):
        """Test unit is None."""
        assert unit.run(ctx) is None

    def test_by_name_rebuilds(self, ctx):
        """Test the thunk runs on every run."""
        builds = []

        gen = by_name(lambda: builds.append(1) or pure("x"))

        assert builds == []
        gen.sample(ctx, 3)
        assert len(builds) == 3

    def test_by_need_builds_once(self, ctx):
        """Test the thunk runs on first use only."""
        builds = []

        gen = by_need(lambda: builds.append(1) or pure("x"))

        assert builds == []
        assert gen.sample(ctx, 3) == ["x", "x", "x"]
        assert len(builds) == 1

    def test_lazily_recursive(self, ctx):
        """Test recursive definitions through lazily."""
        depth = lazily(lambda: frequency((3, pure(0)), (1, depth.map(lambda d: d + 1))))

        values = depth.sample(ctx, 200)

        assert all(v >= 0 for v in values)
        assert max(values) > 0

    def test_set_seed(self, make_ctx):
        """Test reseeding inside a pipeline makes the rest reproducible."""
        gen = set_seed(99).flat_map(lambda _: int32.pair())

        assert gen.run(make_ctx(1)) == gen.run(make_ctx(2))
        assert gen.run(make_ctx(1)) == int32.pair().run(GenContext.with_seed(99))

    def test_choose_size(self, make_ctx):
        """Test size draws follow the context size."""
        ctx = make_ctx(1, 3)
        assert set(choose_size.sample(ctx, 200)) == {0, 1, 2, 3}
        assert set(choose_size_min1.sample(ctx, 200)) == {1, 2, 3}


# =============================================================================
# Traversal and Tuple Tests
# =============================================================================


class TestTraversal:
    """Tests for traverse, sequence, tuple_of and map_n."""

    def test_traverse_order_and_shape(self, ctx, make_counting):
        """Test items are visited in order; tuples stay tuples."""
        counting = make_counting()

        result = traverse(("a", "b", "c"), lambda s: counting.gen.map(lambda n: f"{s}{n}")).run(ctx)

        assert result == ("a1", "b2", "c3")

    def test_traverse_list(self, ctx):
        """Test lists come back as lists."""
        assert traverse([1, 2], lambda n: pure(n * 10)).run(ctx) == [10, 20]

    def test_traverse_gens(self, ctx):
        """Test each generator feeds the continuation."""
        result = traverse_gens([pure(1), pure(2)], lambda n: pure(n + 1)).run(ctx)
        assert result == [2, 3]

    def test_sequence(self, ctx, make_counting):
        """Test generators run left to right."""
        counting = make_counting()
        assert sequence([counting.gen, counting.gen, counting.gen]).run(ctx) == [1, 2, 3]

    def test_single_use_inputs_rerun(self, ctx):
        """Test one-shot iterables give full results on every run."""
        traversed = traverse((n for n in [1, 2]), lambda n: pure(n * 10))
        transformed = traverse_gens((g for g in [pure(1), pure(2)]), lambda n: pure(n + 1))
        sequenced = sequence(choose_int(0, 9) for _ in range(3))

        for _ in range(2):
            assert traversed.run(ctx) == [10, 20]
            assert transformed.run(ctx) == [2, 3]
            assert len(sequenced.run(ctx)) == 3

    def test_tuple_of(self, ctx, make_counting):
        """Test fixed-arity tuples of mixed generators."""
        counting = make_counting()

        result = tuple_of(counting.gen, pure("x"), counting.gen).run(ctx)

        assert result == (1, "x", 2)

    def test_map_n(self, ctx):
        """Test applying a function across generators."""
        assert map_n(lambda a, b, c: a + b * c, pure(1), pure(2), pure(3)).run(ctx) == 7


# =============================================================================
# Replay Across Processes
# =============================================================================

SET_DRAWS_SCRIPT = """
from tane.gen import GenContext, choose_int, choose_seq, subset, traverse

words = {"alpha", "beta", "gamma", "delta", "eps"}
ctx = GenContext.with_seed(7)
print(choose_seq(words).sample(ctx, 5))
print(sorted(subset(words).run(ctx)))
print(choose_int(0, 9).map_by_each_key(words).run(ctx))
print(choose_int(0, 9).map_by_key_subset(frozenset(words)).run(ctx))
print(traverse(words, lambda w: choose_int(0, 9).map(lambda n: w + str(n))).run(ctx))
"""


class TestSetInputs:
    """Set inputs draw in an order that does not depend on string hashing."""

    def test_sets_match_sorted_lists(self, make_ctx):
        """Test a set draws like its sorted list."""
        words = {"b", "c", "a", "d"}

        assert choose_seq(words).sample(make_ctx(7), 20) == choose_seq(sorted(words)).sample(make_ctx(7), 20)

    def test_unorderable_set_fails(self):
        """Test mixed-type sets are rejected rather than drawn in hash order."""
        with pytest.raises(AssertionError):
            choose_seq({1, "a"})

    def test_same_seed_across_hash_seeds(self):
        """Test one seed gives the same draws under different PYTHONHASHSEED values."""
        outputs = []
        for hash_seed in ("1", "2", "3"):
            env = {**os.environ, "PYTHONHASHSEED": hash_seed}
            env.pop("TANE_SEED", None)
            result = subprocess.run(
                [sys.executable, "-c", SET_DRAWS_SCRIPT],
                env=env,
                capture_output=True,
                text=True,
                check=True,
            )
            outputs.append(result.stdout)

        assert outputs[0] != ""
        assert outputs[0] == outputs[1] == outputs[2]
