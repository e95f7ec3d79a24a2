"""
Tane Gen - Composable Random Value Generation

Seeded, deterministic generators for property-based testing.

Usage:
    from tane.gen import GenContext, choose_int, frequency, pure

    digits = choose_int(0, 9).list(range(1, 6))
    coin = frequency((1, pure("heads")), (3, pure("tails")))

    ctx = GenContext.with_seed(12345)
    print(digits.sample(ctx, 3), coin.run(ctx))

Run with seed:
    TANE_SEED=12345 pytest tests/
"""

from .rng import RandomSource, DeterministicRng
from .context import GenContext
from .errors import GenError, PredicateUnsatisfiedError, PropertyFailedError
from .types import Left, Right, Freq
from .gen import Gen
from .size import SizeSpec, DefaultSize, ExactSize, RangeSize, DEFAULT_SIZE, as_size_spec
from .combinators import (
    pure,
    unit,
    set_seed,
    choose_size,
    choose_size_min1,
    sized,
    by_name,
    by_need,
    lazily,
    int32,
    int64,
    int16,
    int8,
    float64,
    float32,
    boolean,
    positive_int32,
    positive_int64,
    positive_float64,
    positive_float32,
    negative_int32,
    negative_int64,
    negative_float64,
    negative_float32,
    choose_int,
    choose_long,
    choose_double,
    choose_float,
    choose_indexed,
    choose_seq,
    choose,
    choose_gen,
    try_choose,
    try_gen_choose,
    new_or_old,
    frequency,
    frequency_list,
    char,
    numeric,
    upper,
    lower,
    alpha,
    alpha_numeric,
    ascii,
    choose_char,
    string_of,
    string_of1,
    string,
    string1,
    upper_string,
    upper_string1,
    lower_string,
    lower_string1,
    alpha_string,
    alpha_string1,
    numeric_string,
    numeric_string1,
    alpha_numeric_string,
    alpha_numeric_string1,
    ascii_string,
    ascii_string1,
    shuffle,
    subset,
    subset1,
    take,
    traverse,
    traverse_gens,
    sequence,
    tuple_of,
    map_n,
)
from .runner import check, gen_test

__all__ = [
    # Random source
    "RandomSource",
    "DeterministicRng",
    # Context and size
    "GenContext",
    "SizeSpec",
    "DefaultSize",
    "ExactSize",
    "RangeSize",
    "DEFAULT_SIZE",
    "as_size_spec",
    # Errors
    "GenError",
    "PredicateUnsatisfiedError",
    "PropertyFailedError",
    # Core
    "Gen",
    "Left",
    "Right",
    "Freq",
    # Constants and deferral
    "pure",
    "unit",
    "set_seed",
    "choose_size",
    "choose_size_min1",
    "sized",
    "by_name",
    "by_need",
    "lazily",
    # Numbers
    "int32",
    "int64",
    "int16",
    "int8",
    "float64",
    "float32",
    "boolean",
    "positive_int32",
    "positive_int64",
    "positive_float64",
    "positive_float32",
    "negative_int32",
    "negative_int64",
    "negative_float64",
    "negative_float32",
    "choose_int",
    "choose_long",
    "choose_double",
    "choose_float",
    # Choice
    "choose_indexed",
    "choose_seq",
    "choose",
    "choose_gen",
    "try_choose",
    "try_gen_choose",
    "new_or_old",
    "frequency",
    "frequency_list",
    # Characters and strings
    "char",
    "numeric",
    "upper",
    "lower",
    "alpha",
    "alpha_numeric",
    "ascii",
    "choose_char",
    "string_of",
    "string_of1",
    "string",
    "string1",
    "upper_string",
    "upper_string1",
    "lower_string",
    "lower_string1",
    "alpha_string",
    "alpha_string1",
    "numeric_string",
    "numeric_string1",
    "alpha_numeric_string",
    "alpha_numeric_string1",
    "ascii_string",
    "ascii_string1",
    # Sampling
    "shuffle",
    "subset",
    "subset1",
    "take",
    # Traversal
    "traverse",
    "traverse_gens",
    "sequence",
    "tuple_of",
    "map_n",
    # Runner
    "check",
    "gen_test",
]
