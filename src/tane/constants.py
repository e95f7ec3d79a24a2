"""
Tane Constants - TigerStyle

All limits are explicit, named with units, big-endian naming convention.
Category comes first, specifics last: INT32_VALUE_MAX not MAX_INT32.
"""

# =============================================================================
# Integer Widths
# =============================================================================

INT32_VALUE_MIN: int = -(2**31)
INT32_VALUE_MAX: int = 2**31 - 1
INT64_VALUE_MIN: int = -(2**63)
INT64_VALUE_MAX: int = 2**63 - 1

SEED_MASK_64: int = 2**64 - 1  # Seeds are reduced to 64 bits

FLOAT32_MANTISSA_BITS: int = 24  # Granularity of next_float

# =============================================================================
# Size Limits
# =============================================================================

GEN_SIZE_DEFAULT: int = 30  # Default size budget for collection-shaped generators
FREQUENCY_WEIGHT_TOTAL_MAX: int = INT32_VALUE_MAX  # Cumulative weight must fit in int32
FILL_COUNT_WARN: int = 100_000  # Advisory warning for very large fills

# =============================================================================
# Character Limits
# =============================================================================

CODEPOINT_MAX: int = 0x10FFFF
SURROGATE_FIRST: int = 0xD800
SURROGATE_COUNT: int = 0x800  # 0xD800..0xDFFF
CHAR_DRAW_COUNT: int = CODEPOINT_MAX - SURROGATE_COUNT  # Code points 1..MAX minus surrogates

# =============================================================================
# Runner Limits
# =============================================================================

RUNNER_SAMPLES_COUNT_DEFAULT: int = 100
