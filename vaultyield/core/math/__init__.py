"""
Core math modules для vaultyield

Целочисленные fixed-point примитивы с гарантией детерминизма.
"""

from vaultyield.core.math.fixed_point import (
    # Ranges
    I256_MAX,
    I256_MIN,
    U256_MAX,
    # Canonical units
    CANONICAL_DECIMALS,
    DAY_SECONDS,
    ONE_18,
    YEAR_18,
    YEAR_SECONDS,
    # Exceptions
    MalformedInputError,
    # Parsing
    parse_decimals,
    parse_int,
    # Saturating / checked arithmetic
    checked_div,
    mul_div,
    scale_18,
    saturate,
    saturating_add,
    saturating_mul,
    saturating_sub,
    truncating_div,
    # Normalization
    annual_rate_18,
    to_18_decimals,
)

__all__ = [
    # Fixed Point — Ranges
    "I256_MAX",
    "I256_MIN",
    "U256_MAX",
    # Fixed Point — Canonical units
    "CANONICAL_DECIMALS",
    "DAY_SECONDS",
    "ONE_18",
    "YEAR_18",
    "YEAR_SECONDS",
    # Fixed Point — Exceptions
    "MalformedInputError",
    # Fixed Point — Parsing
    "parse_decimals",
    "parse_int",
    # Fixed Point — Arithmetic
    "checked_div",
    "mul_div",
    "scale_18",
    "saturate",
    "saturating_add",
    "saturating_mul",
    "saturating_sub",
    "truncating_div",
    # Fixed Point — Normalization
    "annual_rate_18",
    "to_18_decimals",
]
