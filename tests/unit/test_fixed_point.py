"""
Тесты для модуля Fixed Point

Проверяет:
1. Парсинг BigInt строк и decimals
2. Saturating арифметику на границах I256
3. Checked деление (усечение к нулю, деление на ноль)
4. Нормализацию к 18 знакам
5. Годовой коэффициент окна
"""

import pytest

from vaultyield.core.math.fixed_point import (
    DAY_SECONDS,
    I256_MAX,
    I256_MIN,
    ONE_18,
    YEAR_18,
    YEAR_SECONDS,
    MalformedInputError,
    annual_rate_18,
    checked_div,
    mul_div,
    parse_decimals,
    parse_int,
    saturate,
    saturating_add,
    saturating_mul,
    saturating_sub,
    scale_18,
    to_18_decimals,
    truncating_div,
)


# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestConstants:
    """Тесты канонических констант"""

    def test_one_unit(self) -> None:
        assert ONE_18 == 1_000_000_000_000_000_000

    def test_year(self) -> None:
        """Год = 365 дней, в 18-decimal"""
        assert YEAR_SECONDS == 365 * DAY_SECONDS
        assert YEAR_18 == YEAR_SECONDS * ONE_18

    def test_i256_bounds(self) -> None:
        assert I256_MAX == 2**255 - 1
        assert I256_MIN == -(2**255)


# =============================================================================
# ТЕСТЫ ПАРСИНГА
# =============================================================================


class TestParseInt:
    """Тесты для parse_int"""

    def test_decimal_strings(self) -> None:
        assert parse_int("0") == 0
        assert parse_int("-2000000000000000000") == -2 * ONE_18
        assert parse_int("5000000000000000000") == 5 * ONE_18

    def test_int_passthrough(self) -> None:
        assert parse_int(42) == 42

    def test_malformed_raises(self) -> None:
        """Нецелые строки → MalformedInputError"""
        for value in ["", "abc", "1.5", "1e18", "0x10"]:
            with pytest.raises(MalformedInputError):
                parse_int(value, "amount")

    def test_error_names_field(self) -> None:
        with pytest.raises(MalformedInputError, match="timestamp"):
            parse_int("yesterday", "timestamp")

    def test_malformed_is_value_error(self) -> None:
        """MalformedInputError совместим с ValueError"""
        with pytest.raises(ValueError):
            parse_int("abc")

    def test_bool_rejected(self) -> None:
        with pytest.raises(MalformedInputError):
            parse_int(True)  # type: ignore[arg-type]


class TestParseDecimals:
    """Тесты для parse_decimals"""

    def test_none_defaults_to_18(self) -> None:
        assert parse_decimals(None) == 18

    def test_custom_default(self) -> None:
        assert parse_decimals(None, default=6) == 6

    def test_string_value(self) -> None:
        assert parse_decimals("6") == 6

    def test_negative_rejected(self) -> None:
        with pytest.raises(MalformedInputError, match="non-negative"):
            parse_decimals("-1")

    def test_malformed_rejected(self) -> None:
        with pytest.raises(MalformedInputError):
            parse_decimals("six")


# =============================================================================
# ТЕСТЫ SATURATING АРИФМЕТИКИ
# =============================================================================


class TestSaturating:
    """Тесты saturating операций"""

    def test_saturate_in_range_unchanged(self) -> None:
        assert saturate(0) == 0
        assert saturate(-ONE_18) == -ONE_18
        assert saturate(I256_MAX) == I256_MAX
        assert saturate(I256_MIN) == I256_MIN

    def test_saturate_clamps(self) -> None:
        assert saturate(I256_MAX + 1) == I256_MAX
        assert saturate(I256_MIN - 1) == I256_MIN

    def test_add_saturates(self) -> None:
        assert saturating_add(I256_MAX, 1) == I256_MAX
        assert saturating_add(I256_MIN, -1) == I256_MIN
        assert saturating_add(2, 3) == 5

    def test_sub_saturates(self) -> None:
        assert saturating_sub(I256_MIN, 1) == I256_MIN
        assert saturating_sub(5, 7) == -2

    def test_mul_saturates(self) -> None:
        assert saturating_mul(I256_MAX, 2) == I256_MAX
        assert saturating_mul(I256_MAX, -2) == I256_MIN
        assert saturating_mul(ONE_18, ONE_18) == ONE_18 * ONE_18


# =============================================================================
# ТЕСТЫ CHECKED ДЕЛЕНИЯ
# =============================================================================


class TestCheckedDiv:
    """Тесты checked_div"""

    def test_exact(self) -> None:
        assert checked_div(10, 2) == 5

    def test_truncates_toward_zero(self) -> None:
        """Усечение к нулю, а не floor"""
        assert checked_div(7, 2) == 3
        assert checked_div(-7, 2) == -3
        assert checked_div(7, -2) == -3
        assert checked_div(-7, -2) == 3

    def test_division_by_zero_is_none(self) -> None:
        assert checked_div(1, 0) is None
        assert checked_div(0, 0) is None

    def test_min_by_minus_one_saturates(self) -> None:
        assert checked_div(I256_MIN, -1) == I256_MAX

    def test_mul_div(self) -> None:
        assert mul_div(5 * ONE_18, 3_500_000_000_000_000_000, ONE_18) == 17_500_000_000_000_000_000
        assert mul_div(1, 1, 0) is None


class TestTruncatingDiv:
    """Тесты truncating_div и scale_18 (делители-константы)"""

    def test_truncates_toward_zero(self) -> None:
        assert truncating_div(-7, 2) == -3
        assert truncating_div(7, -2) == -3
        assert truncating_div(-7, -2) == 3

    def test_zero_divisor_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            truncating_div(1, 0)

    def test_min_by_minus_one_saturates(self) -> None:
        assert truncating_div(I256_MIN, -1) == I256_MAX

    def test_scale_18(self) -> None:
        assert scale_18(5 * ONE_18, 3_500_000_000_000_000_000) == 17_500_000_000_000_000_000
        assert scale_18(-ONE_18, 285_714_285_714_285_714) == -285_714_285_714_285_714
        assert scale_18(I256_MAX, 2 * ONE_18) == I256_MAX // ONE_18


# =============================================================================
# ТЕСТЫ НОРМАЛИЗАЦИИ
# =============================================================================


class TestTo18Decimals:
    """Тесты to_18_decimals"""

    def test_18_decimals_unchanged(self) -> None:
        assert to_18_decimals("5000000000000000000", "18") == 5 * ONE_18

    def test_6_decimals_scaled(self) -> None:
        assert to_18_decimals("1000000", "6") == ONE_18
        assert to_18_decimals("1", "6") == 10**12

    def test_sign_preserved(self) -> None:
        assert to_18_decimals("-2000000", "6") == -2 * ONE_18

    def test_zero_decimals(self) -> None:
        assert to_18_decimals("3", "0") == 3 * ONE_18

    def test_more_than_18_decimals_truncates(self) -> None:
        """decimals > 18: лишние разряды отбрасываются к нулю"""
        assert to_18_decimals("1999", "21") == 1
        assert to_18_decimals("-1999", "21") == -1

    def test_missing_decimals_defaults_to_18(self) -> None:
        assert to_18_decimals("42", None) == 42

    def test_missing_decimals_custom_default(self) -> None:
        assert to_18_decimals("42", None, default_decimals=16) == 4200

    def test_malformed_amount_raises(self) -> None:
        with pytest.raises(MalformedInputError):
            to_18_decimals("1,000", "18")

    def test_malformed_decimals_raises(self) -> None:
        with pytest.raises(MalformedInputError):
            to_18_decimals("1000", "eighteen")

    def test_huge_amount_saturates(self) -> None:
        assert to_18_decimals(str(2**250), "0") == I256_MAX


# =============================================================================
# ТЕСТЫ ГОДОВОГО КОЭФФИЦИЕНТА
# =============================================================================


class TestAnnualRate:
    """Тесты annual_rate_18"""

    def test_full_year_is_one(self) -> None:
        assert annual_rate_18(0, YEAR_SECONDS) == ONE_18

    def test_half_year(self) -> None:
        assert annual_rate_18(100, 100 + YEAR_SECONDS // 2) == ONE_18 // 2

    def test_empty_window_is_zero(self) -> None:
        assert annual_rate_18(10, 10) == 0

    def test_truncated(self) -> None:
        """1e7 секунд: 1e25 / 31_536_000, усечено"""
        assert annual_rate_18(1, 10_000_001) == 317_097_919_837_645_865
