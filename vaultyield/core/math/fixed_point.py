"""
Fixed Point — 18-decimal Signed Arithmetic

Модуль обеспечивает детерминированную целочисленную арифметику для всех
расчётов APY и объёмов:
- Каноническое представление: знаковое 256-битное целое, масштаб 10^18
- Нормализация сумм токенов с произвольной точностью (decimals) к 18 знакам
- Saturating умножение/сложение (clamp к диапазону I256 вместо переполнения)
- Checked деление (деление на ноль → None, а не исключение)
- Годовой коэффициент (annual rate) для временного окна

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой операции всегда лежит в [I256_MIN, I256_MAX]
2. Деление всегда усекает к нулю (как машинное целое), а не к -inf
3. Деление на делитель из данных никогда не бросает исключение (checked_div → None)
4. float не используется нигде
"""

from typing import Final

from vaultyield.core.errors import MalformedInputError

# =============================================================================
# ДИАПАЗОНЫ
# =============================================================================

# Знаковое 256-битное целое
I256_MAX: Final[int] = 2**255 - 1
I256_MIN: Final[int] = -(2**255)

# Беззнаковое 256-битное целое (балансы хранилищ)
U256_MAX: Final[int] = 2**256 - 1


# =============================================================================
# КОНСТАНТЫ (канонические единицы)
# =============================================================================

# Количество знаков канонического представления
CANONICAL_DECIMALS: Final[int] = 18

# Одна единица: 1.0 в 18-decimal представлении
ONE_18: Final[int] = 10**CANONICAL_DECIMALS

# Секунд в году (365 дней)
YEAR_SECONDS: Final[int] = 31_536_000

# Год в секундах, 18-decimal
YEAR_18: Final[int] = YEAR_SECONDS * ONE_18

# Секунд в сутках
DAY_SECONDS: Final[int] = 86_400


# =============================================================================
# ПАРСИНГ
# =============================================================================


def parse_int(value: str | int, name: str = "value") -> int:
    """
    Парсинг десятичной строки (BigInt scalar индексатора) в int.

    Args:
        value: Десятичная строка или int
        name: Имя поля (для сообщения об ошибке)

    Returns:
        Целое число

    Raises:
        MalformedInputError: Если значение не является целым числом

    Examples:
        >>> parse_int("-2000000000000000000")
        -2000000000000000000
        >>> parse_int("1.5")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        MalformedInputError: ...
    """
    if isinstance(value, bool):
        raise MalformedInputError(f"{name} must be an integer, got bool {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip(), 10)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"{name} is not an integer: {value!r}") from e


def parse_decimals(value: str | int | None, default: int = CANONICAL_DECIMALS) -> int:
    """
    Парсинг decimals токена. Отсутствующее значение → default (18).

    Raises:
        MalformedInputError: Если decimals не целое или отрицательное
    """
    if value is None:
        return default
    decimals = parse_int(value, "decimals")
    if decimals < 0:
        raise MalformedInputError(f"decimals must be non-negative, got {decimals}")
    return decimals


# =============================================================================
# SATURATING / CHECKED АРИФМЕТИКА
# =============================================================================


def saturate(value: int) -> int:
    """
    Clamp значения к диапазону I256.

    Examples:
        >>> saturate(2**300) == I256_MAX
        True
        >>> saturate(-(2**300)) == I256_MIN
        True
        >>> saturate(42)
        42
    """
    if value > I256_MAX:
        return I256_MAX
    if value < I256_MIN:
        return I256_MIN
    return value


def saturating_add(a: int, b: int) -> int:
    """a + b с насыщением на границах I256."""
    return saturate(a + b)


def saturating_sub(a: int, b: int) -> int:
    """a - b с насыщением на границах I256."""
    return saturate(a - b)


def saturating_mul(a: int, b: int) -> int:
    """a * b с насыщением на границах I256."""
    return saturate(a * b)


def truncating_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю на ненулевой делитель.

    Семантика совпадает с делением машинного знакового целого:
    -7 / 2 = -3 (а не -4, как у оператора //).
    Используется для делителей-констант (10^k, ONE_18, YEAR_18);
    для делителей из данных — checked_div.

    Raises:
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> truncating_div(-7, 2)
        -3
        >>> truncating_div(I256_MIN, -1) == I256_MAX
        True
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient

    # I256_MIN / -1 не помещается в диапазон
    return saturate(quotient)


def checked_div(numerator: int, denominator: int) -> int | None:
    """
    Целочисленное деление с усечением к нулю; деление на ноль → None.

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Returns:
        Частное (saturated), или None если denominator == 0

    Examples:
        >>> checked_div(7, 2)
        3
        >>> checked_div(-7, 2)
        -3
        >>> checked_div(7, 0) is None
        True
        >>> checked_div(I256_MIN, -1) == I256_MAX
        True
    """
    if denominator == 0:
        return None
    return truncating_div(numerator, denominator)


def mul_div(a: int, b: int, denominator: int) -> int | None:
    """
    saturating(a * b) / denominator — основной шаг fixed-point масштабирования.

    Returns:
        Результат или None при делении на ноль
    """
    return checked_div(saturating_mul(a, b), denominator)


def scale_18(amount: int, ratio: int) -> int:
    """
    amount * ratio / 1e18: пересчёт суммы по 18-decimal курсу.

    Examples:
        >>> scale_18(5 * ONE_18, 3_500_000_000_000_000_000) == 17_500_000_000_000_000_000
        True
    """
    return truncating_div(saturating_mul(amount, ratio), ONE_18)


# =============================================================================
# НОРМАЛИЗАЦИЯ К 18 ЗНАКАМ
# =============================================================================


def to_18_decimals(
    amount: str | int,
    decimals: str | int | None,
    default_decimals: int = CANONICAL_DECIMALS,
) -> int:
    """
    Конверсия суммы с точностью `decimals` в 18-decimal каноническое представление.

    Знак сохраняется. При decimals > 18 лишние разряды отбрасываются
    (усечение к нулю), при decimals <= 18 масштабирование точное.

    Args:
        amount: Сумма в нативных единицах токена (int или десятичная строка)
        decimals: Точность токена (None → default_decimals)
        default_decimals: Точность по умолчанию

    Returns:
        Сумма в канонических единицах (I256, saturated)

    Raises:
        MalformedInputError: Если amount или decimals не парсятся как целое

    Examples:
        >>> to_18_decimals("1000000", "6")
        1000000000000000000
        >>> to_18_decimals(-5, 18)
        -5
        >>> to_18_decimals("1234567890123456789012", 21)
        1234567890123456789
    """
    value = parse_int(amount, "amount")
    scale = parse_decimals(decimals, default_decimals)

    if scale <= CANONICAL_DECIMALS:
        return saturating_mul(value, 10 ** (CANONICAL_DECIMALS - scale))

    return truncating_div(value, 10 ** (scale - CANONICAL_DECIMALS))


def annual_rate_18(start: int, end: int) -> int:
    """
    Доля года, которую занимает окно [start, end], в 18-decimal.

    annual_rate = (end - start) * 1e18 * 1e18 / YEAR_18

    Args:
        start: Начало окна (секунды)
        end: Конец окна (секунды)

    Returns:
        Доля года (18-decimal); 0 для пустого окна, отрицательная при end < start

    Examples:
        >>> annual_rate_18(0, YEAR_SECONDS) == ONE_18
        True
        >>> annual_rate_18(5, 5)
        0
    """
    span_18 = saturating_mul(end - start, ONE_18)
    return truncating_div(saturating_mul(span_18, ONE_18), YEAR_18)
