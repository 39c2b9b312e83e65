"""
Divider — Long Division & Newton-Raphson Reciprocal

Модуль делит magnitude с остатком двумя путями:
- brute_force_divide: long division limb за limb; каждый limb частного
  ищется бинарным поиском внутри замкнутой вилки, вычисленной по старшим
  limbs остатка и делителя
- newton_divide: reciprocal делителя методом Ньютона с удвоением точности,
  затем частное = (dividend × reciprocal) >> 2k с точной коррекцией

RECIPROCAL (k limbs, результат floor(RADIX^(2k) / x)):
    h = k // 2 + 2                       (два guard limbs)
    Y = reciprocal(top h limbs of x)     (рекурсивно, точный floor)
    Z = 2·Y·RADIX^(k-h) − floor(x·Y² / RADIX^(2h))
    Ошибка Ньютона: T·ε² при |ε| < RADIX^-(h-1), где T = RADIX^(2k)/x,
    поэтому Z ∈ [floor(T) − 1, floor(T) + 1] и коррекция до точного
    floor занимает не более двух шагов ±1.
    База: k <= 4 limbs — прямое деление native int.

ЧАСТНОЕ:
    Делимое и делитель сдвигаются на max(0, n − 2k) limbs, чтобы делимое
    умещалось в удвоенную длину делителя. При точном reciprocal оценка
    floor(a·Z / RADIX^(2k)) равна q или q − 1; коррекция ≤ 1 шага.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Остаток всегда вычисляется точно: dividend − quotient × divisor
2. 0 <= remainder < divisor
3. divisor == 0 → DivisionByZeroError
4. Выход коррекции за аналитическую границу → ConvergenceError
"""

import logging
from typing import Any, Final, NamedTuple, Sequence, Tuple

from bignum.core.math.errors import ConvergenceError, DivisionByZeroError
from bignum.core.math.magnitude import (
    Limbs,
    add,
    compare_magnitudes,
    decrement,
    divmod_small,
    from_native,
    increment,
    multiply_small,
    shift_limbs_left,
    shift_limbs_right,
    subtract,
    to_native,
    trim,
)
from bignum.core.math.multiplier import multiply
from bignum.core.math.radix import DEFAULT_BRUTE_DIV_THRESHOLD, RADIX

logger = logging.getLogger(__name__)

# =============================================================================
# NEWTON ПАРАМЕТРЫ
# =============================================================================

# Делители до этой длины обращаются прямым делением native int
RECIPROCAL_BASE_LENGTH: Final[int] = 4

# Дополнительные limbs точности при переходе к половинной длине
RECIPROCAL_GUARD_LIMBS: Final[int] = 2

# Аналитическая граница: ≤ 1 decrement или ≤ 1 increment; +1 запас
RECIPROCAL_MAX_CORRECTIONS: Final[int] = 3

# Аналитическая граница: оценка частного равна q или q − 1; +1 запас
QUOTIENT_MAX_CORRECTIONS: Final[int] = 2


# =============================================================================
# TYPES
# =============================================================================


class DivModResult(NamedTuple):
    """Частное и остаток (канонические magnitude)."""

    quotient: Limbs
    remainder: Limbs


# =============================================================================
# HELPERS
# =============================================================================


def _sum(lhs: Sequence[int], rhs: Sequence[int]) -> Limbs:
    if len(lhs) < len(rhs):
        lhs, rhs = rhs, lhs
    out = [0] * (len(lhs) + 1)
    if add(out, lhs, rhs):
        out[len(lhs)] = 1
    return trim(out)


def _difference(lhs: Sequence[int], rhs: Sequence[int]) -> Limbs:
    out = [0] * len(lhs)
    del out[subtract(out, lhs, rhs) :]
    return out


def _increment_in_place(limbs: Limbs) -> None:
    if increment(limbs, limbs):
        limbs.append(1)


def _decrement_in_place(limbs: Limbs) -> None:
    if decrement(limbs, limbs):
        limbs.pop()


def _power_of_radix(exponent: int) -> Limbs:
    """RADIX ** exponent как magnitude."""
    return [0] * exponent + [1]


# =============================================================================
# ALGORITHM SELECTION
# =============================================================================


def use_brute_force_division(
    dividend: Sequence[int],
    divisor: Sequence[int],
    threshold: int = DEFAULT_BRUTE_DIV_THRESHOLD,
) -> bool:
    """
    Выбор long division.

    Returns:
        True если делитель короче threshold или разрыв длин меньше threshold
    """
    return len(divisor) < threshold or len(dividend) - len(divisor) < threshold


# =============================================================================
# BRUTE FORCE (LONG DIVISION)
# =============================================================================


def quotient_bracket(remainder: Sequence[int], divisor: Sequence[int]) -> Tuple[int, int]:
    """
    Замкнутая вилка [lo, hi] для floor(remainder / divisor).

    Предусловие: divisor <= remainder < divisor × RADIX.

    Для однолимбового делителя деление точное (lo == hi). Иначе по старшим
    двум limbs делителя dt и соответствующей части остатка rt:
        dt·R^(k-2) <= divisor < (dt + 1)·R^(k-2)
        ⇒ rt // (dt + 1) <= q <= rt // dt

    Returns:
        (lo, hi), lo <= q <= hi < RADIX
    """
    k = len(divisor)
    if k == 1:
        q = to_native(remainder) // divisor[0]
        return q, q

    dt = divisor[-1] * RADIX + divisor[-2]
    rt = to_native(remainder[k - 2 :])
    return rt // (dt + 1), min(rt // dt, RADIX - 1)


def _select_quotient_limb(remainder: Sequence[int], divisor: Sequence[int]) -> int:
    lo, hi = quotient_bracket(remainder, divisor)
    while lo < hi:
        mid = (lo + hi + 1) >> 1
        if compare_magnitudes(multiply_small(divisor, mid), remainder) <= 0:
            lo = mid
        else:
            hi = mid - 1
    return lo


def brute_force_divide(dividend: Sequence[int], divisor: Sequence[int]) -> DivModResult:
    """
    Long division со старших limbs.

    Args:
        dividend: Делимое
        divisor: Делитель (не ноль)

    Returns:
        DivModResult(quotient, remainder)

    Raises:
        DivisionByZeroError: если divisor == 0
    """
    if not divisor:
        raise DivisionByZeroError("division by zero")
    if compare_magnitudes(dividend, divisor) < 0:
        return DivModResult([], list(dividend))

    if len(divisor) == 1:
        quotient, rem = divmod_small(dividend, divisor[0])
        return DivModResult(quotient, from_native(rem))

    n = len(dividend)
    k = len(divisor)
    quotient = [0] * (n - k + 1)
    remainder = list(dividend[n - k + 1 :])

    for i in range(n - k, -1, -1):
        remainder.insert(0, dividend[i])
        trim(remainder)
        if compare_magnitudes(remainder, divisor) < 0:
            continue

        q = _select_quotient_limb(remainder, divisor)
        del remainder[subtract(remainder, remainder, multiply_small(divisor, q)) :]
        quotient[i] = q

    return DivModResult(trim(quotient), remainder)


# =============================================================================
# NEWTON-RAPHSON
# =============================================================================


def reciprocal(x: Sequence[int], **multiply_options: Any) -> Limbs:
    """
    Точный масштабированный reciprocal: floor(RADIX^(2k) / x), k = len(x).

    Args:
        x: Каноническая ненулевая magnitude
        **multiply_options: Пороги, передаваемые в multiply()

    Returns:
        Magnitude reciprocal

    Raises:
        DivisionByZeroError: если x == 0
        ConvergenceError: если коррекция превысила аналитическую границу
    """
    k = len(x)
    if k == 0:
        raise DivisionByZeroError("reciprocal of zero")
    if k <= RECIPROCAL_BASE_LENGTH:
        return from_native(RADIX ** (2 * k) // to_native(x))

    h = k // 2 + RECIPROCAL_GUARD_LIMBS
    s = k - h
    y = reciprocal(x[s:], **multiply_options)

    # Z = 2·Y·R^s − floor(x·Y² / R^(2h))
    xyy = multiply(multiply(x, y, **multiply_options), y, **multiply_options)
    z = _difference(shift_limbs_left(_sum(y, y), s), shift_limbs_right(xyy, 2 * h))

    # Коррекция до точного floor: x·Z <= R^(2k) < x·(Z + 1)
    power = _power_of_radix(2 * k)
    product = multiply(x, z, **multiply_options)
    steps = 0
    while compare_magnitudes(product, power) > 0:
        _decrement_in_place(z)
        product = _difference(product, x)
        steps += 1
        if steps > RECIPROCAL_MAX_CORRECTIONS:
            raise ConvergenceError(f"reciprocal correction exceeded {steps} steps")

    while True:
        following = _sum(product, x)
        if compare_magnitudes(following, power) > 0:
            break
        _increment_in_place(z)
        product = following
        steps += 1
        if steps > RECIPROCAL_MAX_CORRECTIONS:
            raise ConvergenceError(f"reciprocal correction exceeded {steps} steps")

    return z


def newton_divide(
    dividend: Sequence[int], divisor: Sequence[int], **multiply_options: Any
) -> DivModResult:
    """
    Деление через reciprocal делителя.

    Args:
        dividend: Делимое (>= divisor)
        divisor: Делитель (не ноль)
        **multiply_options: Пороги, передаваемые в multiply()

    Returns:
        DivModResult(quotient, remainder) с точно проверенным остатком

    Raises:
        DivisionByZeroError: если divisor == 0
        ConvergenceError: если коррекция превысила аналитическую границу
    """
    if not divisor:
        raise DivisionByZeroError("division by zero")
    if compare_magnitudes(dividend, divisor) < 0:
        return DivModResult([], list(dividend))

    n = len(dividend)
    k = len(divisor)
    shift = max(0, n - 2 * k)
    scaled_length = k + shift

    z = reciprocal(shift_limbs_left(divisor, shift), **multiply_options)
    estimate = multiply(shift_limbs_left(dividend, shift), z, **multiply_options)
    quotient = shift_limbs_right(estimate, 2 * scaled_length)

    # Коррекция: q·b <= a < (q + 1)·b
    product = multiply(quotient, divisor, **multiply_options)
    steps = 0
    while compare_magnitudes(product, dividend) > 0:
        _decrement_in_place(quotient)
        product = _difference(product, divisor)
        steps += 1
        if steps > QUOTIENT_MAX_CORRECTIONS:
            raise ConvergenceError(f"quotient correction exceeded {steps} steps")

    remainder = _difference(dividend, product)
    while compare_magnitudes(remainder, divisor) >= 0:
        _increment_in_place(quotient)
        remainder = _difference(remainder, divisor)
        steps += 1
        if steps > QUOTIENT_MAX_CORRECTIONS:
            raise ConvergenceError(f"quotient correction exceeded {steps} steps")

    return DivModResult(quotient, remainder)


# =============================================================================
# DISPATCH
# =============================================================================


def divmod_magnitude(
    dividend: Sequence[int],
    divisor: Sequence[int],
    div_threshold: int = DEFAULT_BRUTE_DIV_THRESHOLD,
    **multiply_options: Any,
) -> DivModResult:
    """
    Деление magnitude с остатком и выбором алгоритма.

    Args:
        dividend: Делимое
        divisor: Делитель
        div_threshold: Порог long division (в limbs)
        **multiply_options: Пороги multiply() для Newton пути

    Returns:
        DivModResult(quotient, remainder)

    Raises:
        DivisionByZeroError: если divisor == 0

    Examples:
        >>> divmod_magnitude([7], [2])
        DivModResult(quotient=[3], remainder=[1])
        >>> divmod_magnitude([5], [0, 1])
        DivModResult(quotient=[], remainder=[5])
    """
    if not divisor:
        raise DivisionByZeroError("division by zero")
    if compare_magnitudes(dividend, divisor) < 0:
        return DivModResult([], list(dividend))

    if use_brute_force_division(dividend, divisor, div_threshold):
        return brute_force_divide(dividend, divisor)

    logger.debug(
        "newton division: dividend %d limbs, divisor %d limbs",
        len(dividend),
        len(divisor),
    )
    return newton_divide(dividend, divisor, **multiply_options)
