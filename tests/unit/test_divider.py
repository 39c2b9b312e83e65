"""
Тесты для Divider — long division и Newton-Raphson reciprocal

Проверяемые инварианты:
1. reciprocal(x) == floor(RADIX^(2k) / x) точно
2. dividend == quotient · divisor + remainder, 0 <= remainder < divisor
3. Малое / большое → ([], dividend)
4. Вилка quotient_bracket всегда содержит истинный limb частного
5. Деление на ноль → DivisionByZeroError (ZeroDivisionError)
"""

import logging
import random

import pytest

from bignum.core.math.divider import (
    DivModResult,
    brute_force_divide,
    divmod_magnitude,
    newton_divide,
    quotient_bracket,
    reciprocal,
    use_brute_force_division,
)
from bignum.core.math.errors import DivisionByZeroError
from bignum.core.math.magnitude import from_native, is_canonical, to_native
from bignum.core.math.radix import RADIX

TOP = RADIX - 1


def random_limbs(rng: random.Random, size: int):
    """Случайная magnitude ровно из size limbs."""
    return [rng.randrange(0, RADIX) for _ in range(size - 1)] + [rng.randrange(1, RADIX)]


def assert_division(dividend, divisor, result):
    a, b = to_native(dividend), to_native(divisor)
    assert isinstance(result, DivModResult)
    assert is_canonical(result.quotient)
    assert is_canonical(result.remainder)
    assert to_native(result.quotient) == a // b
    assert to_native(result.remainder) == a % b


# =============================================================================
# ТЕСТЫ: Selection & bracket
# =============================================================================


class TestAlgorithmSelection:
    """use_brute_force_division."""

    def test_short_divisor(self):
        assert use_brute_force_division([1] * 100, [1] * 5, threshold=8)

    def test_small_length_gap(self):
        assert use_brute_force_division([1] * 20, [1] * 15, threshold=8)

    def test_long_divisor_and_gap(self):
        assert not use_brute_force_division([1] * 30, [1] * 10, threshold=8)

    def test_default_threshold(self):
        assert use_brute_force_division([1] * 100, [1] * 31)
        assert not use_brute_force_division([1] * 100, [1] * 32)


class TestQuotientBracket:
    """Замкнутая вилка для limb частного."""

    def test_single_limb_divisor_is_exact(self):
        assert quotient_bracket(from_native(7 * 12345 + 3), [12345]) == (7, 7)

    def test_bracket_contains_true_quotient(self):
        rng = random.Random(17)
        for _ in range(300):
            k = rng.randrange(2, 6)
            divisor = random_limbs(rng, k)
            d = to_native(divisor)
            q = rng.randrange(1, RADIX)
            r = d * q + rng.randrange(0, d)
            lo, hi = quotient_bracket(from_native(r), divisor)
            assert lo <= q <= hi < RADIX

    def test_bracket_is_narrow(self):
        divisor = [0, 0, 1]
        lo, hi = quotient_bracket(from_native(5 * RADIX**2), divisor)
        assert lo <= 5 <= hi
        assert hi - lo <= 1


# =============================================================================
# ТЕСТЫ: Long division
# =============================================================================


class TestBruteForceDivide:
    """Long division limb за limb."""

    def test_docstring_examples(self):
        assert divmod_magnitude([7], [2]) == DivModResult([3], [1])
        assert divmod_magnitude([5], [0, 1]) == DivModResult([], [5])

    def test_smaller_dividend(self):
        assert brute_force_divide([5], [7]) == DivModResult([], [5])
        assert brute_force_divide([], [7]) == DivModResult([], [])

    def test_exact_division(self):
        divisor = [TOP, TOP]
        dividend = from_native(to_native(divisor) * 123456789123456789)
        result = brute_force_divide(dividend, divisor)
        assert to_native(result.quotient) == 123456789123456789
        assert result.remainder == []

    def test_zero_limbs_in_dividend(self):
        dividend = [0, 0, 0, 0, 1]
        divisor = [1, 1]
        assert_division(dividend, divisor, brute_force_divide(dividend, divisor))

    def test_matches_native(self):
        rng = random.Random(23)
        for _ in range(150):
            divisor = random_limbs(rng, rng.randrange(1, 8))
            dividend = random_limbs(rng, rng.randrange(1, 20))
            assert_division(dividend, divisor, brute_force_divide(dividend, divisor))

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            brute_force_divide([1], [])


# =============================================================================
# ТЕСТЫ: Newton-Raphson
# =============================================================================


class TestReciprocal:
    """floor(RADIX^(2k) / x)."""

    @pytest.mark.parametrize("k", [1, 2, 4, 5, 6, 9, 13, 20, 33])
    def test_exact_for_random_x(self, k):
        rng = random.Random(k)
        for _ in range(5):
            x = random_limbs(rng, k)
            assert to_native(reciprocal(x)) == RADIX ** (2 * k) // to_native(x)

    @pytest.mark.parametrize("k", [5, 8, 17])
    def test_power_of_radix(self, k):
        x = [0] * (k - 1) + [1]
        assert to_native(reciprocal(x)) == RADIX ** (k + 1)

    @pytest.mark.parametrize("k", [5, 8, 17])
    def test_all_top_limbs(self, k):
        x = [TOP] * k
        assert to_native(reciprocal(x)) == RADIX ** (2 * k) // (RADIX**k - 1)

    @pytest.mark.parametrize("k", [6, 11])
    def test_smallest_top_limb(self, k):
        x = [TOP] * (k - 1) + [1]
        assert to_native(reciprocal(x)) == RADIX ** (2 * k) // to_native(x)

    def test_uses_transform_multiply(self):
        rng = random.Random(77)
        x = random_limbs(rng, 24)
        assert to_native(reciprocal(x, brute_threshold=2)) == RADIX**48 // to_native(x)

    def test_zero_rejected(self):
        with pytest.raises(DivisionByZeroError):
            reciprocal([])


class TestNewtonDivide:
    """Частное через reciprocal с точной коррекцией."""

    def test_matches_native(self):
        rng = random.Random(31)
        for _ in range(40):
            divisor = random_limbs(rng, rng.randrange(1, 16))
            dividend = random_limbs(rng, rng.randrange(len(divisor), 50))
            assert_division(dividend, divisor, newton_divide(dividend, divisor))

    def test_dividend_much_longer_than_divisor(self):
        rng = random.Random(37)
        divisor = random_limbs(rng, 6)
        dividend = random_limbs(rng, 40)
        assert_division(dividend, divisor, newton_divide(dividend, divisor))

    def test_exact_multiple(self):
        rng = random.Random(41)
        divisor = random_limbs(rng, 9)
        dividend = from_native(to_native(divisor) * to_native(random_limbs(rng, 12)))
        result = newton_divide(dividend, divisor)
        assert result.remainder == []
        assert_division(dividend, divisor, result)

    def test_remainder_one_below_divisor(self):
        divisor = [TOP] * 7
        d = to_native(divisor)
        dividend = from_native(d * (RADIX**5 + 3) + d - 1)
        assert_division(dividend, divisor, newton_divide(dividend, divisor))

    def test_smaller_dividend(self):
        assert newton_divide([5], [0, 1]) == DivModResult([], [5])

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            newton_divide([1], [])


class TestDivmodMagnitude:
    """Диспетчер: оба пути дают одинаковый результат."""

    @pytest.mark.parametrize("threshold", [1, 2, 4, 32])
    def test_across_threshold(self, threshold):
        rng = random.Random(threshold + 1000)
        for _ in range(25):
            divisor = random_limbs(rng, rng.randrange(1, 12))
            dividend = random_limbs(rng, rng.randrange(1, 30))
            result = divmod_magnitude(dividend, divisor, div_threshold=threshold)
            assert_division(dividend, divisor, result)

    def test_paths_agree(self):
        rng = random.Random(55)
        for _ in range(20):
            divisor = random_limbs(rng, rng.randrange(5, 10))
            dividend = random_limbs(rng, rng.randrange(15, 30))
            assert brute_force_divide(dividend, divisor) == newton_divide(dividend, divisor)

    def test_newton_dispatch_is_logged(self, caplog):
        rng = random.Random(66)
        divisor = random_limbs(rng, 4)
        dividend = random_limbs(rng, 12)
        with caplog.at_level(logging.DEBUG, logger="bignum.core.math.divider"):
            result = divmod_magnitude(dividend, divisor, div_threshold=2)
        assert_division(dividend, divisor, result)
        assert "newton division" in caplog.text

    def test_threshold_alongside_multiply_options(self):
        """Порог деления и пороги multiply() передаются вместе."""
        rng = random.Random(88)
        divisor = random_limbs(rng, 5)
        dividend = random_limbs(rng, 16)
        result = divmod_magnitude(
            dividend,
            divisor,
            div_threshold=2,
            brute_threshold=4,
            max_float_length=1 << 10,
            max_modular_length=1 << 12,
        )
        assert_division(dividend, divisor, result)

    def test_division_by_zero_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            divmod_magnitude([1], [])
