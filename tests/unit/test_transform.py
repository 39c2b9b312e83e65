"""
Тесты для Transform Engine — FFT / NTT и кэши корней

Проверяемые инварианты:
1. inverse(forward(x)) == N · x для FFT (без деления на N)
2. inverse(forward(x)) == x для NTT (деление через N^-1 mod p)
3. Поточечное произведение даёт циклическую свёртку
4. Таблицы корней растут лениво и никогда не уменьшаются
5. Недопустимая длина → TransformLengthError
"""

import random

import pytest

from bignum.core.math.errors import TransformLengthError
from bignum.core.math.transform import (
    NTT_MAX_LEVEL,
    NTT_PRIME_A,
    NTT_PRIME_B,
    ModularRootTable,
    RootTable,
    fft,
    get_modular_table,
    get_root_table,
    ntt,
)


def cyclic_convolution(a, b, modulus=None):
    """Наивная циклическая свёртка (оракул)."""
    n = len(a)
    out = [0] * n
    for i in range(n):
        for j in range(n):
            out[(i + j) % n] += a[i] * b[j]
    if modulus is not None:
        out = [v % modulus for v in out]
    return out


# =============================================================================
# ТЕСТЫ: Root tables
# =============================================================================


class TestRootTable:
    """Ленивый grow-only кэш корней."""

    def test_lazy_growth(self):
        table = RootTable(max_level=6)
        assert table.levels == 0
        table.ensure(8)
        assert table.levels == 3

    def test_never_shrinks(self):
        table = RootTable(max_level=6)
        table.ensure(16)
        first_level = table.roots(0)
        table.ensure(4)
        assert table.levels == 4
        assert table.roots(0) is first_level

    def test_level_zero_root_is_one(self):
        table = RootTable(max_level=4)
        table.ensure(2)
        assert table.roots(0) == [complex(1.0, 0.0)]
        assert table.roots(0, inverse=True) == [complex(1.0, -0.0)]

    def test_inverse_roots_are_conjugates(self):
        table = RootTable(max_level=6)
        table.ensure(64)
        for level in range(table.levels):
            for w, w_inv in zip(table.roots(level), table.roots(level, inverse=True)):
                assert w_inv == w.conjugate()
                assert abs(abs(w) - 1.0) < 1e-12

    def test_rejects_non_power_of_two(self):
        table = RootTable(max_level=6)
        with pytest.raises(TransformLengthError):
            table.ensure(12)
        with pytest.raises(TransformLengthError):
            table.ensure(1)

    def test_rejects_length_above_limit(self):
        table = RootTable(max_level=4)
        with pytest.raises(TransformLengthError):
            table.ensure(32)

    def test_bit_reversal(self):
        table = RootTable(max_level=4)
        assert table.bit_reversal(8) == [0, 4, 2, 6, 1, 5, 3, 7]
        assert table.bit_reversal(8) is table.bit_reversal(8)

    def test_process_table_is_shared(self):
        assert get_root_table() is get_root_table()
        assert get_root_table().max_level == NTT_MAX_LEVEL


class TestModularRootTable:
    """Корни по модулю NTT-простых."""

    def test_two_adicity(self):
        assert ModularRootTable(NTT_PRIME_A).max_level == 23
        assert ModularRootTable(NTT_PRIME_B).max_level == 26

    def test_roots_have_exact_order(self):
        table = ModularRootTable(NTT_PRIME_A)
        table.ensure(16)
        for level in range(table.levels):
            roots = table.roots(level)
            w = roots[1] if len(roots) > 1 else None
            if w is not None:
                order = 2 * len(roots)
                assert pow(w, order, NTT_PRIME_A) == 1
                assert pow(w, order // 2, NTT_PRIME_A) == NTT_PRIME_A - 1

    def test_forward_times_inverse_is_one(self):
        table = ModularRootTable(NTT_PRIME_B)
        table.ensure(32)
        for level in range(table.levels):
            for w, w_inv in zip(table.roots(level), table.roots(level, inverse=True)):
                assert w * w_inv % NTT_PRIME_B == 1

    def test_unknown_prime_rejected(self):
        with pytest.raises(ValueError):
            get_modular_table(17)


# =============================================================================
# ТЕСТЫ: FFT
# =============================================================================


class TestFFT:
    """Комплексное FFT."""

    def test_round_trip_scales_by_length(self):
        rng = random.Random(5)
        length = 64
        values = [rng.randrange(0, 10_000) for _ in range(length)]
        samples = [complex(v, 0.0) for v in values]
        fft(samples)
        fft(samples, inverse=True)
        for z, v in zip(samples, values):
            assert abs(z.real / length - v) < 1e-6
            assert abs(z.imag / length) < 1e-6

    def test_convolution(self):
        rng = random.Random(9)
        length = 32
        a = [rng.randrange(0, 10_000) for _ in range(length)]
        b = [rng.randrange(0, 10_000) for _ in range(length)]
        fa = [complex(v, 0.0) for v in a]
        fb = [complex(v, 0.0) for v in b]
        fft(fa)
        fft(fb)
        product = [x * y for x, y in zip(fa, fb)]
        fft(product, inverse=True)
        result = [round(z.real / length) for z in product]
        assert result == cyclic_convolution(a, b)

    def test_rejects_bad_length(self):
        with pytest.raises(TransformLengthError):
            fft([complex(1.0, 0.0)] * 3)


# =============================================================================
# ТЕСТЫ: NTT
# =============================================================================


class TestNTT:
    """Number-theoretic transform."""

    @pytest.mark.parametrize("prime", [NTT_PRIME_A, NTT_PRIME_B])
    def test_round_trip_exact(self, prime):
        rng = random.Random(prime)
        values = [rng.randrange(0, prime) for _ in range(128)]
        samples = list(values)
        ntt(samples, prime)
        ntt(samples, prime, inverse=True)
        assert samples == values

    @pytest.mark.parametrize("prime", [NTT_PRIME_A, NTT_PRIME_B])
    def test_convolution(self, prime):
        rng = random.Random(prime + 1)
        length = 16
        a = [rng.randrange(0, 10_000) for _ in range(length)]
        b = [rng.randrange(0, 10_000) for _ in range(length)]
        fa, fb = list(a), list(b)
        ntt(fa, prime)
        ntt(fb, prime)
        product = [x * y % prime for x, y in zip(fa, fb)]
        ntt(product, prime, inverse=True)
        assert product == cyclic_convolution(a, b, prime)

    def test_unknown_prime_rejected(self):
        with pytest.raises(ValueError):
            ntt([1, 2], 17)
