"""
Multiplier — Brute-Force & Transform-Based Multiplication

Модуль выбирает алгоритм умножения magnitude по размеру операндов:
- brute_force_multiply: O(n·m) schoolbook с carry в заранее обнулённый буфер
- transform_multiply: свёртка через FFT (double) или NTT (два простых + CRT)

TRANSFORM ПУТЬ:
    1. Каждый limb делится на две half-digit: lo = limb % HALF_RADIX,
       hi = limb // HALF_RADIX (значения < 10^4)
    2. Длина N — степень двойки >= 2 * (n + m)
    3. Общая двухоперандная свёртка: FFT(a), FFT(b), поточечное
       произведение, IFFT
    4. Декодирование: округление к ближайшему целому, hi * HALF_RADIX + lo,
       распространение carry с нормализацией к RADIX

ТОЧНОСТЬ FLOAT FFT:
    Samples заранее масштабируются на 2^-L и 2^-R (L + R = log2 N) через
    fdiv_pow2, поэтому IFFT не требует деления на N. Декодирование
    корректно при ошибке sample < 0.5. Float путь используется только при
    N <= max_float_length; выше — NTT по модулям 998244353 и 469762049 с
    CRT-восстановлением (точный целочисленный путь).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат каноничен (без старших нулей); умножение на ноль → []
2. brute_force_multiply(a, b) == transform_multiply(a, b) для любых a, b
3. N > max_modular_length → TransformLengthError
"""

import logging
import math
from typing import Final, List, Sequence

from bignum.core.math.errors import TransformLengthError
from bignum.core.math.magnitude import Limbs, trim
from bignum.core.math.radix import (
    DEFAULT_BRUTE_MUL_THRESHOLD,
    DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH,
    DEFAULT_MAX_MODULAR_TRANSFORM_LENGTH,
    HALF_RADIX,
    RADIX,
    TRANSFORM_ZIP,
    ceil_pow2,
    fdiv_pow2,
    ilog2,
)
from bignum.core.math.transform import NTT_PRIME_A, NTT_PRIME_B, fft, ntt

logger = logging.getLogger(__name__)

# A^-1 mod B для CRT-восстановления
_CRT_INVERSE: Final[int] = pow(NTT_PRIME_A, NTT_PRIME_B - 2, NTT_PRIME_B)


# =============================================================================
# ALGORITHM SELECTION
# =============================================================================


def use_brute_force(
    lhs: Sequence[int],
    rhs: Sequence[int],
    threshold: int = DEFAULT_BRUTE_MUL_THRESHOLD,
) -> bool:
    """
    Выбор brute-force умножения.

    Args:
        lhs: Первый операнд
        rhs: Второй операнд
        threshold: Порог длины большего операнда (в limbs)

    Returns:
        True если max(len(lhs), len(rhs)) < threshold
    """
    return max(len(lhs), len(rhs)) < threshold


def transform_length(lhs_size: int, rhs_size: int) -> int:
    """Длина transform буфера: степень двойки >= 2 * (n + m)."""
    return ceil_pow2(TRANSFORM_ZIP * (lhs_size + rhs_size))


# =============================================================================
# BRUTE FORCE
# =============================================================================


def brute_force_multiply(lhs: Sequence[int], rhs: Sequence[int]) -> Limbs:
    """
    Schoolbook умножение с построчной нормализацией.

    Буфер n + m limbs создаётся обнулённым; строка i пишет в
    out[i : i + m] и кладёт свой carry в ещё не тронутый out[i + m].

    Returns:
        Каноническая magnitude произведения
    """
    if not lhs or not rhs:
        return []

    size_r = len(rhs)
    out = [0] * (len(lhs) + size_r)
    for i, a in enumerate(lhs):
        if a == 0:
            continue
        carry = 0
        k = i
        for b in rhs:
            carry += out[k] + a * b
            out[k] = carry % RADIX
            carry //= RADIX
            k += 1
        out[i + size_r] = carry

    return trim(out)


# =============================================================================
# TRANSFORM
# =============================================================================


def _split_half_digits(src: Sequence[int], length: int) -> List[int]:
    samples = [0] * length
    j = 0
    for limb in src:
        hi, lo = divmod(limb, HALF_RADIX)
        samples[j] = lo
        samples[j + 1] = hi
        j += 2
    return samples


def _decode(values: Sequence[int], total: int) -> Limbs:
    """
    Сборка limbs из целых коэффициентов свёртки half-digit.

    Коэффициенты не нормализованы (могут превышать HALF_RADIX); carry
    распространяется через весь поток.
    """
    out = [0] * total
    carry = 0
    j = 0
    for i in range(total):
        carry += values[j + 1] * HALF_RADIX + values[j]
        out[i] = carry % RADIX
        carry //= RADIX
        j += 2
    return trim(out)


def _float_convolution(lhs: Sequence[int], rhs: Sequence[int], length: int) -> List[int]:
    bits = ilog2(length)
    lshift = bits >> 1
    rshift = bits - lshift

    fa = [
        complex(fdiv_pow2(float(v), lshift), 0.0)
        for v in _split_half_digits(lhs, length)
    ]
    fb = [
        complex(fdiv_pow2(float(v), rshift), 0.0)
        for v in _split_half_digits(rhs, length)
    ]

    fft(fa)
    fft(fb)
    for i in range(length):
        fa[i] *= fb[i]
    fft(fa, inverse=True)

    # Ошибка sample < 0.5 → floor(x + 0.5) восстанавливает точное целое
    return [math.floor(z.real + 0.5) for z in fa]


def _modular_convolution(lhs: Sequence[int], rhs: Sequence[int], length: int) -> List[int]:
    residues = []
    for prime in (NTT_PRIME_A, NTT_PRIME_B):
        fa = _split_half_digits(lhs, length)
        fb = _split_half_digits(rhs, length)
        ntt(fa, prime)
        ntt(fb, prime)
        for i in range(length):
            fa[i] = fa[i] * fb[i] % prime
        ntt(fa, prime, inverse=True)
        residues.append(fa)

    ra, rb = residues
    return [
        a + NTT_PRIME_A * ((b - a) * _CRT_INVERSE % NTT_PRIME_B)
        for a, b in zip(ra, rb)
    ]


def transform_multiply(
    lhs: Sequence[int],
    rhs: Sequence[int],
    max_float_length: int = DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH,
    max_modular_length: int = DEFAULT_MAX_MODULAR_TRANSFORM_LENGTH,
) -> Limbs:
    """
    Умножение через свёртку half-digit последовательностей.

    Args:
        lhs: Первый операнд
        rhs: Второй операнд
        max_float_length: Потолок длины float FFT
        max_modular_length: Потолок длины NTT

    Returns:
        Каноническая magnitude произведения

    Raises:
        TransformLengthError: если требуемая длина > max_modular_length
        ValueError: если max_float_length выше безопасного потолка float FFT
    """
    if max_float_length > DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH:
        raise ValueError(
            f"max_float_length {max_float_length} exceeds the float FFT ceiling "
            f"{DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH}"
        )
    if not lhs or not rhs:
        return []

    total = len(lhs) + len(rhs)
    length = transform_length(len(lhs), len(rhs))

    if length <= max_float_length:
        values = _float_convolution(lhs, rhs, length)
    elif length <= max_modular_length:
        logger.debug(
            "transform length %d above float ceiling %d, using NTT",
            length,
            max_float_length,
        )
        values = _modular_convolution(lhs, rhs, length)
    else:
        raise TransformLengthError(
            f"operands of {len(lhs)} and {len(rhs)} limbs need transform length "
            f"{length} > {max_modular_length}"
        )

    return _decode(values, total)


# =============================================================================
# DISPATCH
# =============================================================================


def multiply(
    lhs: Sequence[int],
    rhs: Sequence[int],
    brute_threshold: int = DEFAULT_BRUTE_MUL_THRESHOLD,
    max_float_length: int = DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH,
    max_modular_length: int = DEFAULT_MAX_MODULAR_TRANSFORM_LENGTH,
) -> Limbs:
    """
    Умножение magnitude с выбором алгоритма по размеру.

    Returns:
        Каноническая magnitude произведения ([] если один из операндов ноль)
    """
    if not lhs or not rhs:
        return []
    if use_brute_force(lhs, rhs, brute_threshold):
        return brute_force_multiply(lhs, rhs)
    return transform_multiply(lhs, rhs, max_float_length, max_modular_length)
