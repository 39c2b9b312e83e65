"""
Transform Engine — FFT / NTT over Power-of-Two Buffers

Модуль реализует in-place итеративные преобразования для свёртки:
- fft: комплексное FFT (double), inverse через сопряжённые корни
- ntt: number-theoretic transform по модулю простого p (2^k | p - 1)
- RootTable / ModularRootTable: ленивые grow-only кэши unit roots
- bit_reversal: кэшируемая перестановка индексов

Inverse преобразования НЕ делят на N для FFT: множитель 1/N заранее
внесён в входные samples через fdiv_pow2 (см. multiplier). Для NTT
деление на N выполняется умножением на N^-1 mod p.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Длина буфера — степень двойки >= 2
2. Таблицы только растут; построенные уровни не изменяются
3. Рост таблиц сериализован threading.Lock; чтение построенных уровней
   не требует блокировки
4. Корни каждого уровня вычисляются напрямую (cos/sin или pow), без
   накопления ошибки последовательным умножением
"""

import logging
import math
import threading
from typing import Dict, Final, List, MutableSequence

from bignum.core.math.errors import TransformLengthError
from bignum.core.math.radix import ilog2

logger = logging.getLogger(__name__)

# =============================================================================
# NTT PRIMES
# =============================================================================

# p = 119 * 2^23 + 1, примитивный корень 3
NTT_PRIME_A: Final[int] = 998244353

# p = 7 * 2^26 + 1, примитивный корень 3
NTT_PRIME_B: Final[int] = 469762049

NTT_GENERATOR: Final[int] = 3

# Максимальный уровень, общий для обоих простых: 2^23 | (p - 1)
NTT_MAX_LEVEL: Final[int] = 23


# =============================================================================
# ROOT TABLES
# =============================================================================


class _GrowOnlyTable:
    """
    Базовый grow-only кэш корней по уровням.

    Уровень L хранит 2^L корней степени 2^(L+1) для butterfly с
    half = 2^L. Уровни строятся лениво под блокировкой и никогда не
    удаляются.
    """

    def __init__(self, max_level: int):
        self.max_level = max_level
        self._lock = threading.Lock()
        self._forward: List[list] = []
        self._inverse: List[list] = []
        self._bit_reversal: Dict[int, List[int]] = {}

    @property
    def levels(self) -> int:
        """Количество построенных уровней."""
        return len(self._forward)

    def ensure(self, length: int) -> None:
        """
        Гарантирует наличие корней для буфера длины length.

        Raises:
            TransformLengthError: если length не степень двойки или
                превышает 2^max_level
        """
        if length < 2 or length & (length - 1):
            raise TransformLengthError(
                f"transform length must be a power of two >= 2, got {length}"
            )
        needed = ilog2(length)
        if needed > self.max_level:
            raise TransformLengthError(
                f"transform length 2^{needed} exceeds table limit 2^{self.max_level}"
            )
        if len(self._forward) >= needed:
            return

        with self._lock:
            while len(self._forward) < needed:
                level = len(self._forward)
                forward, inverse = self._build_level(level)
                # inverse первым: читатель проверяет только _forward
                self._inverse.append(inverse)
                self._forward.append(forward)
            logger.debug(
                "%s grown to %d levels (length %d)",
                type(self).__name__,
                len(self._forward),
                1 << len(self._forward),
            )

    def roots(self, level: int, inverse: bool = False) -> list:
        """Корни уровня level (2^level значений)."""
        return self._inverse[level] if inverse else self._forward[level]

    def bit_reversal(self, length: int) -> List[int]:
        """
        Таблица bit-reversal перестановки для length (степень двойки).

        Строится рекуррентно: rev[2i] = rev[i] >> 1, rev[2i+1] = rev[2i] | half.
        """
        table = self._bit_reversal.get(length)
        if table is not None:
            return table

        half = length >> 1
        rev = [0] * length
        for i in range(1, length):
            rev[i] = (rev[i >> 1] >> 1) | (half if i & 1 else 0)

        with self._lock:
            return self._bit_reversal.setdefault(length, rev)

    def _build_level(self, level: int) -> tuple[list, list]:
        raise NotImplementedError


class RootTable(_GrowOnlyTable):
    """
    Комплексные unit roots для FFT.

    Уровень L: exp(i * pi * k / 2^L), k in [0, 2^L).
    """

    def _build_level(self, level: int) -> tuple[list, list]:
        half = 1 << level
        step = math.pi / half
        forward = []
        for k in range(half):
            angle = step * k
            forward.append(complex(math.cos(angle), math.sin(angle)))
        inverse = [w.conjugate() for w in forward]
        return forward, inverse


class ModularRootTable(_GrowOnlyTable):
    """
    Корни из единицы по модулю простого prime для NTT.

    Уровень L: w^k, где w — примитивный корень степени 2^(L+1) по модулю p.
    """

    def __init__(self, prime: int, generator: int = NTT_GENERATOR):
        two_adicity = ((prime - 1) & -(prime - 1)).bit_length() - 1
        super().__init__(max_level=two_adicity)
        self.prime = prime
        self.generator = generator

    def _build_level(self, level: int) -> tuple[list, list]:
        prime = self.prime
        half = 1 << level
        w = pow(self.generator, (prime - 1) // (half << 1), prime)
        w_inv = pow(w, prime - 2, prime)

        forward = [1] * half
        inverse = [1] * half
        for k in range(1, half):
            forward[k] = forward[k - 1] * w % prime
            inverse[k] = inverse[k - 1] * w_inv % prime
        return forward, inverse


# Процессные кэши: создаются один раз, растут по требованию
_ROOT_TABLE: Final[RootTable] = RootTable(max_level=NTT_MAX_LEVEL)
_MODULAR_TABLES: Final[Dict[int, ModularRootTable]] = {
    NTT_PRIME_A: ModularRootTable(NTT_PRIME_A),
    NTT_PRIME_B: ModularRootTable(NTT_PRIME_B),
}


def get_root_table() -> RootTable:
    """Процессный кэш комплексных корней."""
    return _ROOT_TABLE


def get_modular_table(prime: int) -> ModularRootTable:
    """Процессный кэш корней для одного из NTT-простых."""
    try:
        return _MODULAR_TABLES[prime]
    except KeyError:
        raise ValueError(f"no NTT root table for modulus {prime}") from None


# =============================================================================
# TRANSFORMS
# =============================================================================


def _permute(samples: MutableSequence, rev: List[int]) -> None:
    for i, j in enumerate(rev):
        if i < j:
            samples[i], samples[j] = samples[j], samples[i]


def fft(samples: MutableSequence[complex], inverse: bool = False) -> None:
    """
    In-place итеративное FFT (Cooley–Tukey, radix-2).

    Inverse использует сопряжённые корни и НЕ делит на длину.

    Args:
        samples: Буфер длины 2^k (k >= 1)
        inverse: Обратное преобразование
    """
    length = len(samples)
    table = _ROOT_TABLE
    table.ensure(length)
    _permute(samples, table.bit_reversal(length))

    half = 1
    level = 0
    while half < length:
        roots = table.roots(level, inverse)
        span = half << 1
        for start in range(0, length, span):
            for k in range(half):
                lo = start + k
                hi = lo + half
                a = samples[lo]
                b = samples[hi] * roots[k]
                samples[lo] = a + b
                samples[hi] = a - b
        half = span
        level += 1


def ntt(samples: MutableSequence[int], prime: int, inverse: bool = False) -> None:
    """
    In-place number-theoretic transform по модулю prime.

    Inverse включает умножение на length^-1 mod prime.

    Args:
        samples: Буфер длины 2^k, значения в [0, prime)
        prime: Один из NTT_PRIME_A / NTT_PRIME_B
        inverse: Обратное преобразование
    """
    length = len(samples)
    table = get_modular_table(prime)
    table.ensure(length)
    _permute(samples, table.bit_reversal(length))

    half = 1
    level = 0
    while half < length:
        roots = table.roots(level, inverse)
        span = half << 1
        for start in range(0, length, span):
            for k in range(half):
                lo = start + k
                hi = lo + half
                a = samples[lo]
                b = samples[hi] * roots[k] % prime
                samples[lo] = (a + b) % prime
                samples[hi] = (a - b) % prime
        half = span
        level += 1

    if inverse:
        scale = pow(length, prime - 2, prime)
        for i in range(length):
            samples[i] = samples[i] * scale % prime
