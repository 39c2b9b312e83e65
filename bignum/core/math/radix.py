"""
Radix Constants — Limb Base & Transform Precision

Модуль фиксирует основание limb-представления и вспомогательные константы,
общие для всех алгоритмов ядра:
- RADIX: основание limb (степень 10, чтобы limb × limb помещался в accumulator)
- HALF_RADIX: "половина" limb для transform (каждый limb делится на две
  half-digit, чтобы значения свёртки оставались в безопасном диапазоне double)
- Пороги по умолчанию для выбора brute-force / transform / Newton путей
- fdiv_pow2: деление double на 2^k через прямую правку битов экспоненты

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. HALF_RADIX ** 2 == RADIX
2. 10 ** LIMB_DIGITS == RADIX
3. fdiv_pow2 не вносит ошибки округления (только сдвиг экспоненты)
"""

import struct
from typing import Final

# =============================================================================
# LIMB RADIX
# =============================================================================

# Количество десятичных цифр в одном limb
LIMB_DIGITS: Final[int] = 8

# Основание limb: 0 <= limb < RADIX
RADIX: Final[int] = 10**LIMB_DIGITS

# Количество десятичных цифр в half-digit (transform sample)
HALF_DIGITS: Final[int] = 4

# Основание half-digit: limb = hi * HALF_RADIX + lo
HALF_RADIX: Final[int] = 10**HALF_DIGITS

# Количество half-digit на один limb
TRANSFORM_ZIP: Final[int] = 2


# =============================================================================
# ПОРОГИ ПО УМОЛЧАНИЮ
# =============================================================================

# Максимальная длина (в limbs) большего операнда для brute-force умножения.
# В pure Python квадратичный цикл дешевле setup transform до нескольких
# десятков limbs.
DEFAULT_BRUTE_MUL_THRESHOLD: Final[int] = 64

# Длина делителя (и разрыв длин), ниже которой используется long division
DEFAULT_BRUTE_DIV_THRESHOLD: Final[int] = 32

# Безопасный потолок длины float FFT: 20 уровней unit roots.
# Значение свёртки ≤ N/2 * (HALF_RADIX - 1)^2 < 2^46 при N = 2^20,
# что оставляет запас точности double для ошибки < 0.5.
DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH: Final[int] = 1 << 20

# Потолок длины NTT: 2^23 делит (p - 1) обоих NTT-простых
DEFAULT_MAX_MODULAR_TRANSFORM_LENGTH: Final[int] = 1 << 23


# =============================================================================
# FLOATING EXPONENT SHIFT
# =============================================================================

_DOUBLE: Final[struct.Struct] = struct.Struct("<d")
_RAW: Final[struct.Struct] = struct.Struct("<Q")

# Позиция поля экспоненты в IEEE-754 binary64
_MANTISSA_BITS: Final[int] = 52


def fdiv_pow2(value: float, shift: int) -> float:
    """
    Деление double на 2^shift через вычитание из поля экспоненты.

    Вместо value / 2**shift (которое для нормализованных чисел тоже точно,
    но требует деления) напрямую уменьшаем экспоненту в битовом
    представлении. Ноль остаётся нулём.

    Результат корректен, пока value нормализовано и экспонента после сдвига
    не уходит в subnormal диапазон. Для transform samples (целые
    0 <= x < HALF_RADIX, shift <= 23) это выполняется всегда.

    Args:
        value: Исходное значение (0.0 или нормализованный double)
        shift: Неотрицательная степень двойки

    Returns:
        value / 2**shift

    Examples:
        >>> fdiv_pow2(12.0, 2)
        3.0
        >>> fdiv_pow2(0.0, 5)
        0.0
    """
    if shift < 0:
        raise ValueError(f"shift must be non-negative, got {shift}")

    (raw,) = _RAW.unpack(_DOUBLE.pack(value))
    if raw & ~(1 << 63) == 0:
        # +0.0 / -0.0: экспонента нулевая, сдвигать нечего
        return value

    raw -= shift << _MANTISSA_BITS
    (result,) = _DOUBLE.unpack(_RAW.pack(raw))
    return result


def ilog2(value: int) -> int:
    """floor(log2(value)) для value >= 1."""
    if value < 1:
        raise ValueError(f"value must be >= 1, got {value}")
    return value.bit_length() - 1


def ceil_pow2(value: int) -> int:
    """Наименьшая степень двойки >= value (для value >= 1)."""
    if value < 1:
        raise ValueError(f"value must be >= 1, got {value}")
    return 1 << (value - 1).bit_length()
