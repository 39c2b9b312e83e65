"""
Magnitude Core — Carry/Borrow Primitives over Limb Sequences

Модуль содержит базовые операции над magnitude (беззнаковой
последовательностью limbs, младший limb первым):
- increment / decrement с распространением carry/borrow
- compare равных по длине последовательностей
- add / subtract в заранее выделенный выходной буфер
- scalar-операции на один limb (для long division)
- сдвиги на целое число limbs, подсчёт десятичных цифр
- конверсия в/из native int на границе API

Выходной буфер передаётся вызывающей стороной и может совпадать со
входом (in-place обновление). Примитивы не выделяют память под результат.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждый limb в [0, RADIX)
2. Каноническая magnitude не имеет старших нулевых limbs; ноль == []
3. decrement нулевой magnitude → MagnitudeUnderflowError
4. compare разной длины → LengthMismatchError
"""

from typing import List, MutableSequence, NamedTuple, Optional, Sequence

from bignum.core.math.errors import LengthMismatchError, MagnitudeUnderflowError
from bignum.core.math.radix import LIMB_DIGITS, RADIX

Limbs = List[int]


# =============================================================================
# TYPES
# =============================================================================


class CompareResult(NamedTuple):
    """
    Результат compare().

    length: длина префикса до старшего различающегося limb включительно
            (0 при равенстве). Вызывающая сторона может сузить оба операнда
            до этой длины перед subtract.
    order:  -1 / 0 / +1
    """

    length: int
    order: int


# =============================================================================
# NORMALIZATION
# =============================================================================


def trim(limbs: Limbs) -> Limbs:
    """
    Удаление старших нулевых limbs на месте.

    Returns:
        Тот же список (для цепочек вызовов)
    """
    while limbs and limbs[-1] == 0:
        limbs.pop()
    return limbs


def is_canonical(limbs: Sequence[int]) -> bool:
    """Проверка инварианта magnitude: limbs в диапазоне, без старших нулей."""
    if limbs and limbs[-1] == 0:
        return False
    return all(0 <= limb < RADIX for limb in limbs)


def copy(out: MutableSequence[int], src: Sequence[int], start: int = 0) -> int:
    """
    Копирование src в out[start:start + len(src)].

    Returns:
        Индекс конца записанного диапазона
    """
    end = start + len(src)
    if out is not src or start != 0:
        out[start:end] = src
    return end


# =============================================================================
# INCREMENT / DECREMENT
# =============================================================================


def increment(out: MutableSequence[int], src: Sequence[int]) -> bool:
    """
    Запись src + 1 в out[:len(src)].

    Carry распространяется только до первого limb, который не равен
    RADIX - 1; остаток копируется без изменений.

    Args:
        out: Выходной буфер длины >= len(src) (может совпадать с src)
        src: Исходная magnitude

    Returns:
        True если остался carry (вызывающая сторона добавляет limb 1)

    Examples:
        >>> buf = [99999999, 5]
        >>> increment(buf, buf), buf
        (False, [0, 6])
    """
    size = len(src)
    for i in range(size):
        cur = src[i] + 1
        if cur < RADIX:
            out[i] = cur
            if out is not src:
                copy(out, src[i + 1 :], i + 1)
            return False
        out[i] = 0
    return True


def decrement(out: MutableSequence[int], src: Sequence[int]) -> bool:
    """
    Запись src - 1 в out[:len(src)].

    Borrow останавливается на первом ненулевом limb.

    Args:
        out: Выходной буфер длины >= len(src) (может совпадать с src)
        src: Исходная magnitude (НЕ ноль)

    Returns:
        True если старший limb стал нулём (вызывающая сторона удаляет его)

    Raises:
        MagnitudeUnderflowError: если src == 0
    """
    size = len(src)
    for i in range(size):
        cur = src[i]
        if cur != 0:
            out[i] = cur - 1
            if i + 1 == size:
                return cur == 1
            if out is not src:
                copy(out, src[i + 1 :], i + 1)
            return False
        out[i] = RADIX - 1
    raise MagnitudeUnderflowError("cannot decrement a zero magnitude")


# =============================================================================
# COMPARISON
# =============================================================================


def compare(lhs: Sequence[int], rhs: Sequence[int]) -> CompareResult:
    """
    Сравнение двух magnitude одинаковой длины.

    Args:
        lhs: Левая последовательность
        rhs: Правая последовательность той же длины

    Returns:
        CompareResult(length, order), где length — 1-based индекс старшего
        различающегося limb (0 при равенстве)

    Raises:
        LengthMismatchError: если длины различаются

    Examples:
        >>> compare([1, 2, 3], [1, 5, 3])
        CompareResult(length=2, order=-1)
        >>> compare([7], [7])
        CompareResult(length=0, order=0)
    """
    if len(lhs) != len(rhs):
        raise LengthMismatchError(
            f"compare requires equal lengths, got {len(lhs)} and {len(rhs)}"
        )

    for i in range(len(lhs) - 1, -1, -1):
        a = lhs[i]
        b = rhs[i]
        if a != b:
            return CompareResult(i + 1, -1 if a < b else 1)
    return CompareResult(0, 0)


def compare_magnitudes(lhs: Sequence[int], rhs: Sequence[int]) -> int:
    """
    Полное трёхстороннее сравнение канонических magnitude.

    Returns:
        -1 если lhs < rhs, 0 если равны, +1 если lhs > rhs
    """
    if len(lhs) != len(rhs):
        return -1 if len(lhs) < len(rhs) else 1
    return compare(lhs, rhs).order


# =============================================================================
# ADD / SUBTRACT
# =============================================================================


def add(out: MutableSequence[int], lhs: Sequence[int], rhs: Sequence[int]) -> bool:
    """
    Запись lhs + rhs в out[:len(lhs)].

    Args:
        out: Выходной буфер длины >= len(lhs) (может совпадать с lhs)
        lhs: Более длинный операнд
        rhs: Операнд, len(rhs) <= len(lhs)

    Returns:
        True если есть carry за пределы len(lhs)

    Raises:
        ValueError: если len(lhs) < len(rhs)
    """
    if len(lhs) < len(rhs):
        raise ValueError(
            f"add requires len(lhs) >= len(rhs), got {len(lhs)} < {len(rhs)}"
        )

    carry = 0
    size = len(rhs)
    for i in range(size):
        total = lhs[i] + rhs[i] + carry
        if total >= RADIX:
            out[i] = total - RADIX
            carry = 1
        else:
            out[i] = total
            carry = 0

    i = size
    size_l = len(lhs)
    while carry and i < size_l:
        cur = lhs[i] + 1
        if cur < RADIX:
            out[i] = cur
            carry = 0
        else:
            out[i] = 0
        i += 1

    if out is not lhs:
        copy(out, lhs[i:], i)
    return bool(carry)


def subtract(out: MutableSequence[int], lhs: Sequence[int], rhs: Sequence[int]) -> int:
    """
    Запись lhs - rhs в out, где lhs >= rhs как magnitude.

    Borrow-цепочка останавливается на первом ненулевом старшем limb.
    Результат обрезается от старших нулей; точное равенство даёт длину 0.

    Args:
        out: Выходной буфер длины >= len(lhs) (может совпадать с lhs)
        lhs: Уменьшаемое (>= rhs)
        rhs: Вычитаемое

    Returns:
        Длина результата после обрезки старших нулей

    Examples:
        >>> buf = [0] * 2
        >>> subtract(buf, [0, 1], [99999999])  # 100000000 - 99999999
        1
        >>> buf[:1]
        [1]
    """
    size_l = len(lhs)
    size_r = len(rhs)
    if size_l < size_r:
        raise ValueError(
            f"subtract requires lhs >= rhs, got lengths {size_l} < {size_r}"
        )

    borrow = 0
    for i in range(size_r):
        diff = lhs[i] - rhs[i] - borrow
        if diff < 0:
            out[i] = diff + RADIX
            borrow = 1
        else:
            out[i] = diff
            borrow = 0

    i = size_r
    if borrow:
        while i < size_l:
            cur = lhs[i]
            if cur != 0:
                out[i] = cur - 1
                i += 1
                break
            out[i] = RADIX - 1
            i += 1
        else:
            raise ValueError("subtract requires lhs >= rhs")

    if out is not lhs:
        copy(out, lhs[i:], i)

    end = size_l
    while end > 0 and out[end - 1] == 0:
        end -= 1
    return end


# =============================================================================
# SCALAR (ONE-LIMB) OPERATIONS
# =============================================================================


def multiply_small(src: Sequence[int], factor: int) -> Limbs:
    """
    Умножение magnitude на один limb (0 <= factor < RADIX).

    Returns:
        Новая каноническая magnitude
    """
    if factor == 0 or not src:
        return []

    result = [0] * (len(src) + 1)
    carry = 0
    for i, limb in enumerate(src):
        carry += limb * factor
        result[i] = carry % RADIX
        carry //= RADIX
    result[len(src)] = carry
    return trim(result)


def divmod_small(src: Sequence[int], divisor: int) -> tuple[Limbs, int]:
    """
    Деление magnitude на один limb (0 < divisor < RADIX).

    Returns:
        (quotient, remainder) — quotient каноническая magnitude
    """
    if divisor <= 0:
        raise ValueError(f"divisor must be positive, got {divisor}")

    quotient = [0] * len(src)
    rem = 0
    for i in range(len(src) - 1, -1, -1):
        rem = rem * RADIX + src[i]
        quotient[i] = rem // divisor
        rem %= divisor
    return trim(quotient), rem


# =============================================================================
# LIMB SHIFTS
# =============================================================================


def shift_limbs_left(src: Sequence[int], count: int) -> Limbs:
    """Умножение на RADIX ** count (ноль остаётся нулём)."""
    if count < 0:
        return shift_limbs_right(src, -count)
    if not src:
        return []
    return [0] * count + list(src)


def shift_limbs_right(src: Sequence[int], count: int) -> Limbs:
    """Деление на RADIX ** count с отбрасыванием младших limbs."""
    if count < 0:
        return shift_limbs_left(src, -count)
    return list(src[count:])


# =============================================================================
# DIGITS & NATIVE CONVERSION
# =============================================================================


def digits(src: Sequence[int]) -> int:
    """
    Количество десятичных цифр magnitude (1 для нуля).

    Examples:
        >>> digits([])
        1
        >>> digits([0, 1])
        9
    """
    if not src:
        return 1
    return (len(src) - 1) * LIMB_DIGITS + len(str(src[-1]))


def from_native(value: int) -> Limbs:
    """
    Разложение неотрицательного native int на limbs.

    Raises:
        ValueError: если value < 0
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")

    limbs: Limbs = []
    while value:
        value, limb = divmod(value, RADIX)
        limbs.append(limb)
    return limbs


def to_native(src: Sequence[int], limbs: Optional[int] = None) -> int:
    """
    Сборка native int из magnitude.

    Args:
        src: Magnitude
        limbs: Если задано — учитываются только младшие limbs (сужающая
               конверсия с усечением)

    Returns:
        Неотрицательное native int
    """
    end = len(src) if limbs is None else min(limbs, len(src))
    value = 0
    for i in range(end - 1, -1, -1):
        value = value * RADIX + src[i]
    return value
