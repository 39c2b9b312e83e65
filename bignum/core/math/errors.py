"""
Errors — Иерархия исключений арифметического ядра

Нарушения предусловий отвергаются явно и громко, а не приводят к
неверному числовому результату:
- деление на ноль
- декремент нулевой magnitude
- сравнение views разной длины
- невалидный десятичный текст
- превышение потолка длины transform
- выход корректирующего цикла за доказанную границу (внутренний инвариант)
"""


class BigIntegerError(ArithmeticError):
    """Базовое исключение для всех ошибок bignum."""

    pass


class DivisionByZeroError(BigIntegerError, ZeroDivisionError):
    """Делитель равен нулю."""

    pass


class MagnitudeUnderflowError(BigIntegerError, ValueError):
    """
    Декремент нулевой magnitude.

    Поднимается decrement() и SignedInteger.abs_decrement();
    SignedInteger.decrement() обходит ноль переходом к -1.
    """

    pass


class LengthMismatchError(BigIntegerError, ValueError):
    """compare() вызван для последовательностей разной длины."""

    pass


class DecimalFormatError(BigIntegerError, ValueError):
    """Текст не соответствует формату ^-?[0-9]+$."""

    pass


class TransformLengthError(BigIntegerError, OverflowError):
    """Операнды требуют transform длиннее любого поддерживаемого потолка."""

    pass


class ConvergenceError(BigIntegerError, RuntimeError):
    """
    Корректирующий цикл Newton-деления превысил аналитическую границу.

    Никогда не должен возникать: сигнализирует о нарушенном инварианте
    reciprocal или quotient estimate.
    """

    pass
