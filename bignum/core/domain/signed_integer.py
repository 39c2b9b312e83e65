"""
SignedInteger — Знаковое целое произвольной точности

Фасад над magnitude-ядром: пара (limbs, negative) с диспетчеризацией
всех операторов по знакам и сравнению magnitude.

СЕМАНТИКА:
- +, -: одинаковые знаки → add; разные → subtract большего из меньшего,
  знак большего; точное сокращение → канонический ноль
- *: знак = XOR знаков; умножение на ноль → ноль без знака
- //, %, divmod(): деление с усечением к нулю (как в C, НЕ как у int):
  знак частного = XOR знаков, остаток имеет знак делимого (или ноль)
- <<, >>: сдвиг на целое число limbs (× / ÷ RADIX^n с усечением)
- increment/decrement: переход через ноль (-1 + 1 → 0 без знака,
  0 - 1 → -1)

Десятичный формат: необязательный '-', затем >= 1 цифр. Parser принимает
ведущие нули; printer их никогда не выводит и не печатает "-0".

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. negative == False, если magnitude == [] (нет отрицательного нуля)
2. magnitude каноническая (без старших нулевых limbs)
3. Деление на ноль → DivisionByZeroError до вызова ядра
4. decrement нулевой magnitude (abs_decrement(0)) → MagnitudeUnderflowError
"""

from typing import Final, Optional, Sequence, Tuple, Union

from bignum.core.contracts import DecimalIntegerValidator
from bignum.core.domain.config import ArithmeticConfig, get_default_config
from bignum.core.math.divider import divmod_magnitude
from bignum.core.math.errors import (
    DecimalFormatError,
    DivisionByZeroError,
    MagnitudeUnderflowError,
)
from bignum.core.math.magnitude import (
    Limbs,
    add,
    compare,
    compare_magnitudes,
    decrement,
    digits,
    from_native,
    increment,
    is_canonical,
    shift_limbs_left,
    shift_limbs_right,
    subtract,
    to_native,
)
from bignum.core.math.multiplier import multiply
from bignum.core.math.radix import LIMB_DIGITS

# Контракт decimal_integer.json, компилируется один раз
_DECIMAL_CONTRACT: Final[DecimalIntegerValidator] = DecimalIntegerValidator()

Operand = Union["SignedInteger", int]


class SignedInteger:
    """
    Знаковое целое произвольной точности.

    Хранит magnitude (limbs по основанию 10^8, младший первым) и флаг
    знака. Изменяется только in-place операторами (+=, -=, *=, //=, %=,
    <<=, >>=) и явными методами (increment, decrement, negate, set_sign,
    swap, reset); все бинарные операторы возвращают новый экземпляр.

    Examples:
        >>> str(SignedInteger("-123456789012345678901234567890") * 2)
        '-246913578024691357802469135780'
        >>> divmod(SignedInteger(-7), SignedInteger(2))
        (SignedInteger('-3'), SignedInteger('-1'))
    """

    __slots__ = ("_limbs", "_negative")

    def __init__(self, value: Union["SignedInteger", int, str, None] = None):
        if value is None:
            self._limbs: Limbs = []
            self._negative = False
        elif isinstance(value, SignedInteger):
            self._limbs = list(value._limbs)
            self._negative = value._negative
        elif isinstance(value, int):
            self._limbs = from_native(-value if value < 0 else value)
            self._negative = value < 0
        elif isinstance(value, str):
            self._limbs, self._negative = _parse(value)
        else:
            raise TypeError(
                f"cannot build SignedInteger from {type(value).__name__}"
            )

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def parse(cls, text: str) -> "SignedInteger":
        """
        Разбор десятичного текста.

        Raises:
            DecimalFormatError: Если текст не соответствует ^-?[0-9]+$
        """
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        return cls(text)

    @classmethod
    def from_int(cls, value: int) -> "SignedInteger":
        """Построение из native int."""
        if not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return cls(value)

    @classmethod
    def from_limbs(cls, limbs: Sequence[int], negative: bool = False) -> "SignedInteger":
        """
        Построение из готовой magnitude.

        Raises:
            ValueError: Если limbs не каноничны (limb вне [0, RADIX) или
                старший нулевой limb)
        """
        if not is_canonical(limbs):
            raise ValueError("limbs must be canonical: each in [0, RADIX), no high zero")
        return cls._from_parts(list(limbs), negative)

    @classmethod
    def _from_parts(cls, limbs: Limbs, negative: bool) -> "SignedInteger":
        result = cls.__new__(cls)
        result._limbs = limbs
        result._negative = bool(negative) and bool(limbs)
        return result

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def limbs(self) -> Tuple[int, ...]:
        """Копия magnitude (младший limb первым)."""
        return tuple(self._limbs)

    @property
    def negative(self) -> bool:
        return self._negative

    def is_zero(self) -> bool:
        return not self._limbs

    def is_negative(self) -> bool:
        return self._negative

    def is_positive(self) -> bool:
        return not self._negative and bool(self._limbs)

    def is_non_negative(self) -> bool:
        return not self._negative

    def is_non_positive(self) -> bool:
        return self._negative or not self._limbs

    def digits(self) -> int:
        """Количество десятичных цифр |self| (1 для нуля)."""
        return digits(self._limbs)

    # =========================================================================
    # IN-PLACE MUTATORS
    # =========================================================================

    def reset(self) -> "SignedInteger":
        """Обнуление (знак сбрасывается)."""
        self._limbs = []
        self._negative = False
        return self

    def negate(self) -> "SignedInteger":
        """Смена знака на месте; ноль остаётся без знака."""
        self._negative = not self._negative and bool(self._limbs)
        return self

    def set_sign(self, negative: bool) -> "SignedInteger":
        """Установка знака на месте; у нуля знак не устанавливается."""
        self._negative = bool(negative) and bool(self._limbs)
        return self

    def swap(self, other: "SignedInteger") -> None:
        """Обмен содержимым с other."""
        self._limbs, other._limbs = other._limbs, self._limbs
        self._negative, other._negative = other._negative, self._negative

    def abs_increment(self) -> "SignedInteger":
        """|self| + 1 с сохранением знака."""
        if increment(self._limbs, self._limbs):
            self._limbs.append(1)
        return self

    def abs_decrement(self) -> "SignedInteger":
        """
        |self| - 1 с сохранением знака (знак сбрасывается при нуле).

        Raises:
            MagnitudeUnderflowError: Если self == 0
        """
        if not self._limbs:
            raise MagnitudeUnderflowError("cannot decrement the magnitude of zero")
        if decrement(self._limbs, self._limbs):
            self._limbs.pop()
        self._negative = self._negative and bool(self._limbs)
        return self

    def increment(self) -> "SignedInteger":
        """self += 1 на месте."""
        if self._negative:
            return self.abs_decrement()
        return self.abs_increment()

    def decrement(self) -> "SignedInteger":
        """self -= 1 на месте (0 → -1)."""
        if self._negative:
            return self.abs_increment()
        if self._limbs:
            return self.abs_decrement()
        self._limbs = [1]
        self._negative = True
        return self

    def _accumulate(self, limbs: Sequence[int], negative: bool) -> "SignedInteger":
        """self += (±limbs) с записью в собственный буфер, где возможно."""
        if not limbs:
            return self
        mine = self._limbs
        if not mine:
            self._limbs = list(limbs)
            self._negative = negative
            return self

        if self._negative == negative:
            if len(mine) >= len(limbs):
                if add(mine, mine, limbs):
                    mine.append(1)
            else:
                out = [0] * (len(limbs) + 1)
                if add(out, limbs, mine):
                    out[-1] = 1
                else:
                    out.pop()
                self._limbs = out
            return self

        if len(mine) > len(limbs):
            del mine[subtract(mine, mine, limbs) :]
            return self
        if len(mine) < len(limbs):
            out = [0] * len(limbs)
            del out[subtract(out, limbs, mine) :]
            self._limbs = out
            self._negative = negative
            return self

        # Равная длина: сужение до старшего различающегося limb
        length, order = compare(mine, limbs)
        if order == 0:
            return self.reset()
        if order > 0:
            del mine[subtract(mine, mine[:length], limbs[:length]) :]
        else:
            out = [0] * length
            del out[subtract(out, limbs[:length], mine[:length]) :]
            self._limbs = out
            self._negative = negative
        return self

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def multiply_by(
        self, other: Operand, config: Optional[ArithmeticConfig] = None
    ) -> "SignedInteger":
        """Произведение с явной конфигурацией порогов."""
        other = _require(other)
        config = config or get_default_config()
        return SignedInteger._from_parts(
            multiply(self._limbs, other._limbs, **config.multiply_options()),
            self._negative != other._negative,
        )

    def divmod_by(
        self, other: Operand, config: Optional[ArithmeticConfig] = None
    ) -> Tuple["SignedInteger", "SignedInteger"]:
        """
        Деление с усечением к нулю и явной конфигурацией порогов.

        Returns:
            (quotient, remainder): self == quotient * other + remainder,
            |remainder| < |other|, remainder имеет знак self или равен нулю

        Raises:
            DivisionByZeroError: Если other == 0
        """
        other = _require(other)
        if not other._limbs:
            raise DivisionByZeroError("division by zero")
        config = config or get_default_config()
        quotient, remainder = divmod_magnitude(
            self._limbs,
            other._limbs,
            div_threshold=config.brute_div_threshold,
            **config.multiply_options(),
        )
        return (
            SignedInteger._from_parts(quotient, self._negative != other._negative),
            SignedInteger._from_parts(remainder, self._negative),
        )

    def __add__(self, other: Operand) -> "SignedInteger":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return SignedInteger(self)._accumulate(other._limbs, other._negative)

    def __radd__(self, other: int) -> "SignedInteger":
        return self.__add__(other)

    def __iadd__(self, other: Operand) -> "SignedInteger":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._accumulate(other._limbs, other._negative)

    def __sub__(self, other: Operand) -> "SignedInteger":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return SignedInteger(self)._accumulate(
            other._limbs, not other._negative and bool(other._limbs)
        )

    def __rsub__(self, other: int) -> "SignedInteger":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.__sub__(self)

    def __isub__(self, other: Operand) -> "SignedInteger":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._accumulate(other._limbs, not other._negative and bool(other._limbs))

    def __mul__(self, other: Operand) -> "SignedInteger":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.multiply_by(other)

    def __rmul__(self, other: int) -> "SignedInteger":
        return self.__mul__(other)

    def __imul__(self, other: Operand) -> "SignedInteger":
        product = self.__mul__(other)
        if product is NotImplemented:
            return NotImplemented
        self.swap(product)
        return self

    def __divmod__(self, other: Operand) -> Tuple["SignedInteger", "SignedInteger"]:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.divmod_by(other)

    def __rdivmod__(self, other: int) -> Tuple["SignedInteger", "SignedInteger"]:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.divmod_by(self)

    def __floordiv__(self, other: Operand) -> "SignedInteger":
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[0]

    def __rfloordiv__(self, other: int) -> "SignedInteger":
        result = self.__rdivmod__(other)
        return result if result is NotImplemented else result[0]

    def __ifloordiv__(self, other: Operand) -> "SignedInteger":
        quotient = self.__floordiv__(other)
        if quotient is NotImplemented:
            return NotImplemented
        self.swap(quotient)
        return self

    def __mod__(self, other: Operand) -> "SignedInteger":
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[1]

    def __rmod__(self, other: int) -> "SignedInteger":
        result = self.__rdivmod__(other)
        return result if result is NotImplemented else result[1]

    def __imod__(self, other: Operand) -> "SignedInteger":
        remainder = self.__mod__(other)
        if remainder is NotImplemented:
            return NotImplemented
        self.swap(remainder)
        return self

    def __lshift__(self, count: int) -> "SignedInteger":
        """Умножение на RADIX ** count."""
        if not isinstance(count, int):
            return NotImplemented
        return SignedInteger._from_parts(shift_limbs_left(self._limbs, count), self._negative)

    def __rshift__(self, count: int) -> "SignedInteger":
        """Деление на RADIX ** count с усечением к нулю."""
        if not isinstance(count, int):
            return NotImplemented
        return SignedInteger._from_parts(shift_limbs_right(self._limbs, count), self._negative)

    def __ilshift__(self, count: int) -> "SignedInteger":
        shifted = self.__lshift__(count)
        if shifted is NotImplemented:
            return NotImplemented
        self.swap(shifted)
        return self

    def __irshift__(self, count: int) -> "SignedInteger":
        shifted = self.__rshift__(count)
        if shifted is NotImplemented:
            return NotImplemented
        self.swap(shifted)
        return self

    def __neg__(self) -> "SignedInteger":
        return SignedInteger(self).negate()

    def __pos__(self) -> "SignedInteger":
        return SignedInteger(self)

    def __abs__(self) -> "SignedInteger":
        return SignedInteger._from_parts(list(self._limbs), False)

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def compare(self, other: Operand) -> int:
        """
        Трёхстороннее сравнение.

        Returns:
            -1 если self < other, 0 если равны, +1 если self > other
        """
        other = _require(other)
        if self._negative != other._negative:
            return -1 if self._negative else 1
        order = compare_magnitudes(self._limbs, other._limbs)
        return -order if self._negative else order

    def __eq__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._negative == other._negative and self._limbs == other._limbs

    def __lt__(self, other: Operand) -> bool:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Operand) -> bool:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Operand) -> bool:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Operand) -> bool:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        # Согласовано с __eq__ для native int
        return hash(self.to_native())

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def __bool__(self) -> bool:
        return bool(self._limbs)

    def to_native(self, bits: Optional[int] = None, signed: bool = True) -> int:
        """
        Конверсия в native int.

        Args:
            bits: Если задано — сужение до фиксированной ширины: значение
                  усекается до младших limbs, затем оборачивается в
                  two's-complement (signed) или по модулю 2^bits (unsigned).
                  Переполнение не детектируется; проверяйте digits() заранее.
            signed: Знаковая интерпретация при сужении

        Returns:
            Native int

        Examples:
            >>> SignedInteger(300).to_native(bits=8)
            44
            >>> SignedInteger(-1).to_native(bits=16, signed=False)
            65535
        """
        if bits is None:
            value = to_native(self._limbs)
            return -value if self._negative else value
        if bits <= 0:
            raise ValueError(f"bits must be positive, got {bits}")

        # RADIX = 2^8 · 5^8: младшие ceil(bits / 8) limbs точно определяют
        # значение по модулю 2^bits
        low = to_native(self._limbs, limbs=-(-bits // LIMB_DIGITS))
        modulus = 1 << bits
        wrapped = (-low if self._negative else low) % modulus
        if signed and wrapped >= modulus >> 1:
            wrapped -= modulus
        return wrapped

    def __int__(self) -> int:
        return self.to_native()

    def to_string(self) -> str:
        """
        Каноническая десятичная запись.

        Старший limb без дополнения нулями, остальные — ровно LIMB_DIGITS
        цифр, от старшего к младшему.
        """
        limbs = self._limbs
        if not limbs:
            return "0"
        parts = ["-" if self._negative else "", str(limbs[-1])]
        parts.extend(f"{limb:0{LIMB_DIGITS}d}" for limb in reversed(limbs[:-1]))
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"SignedInteger('{self.to_string()}')"


# =============================================================================
# HELPERS
# =============================================================================


def _coerce(value: object):
    if isinstance(value, SignedInteger):
        return value
    if isinstance(value, int):
        return SignedInteger(value)
    return NotImplemented


def _require(value: object) -> SignedInteger:
    coerced = _coerce(value)
    if coerced is NotImplemented:
        raise TypeError(f"unsupported operand type: {type(value).__name__}")
    return coerced


def _parse(text: str) -> Tuple[Limbs, bool]:
    """
    Разбор десятичного текста в (limbs, negative).

    Ведущие нули отбрасываются; "-0", "000" → ноль без знака.
    """
    if not _DECIMAL_CONTRACT.is_valid(text):
        raise DecimalFormatError(f"invalid decimal integer: {text!r}")

    negative = text.startswith("-")
    body = text[1:] if negative else text
    body = body.lstrip("0")
    if not body:
        return [], False

    limbs = [
        int(body[max(0, end - LIMB_DIGITS) : end])
        for end in range(len(body), 0, -LIMB_DIGITS)
    ]
    return limbs, negative
