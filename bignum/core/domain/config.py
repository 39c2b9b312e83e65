"""
ArithmeticConfig — Пороги алгоритмов и потолки transform

Immutable Pydantic модель со всеми настраиваемыми параметрами ядра.
Процессный default используется операторами SignedInteger; явные
методы (multiply_by, divmod_by) принимают конфигурацию аргументом.
"""

import threading
from typing import Any, Dict, Final

from pydantic import BaseModel, Field, field_validator, model_validator

from bignum.core.contracts import validate_arithmetic_config
from bignum.core.math.radix import (
    DEFAULT_BRUTE_DIV_THRESHOLD,
    DEFAULT_BRUTE_MUL_THRESHOLD,
    DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH,
    DEFAULT_MAX_MODULAR_TRANSFORM_LENGTH,
)
from bignum.core.math.transform import NTT_MAX_LEVEL

# Абсолютный потолок float FFT: коэффициенты свёртки < 2^46, ошибка < 0.5
FLOAT_TRANSFORM_LIMIT: Final[int] = DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH

# Абсолютный потолок NTT: 2^23 делит (p - 1) обоих простых
MODULAR_TRANSFORM_LIMIT: Final[int] = 1 << NTT_MAX_LEVEL


# =============================================================================
# CONFIG MODEL
# =============================================================================


class ArithmeticConfig(BaseModel):
    """
    Конфигурация выбора алгоритмов.

    Immutable модель (frozen=True): изменение порогов создаёт новый
    экземпляр.
    """

    brute_mul_threshold: int = Field(
        DEFAULT_BRUTE_MUL_THRESHOLD,
        ge=1,
        description="Длина большего множителя (limbs), ниже которой — schoolbook",
    )
    brute_div_threshold: int = Field(
        DEFAULT_BRUTE_DIV_THRESHOLD,
        ge=1,
        description="Длина делителя и разрыв длин (limbs), ниже которых — long division",
    )
    max_float_transform_length: int = Field(
        DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH,
        ge=2,
        le=FLOAT_TRANSFORM_LIMIT,
        description="Максимальная длина float FFT (степень двойки)",
    )
    max_modular_transform_length: int = Field(
        DEFAULT_MAX_MODULAR_TRANSFORM_LENGTH,
        ge=2,
        le=MODULAR_TRANSFORM_LIMIT,
        description="Максимальная длина NTT (степень двойки)",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("max_float_transform_length", "max_modular_transform_length")
    @classmethod
    def validate_power_of_two(cls, v: int) -> int:
        """Длины transform — только степени двойки."""
        if v & (v - 1):
            raise ValueError(f"transform length {v} is not a power of two")
        return v

    @model_validator(mode="after")
    def validate_ceiling_order(self) -> "ArithmeticConfig":
        """NTT подхватывает там, где заканчивается float FFT."""
        if self.max_modular_transform_length < self.max_float_transform_length:
            raise ValueError(
                f"max_modular_transform_length {self.max_modular_transform_length} "
                f"below max_float_transform_length {self.max_float_transform_length}"
            )
        return self

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ArithmeticConfig":
        """
        Загрузка из внешнего документа.

        Сначала документ проверяется JSON Schema контрактом, затем
        строится модель (проверка степеней двойки и порядка потолков).

        Raises:
            jsonschema.ValidationError: Если документ нарушает контракт
            pydantic.ValidationError: Если значения нарушают ограничения модели
        """
        validate_arithmetic_config(data)
        return cls(**data)

    def multiply_options(self) -> Dict[str, int]:
        """Keyword-аргументы для multiplier.multiply()."""
        return {
            "brute_threshold": self.brute_mul_threshold,
            "max_float_length": self.max_float_transform_length,
            "max_modular_length": self.max_modular_transform_length,
        }


# =============================================================================
# PROCESS DEFAULT
# =============================================================================

_default_lock = threading.Lock()
_default_config = ArithmeticConfig()


def get_default_config() -> ArithmeticConfig:
    """Текущая процессная конфигурация."""
    return _default_config


def set_default_config(config: ArithmeticConfig) -> ArithmeticConfig:
    """
    Замена процессной конфигурации.

    Returns:
        Предыдущая конфигурация (для восстановления)
    """
    global _default_config
    if not isinstance(config, ArithmeticConfig):
        raise TypeError(f"expected ArithmeticConfig, got {type(config).__name__}")
    with _default_lock:
        previous = _default_config
        _default_config = config
    return previous
