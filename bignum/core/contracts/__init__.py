"""
Contract Validation Module

Модуль для валидации JSON контрактов bignum: десятичный текст и
конфигурация порогов.
"""

from .validators import (
    ArithmeticConfigValidator,
    ContractValidator,
    DecimalIntegerValidator,
    SchemaLoader,
    validate_arithmetic_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DecimalIntegerValidator",
    "ArithmeticConfigValidator",
    # Functions
    "validate_arithmetic_config",
]
