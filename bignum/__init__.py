"""
bignum — arbitrary-precision signed integer arithmetic.

Limb-based magnitudes with schoolbook/FFT multiplication and
long-division/Newton-Raphson division behind a SignedInteger facade.
"""

from bignum.core.domain import ArithmeticConfig, SignedInteger, get_default_config, set_default_config
from bignum.core.math.errors import (
    BigIntegerError,
    ConvergenceError,
    DecimalFormatError,
    DivisionByZeroError,
    LengthMismatchError,
    MagnitudeUnderflowError,
    TransformLengthError,
)

__version__ = "0.1.0"

__all__ = [
    "SignedInteger",
    "ArithmeticConfig",
    "get_default_config",
    "set_default_config",
    # Errors
    "BigIntegerError",
    "DivisionByZeroError",
    "MagnitudeUnderflowError",
    "LengthMismatchError",
    "DecimalFormatError",
    "TransformLengthError",
    "ConvergenceError",
]
