"""
Domain models and value objects.

Contains the SignedInteger facade and the ArithmeticConfig threshold model.
"""

from bignum.core.domain.config import (
    FLOAT_TRANSFORM_LIMIT,
    MODULAR_TRANSFORM_LIMIT,
    ArithmeticConfig,
    get_default_config,
    set_default_config,
)
from bignum.core.domain.signed_integer import SignedInteger

__all__ = [
    # Config
    "FLOAT_TRANSFORM_LIMIT",
    "MODULAR_TRANSFORM_LIMIT",
    "ArithmeticConfig",
    "get_default_config",
    "set_default_config",
    # Facade
    "SignedInteger",
]
