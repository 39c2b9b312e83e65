"""
Core math modules для bignum

Limb-арифметика, transforms и алгоритмы умножения/деления magnitude.
"""

# Radix constants & float helpers
from bignum.core.math.radix import (
    DEFAULT_BRUTE_DIV_THRESHOLD,
    DEFAULT_BRUTE_MUL_THRESHOLD,
    DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH,
    DEFAULT_MAX_MODULAR_TRANSFORM_LENGTH,
    HALF_DIGITS,
    HALF_RADIX,
    LIMB_DIGITS,
    RADIX,
    TRANSFORM_ZIP,
    ceil_pow2,
    fdiv_pow2,
    ilog2,
)

# Errors
from bignum.core.math.errors import (
    BigIntegerError,
    ConvergenceError,
    DecimalFormatError,
    DivisionByZeroError,
    LengthMismatchError,
    MagnitudeUnderflowError,
    TransformLengthError,
)

# Magnitude core
from bignum.core.math.magnitude import (
    CompareResult,
    Limbs,
    add,
    compare,
    compare_magnitudes,
    decrement,
    digits,
    from_native,
    increment,
    subtract,
    to_native,
    trim,
)

# Transforms
from bignum.core.math.transform import (
    NTT_PRIME_A,
    NTT_PRIME_B,
    ModularRootTable,
    RootTable,
    fft,
    get_modular_table,
    get_root_table,
    ntt,
)

# Multiplier
from bignum.core.math.multiplier import (
    brute_force_multiply,
    multiply,
    transform_multiply,
    use_brute_force,
)

# Divider
from bignum.core.math.divider import (
    DivModResult,
    brute_force_divide,
    divmod_magnitude,
    newton_divide,
    reciprocal,
    use_brute_force_division,
)

__all__ = [
    # Radix
    "LIMB_DIGITS",
    "RADIX",
    "HALF_DIGITS",
    "HALF_RADIX",
    "TRANSFORM_ZIP",
    "DEFAULT_BRUTE_MUL_THRESHOLD",
    "DEFAULT_BRUTE_DIV_THRESHOLD",
    "DEFAULT_MAX_FLOAT_TRANSFORM_LENGTH",
    "DEFAULT_MAX_MODULAR_TRANSFORM_LENGTH",
    "fdiv_pow2",
    "ilog2",
    "ceil_pow2",
    # Errors
    "BigIntegerError",
    "DivisionByZeroError",
    "MagnitudeUnderflowError",
    "LengthMismatchError",
    "DecimalFormatError",
    "TransformLengthError",
    "ConvergenceError",
    # Magnitude
    "Limbs",
    "CompareResult",
    "trim",
    "increment",
    "decrement",
    "compare",
    "compare_magnitudes",
    "add",
    "subtract",
    "digits",
    "from_native",
    "to_native",
    # Transforms
    "NTT_PRIME_A",
    "NTT_PRIME_B",
    "RootTable",
    "ModularRootTable",
    "get_root_table",
    "get_modular_table",
    "fft",
    "ntt",
    # Multiplier
    "use_brute_force",
    "brute_force_multiply",
    "transform_multiply",
    "multiply",
    # Divider
    "DivModResult",
    "use_brute_force_division",
    "brute_force_divide",
    "reciprocal",
    "newton_divide",
    "divmod_magnitude",
]
