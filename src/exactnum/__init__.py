"""`exactnum`: exact arbitrary-precision integer, decimal and rational arithmetic.

Values are immutable, never lose precision implicitly, and route every
operation through a single digit-string engine:
- `Integer`: signed integer of any size,
- `Decimal`: unscaled integer plus a non-negative scale,
- `Rational`: numerator over a positive denominator.

Rounding happens only where a `RoundingMode` is passed; otherwise an inexact
result raises `RoundingNecessaryError`.

Public API:
- `Number.of(value)`: parse an int, float or string into the matching variant
- `Integer`, `Decimal`, `Rational`, `RoundingMode`
- `configure_engine(...)`, `get_engine()`
"""

import logging

from .config import EngineConfig, configure_engine, get_engine
from .engine import Engine, NativeIntEngine, SchoolbookEngine
from .errors import (
    DivisionByZeroError,
    EngineConfigurationError,
    IntegerOverflowError,
    InvalidArgumentError,
    NumberError,
    NumberFormatError,
    RoundingNecessaryError,
    StateRestoreError,
)
from .grammar import NumberKind
from .base import Number
from .integer import Integer
from .decimal import Decimal
from .rational import Rational
from .rounding import RoundingMode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Number",
    "NumberKind",
    "Integer",
    "Decimal",
    "Rational",
    "RoundingMode",
    "Engine",
    "SchoolbookEngine",
    "NativeIntEngine",
    "EngineConfig",
    "configure_engine",
    "get_engine",
    "NumberError",
    "InvalidArgumentError",
    "NumberFormatError",
    "DivisionByZeroError",
    "RoundingNecessaryError",
    "IntegerOverflowError",
    "EngineConfigurationError",
    "StateRestoreError",
]
