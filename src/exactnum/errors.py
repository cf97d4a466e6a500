"""Exception types for exactnum.

Every error raised by the package derives from ``NumberError`` and from the
builtin exception a caller would naturally catch (``ValueError``,
``ZeroDivisionError``, ``ArithmeticError``, ``RuntimeError``).
"""

from __future__ import annotations


class NumberError(Exception):
    """Base class for all exactnum errors."""


class InvalidArgumentError(NumberError, ValueError):
    """Raised when an argument is outside its allowed domain (scale, exponent, base, mode)."""


class NumberFormatError(InvalidArgumentError):
    """Raised when a value does not have the textual or canonical shape of a number."""


class DivisionByZeroError(NumberError, ZeroDivisionError):
    """Raised on division by zero, zero denominators and the reciprocal of zero."""


class RoundingNecessaryError(NumberError, ArithmeticError):
    """Raised when an exact result was required but the value would need rounding."""


class IntegerOverflowError(NumberError, ArithmeticError):
    """Raised when a value does not fit the native signed 64-bit range."""

    def __init__(self, value: str, lo: int, hi: int) -> None:
        self.value = value
        self.lo = lo
        self.hi = hi
        super().__init__(f"{value} is out of range {lo} to {hi} and cannot be represented as an integer")


class EngineConfigurationError(NumberError, RuntimeError):
    """Raised when the arithmetic engine is misconfigured or reconfigured after use."""


class StateRestoreError(NumberError, RuntimeError):
    """Raised when pickled state is restored onto an already-initialized value."""
