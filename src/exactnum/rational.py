"""Arbitrary-precision rational: ``numerator / denominator``.

The denominator is always positive; the sign lives in the numerator. Results
are never simplified implicitly, call ``simplified()`` for lowest terms.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union

from .base import Number, digits_to_int, register_variant
from .config import get_engine
from .decimal import Decimal, check_scale
from .errors import DivisionByZeroError, NumberFormatError, RoundingNecessaryError
from .grammar import NumberKind, NumberToken
from .integer import Integer, check_exponent
from .rounding import RoundingMode

RationalLike = Union["Rational", Decimal, Integer, int, float, str]


@register_variant(NumberKind.RATIONAL)
@dataclass(frozen=True, eq=False)
class Rational(Number):
    """Immutable fraction of two ``Integer`` values."""

    numerator: Integer
    denominator: Integer

    def __post_init__(self) -> None:
        if not isinstance(self.numerator, Integer) or not isinstance(self.denominator, Integer):
            raise TypeError("numerator and denominator must be Integer values")
        sign = self.denominator.signum()
        if sign == 0:
            raise DivisionByZeroError("the denominator of a rational number cannot be zero")
        if sign < 0:
            object.__setattr__(self, "numerator", self.numerator.negated())
            object.__setattr__(self, "denominator", self.denominator.negated())

    # -- Construction -------------------------------------------------------

    @classmethod
    def _from_token(cls, token: NumberToken) -> "Rational":
        numerator, denominator = token.rational_digits()
        if denominator == "0":
            raise DivisionByZeroError("the denominator of a rational number cannot be zero")
        return cls(Integer(numerator), Integer(denominator))

    @classmethod
    def nd(cls, numerator: Any, denominator: Any) -> "Rational":
        """``numerator / denominator`` with both parts converted exactly to ``Integer``."""
        return cls(Integer.of(numerator), Integer.of(denominator))

    @classmethod
    def deserialize(cls, payload: str) -> "Rational":
        """Inverse of ``serialize()``: ``"<numerator>/<denominator>"``."""
        if not isinstance(payload, str):
            raise NumberFormatError("rational payload must be a str")
        numerator, sep, denominator = payload.partition("/")
        if not sep:
            raise NumberFormatError(f"malformed rational payload {payload!r}")
        return cls(Integer(numerator), Integer(denominator))

    @classmethod
    def zero(cls) -> "Rational":
        return _ZERO

    @classmethod
    def one(cls) -> "Rational":
        return _ONE

    @classmethod
    def ten(cls) -> "Rational":
        return _TEN

    # -- Arithmetic ---------------------------------------------------------

    def plus(self, that: RationalLike) -> "Rational":
        that = Rational.of(that)
        numerator = self.numerator.multiplied_by(that.denominator).plus(
            that.numerator.multiplied_by(self.denominator)
        )
        return Rational(numerator, self.denominator.multiplied_by(that.denominator))

    def minus(self, that: RationalLike) -> "Rational":
        that = Rational.of(that)
        numerator = self.numerator.multiplied_by(that.denominator).minus(
            that.numerator.multiplied_by(self.denominator)
        )
        return Rational(numerator, self.denominator.multiplied_by(that.denominator))

    def multiplied_by(self, that: RationalLike) -> "Rational":
        that = Rational.of(that)
        return Rational(
            self.numerator.multiplied_by(that.numerator),
            self.denominator.multiplied_by(that.denominator),
        )

    def divided_by(self, that: RationalLike) -> "Rational":
        that = Rational.of(that)
        if that.numerator.is_zero():
            raise DivisionByZeroError("division by zero")
        return Rational(
            self.numerator.multiplied_by(that.denominator),
            self.denominator.multiplied_by(that.numerator),
        )

    def power(self, exponent: int) -> "Rational":
        check_exponent(exponent)
        if exponent == 0:
            return _ONE
        if exponent == 1:
            return self
        return Rational(self.numerator.power(exponent), self.denominator.power(exponent))

    def reciprocal(self) -> "Rational":
        if self.numerator.is_zero():
            raise DivisionByZeroError("the reciprocal of zero is undefined")
        return Rational(self.denominator, self.numerator)

    def simplified(self) -> "Rational":
        """Lowest terms; zero becomes ``0/1``."""
        gcd = self.numerator.gcd(self.denominator)
        if gcd.value == "1":
            return self
        return Rational(self.numerator.quotient(gcd), self.denominator.quotient(gcd))

    def quotient(self) -> Integer:
        """Integral part, truncated toward zero."""
        return self.numerator.quotient(self.denominator)

    def remainder(self) -> Integer:
        return self.numerator.remainder(self.denominator)

    def quotient_and_remainder(self) -> tuple[Integer, Integer]:
        return self.numerator.quotient_and_remainder(self.denominator)

    def negated(self) -> "Rational":
        return Rational(self.numerator.negated(), self.denominator)

    def absolute(self) -> "Rational":
        return self.negated() if self.numerator.is_negative() else self

    # -- Comparison ---------------------------------------------------------

    def signum(self) -> int:
        return self.numerator.signum()

    def compare_to(self, that: Any) -> int:
        that = Rational.of(that)
        engine = get_engine()
        return engine.cmp(
            engine.mul(self.numerator.value, that.denominator.value),
            engine.mul(that.numerator.value, self.denominator.value),
        )

    # -- Conversion ---------------------------------------------------------

    def to_big_integer(self) -> Integer:
        reduced = self.simplified()
        if reduced.denominator.value != "1":
            raise RoundingNecessaryError(
                "this rational number cannot be represented as an integer without rounding"
            )
        return reduced.numerator

    def to_big_decimal(self) -> Decimal:
        """Exact decimal; raises ``RoundingNecessaryError`` if the expansion does not terminate."""
        return self.numerator.to_big_decimal().exactly_divided_by(self.denominator)

    def to_big_rational(self) -> "Rational":
        return self

    def to_scale(self, scale: int, mode: RoundingMode = RoundingMode.UNNECESSARY) -> Decimal:
        mode = RoundingMode.parse(mode)
        check_scale(scale)
        return self.numerator.to_big_decimal().divided_by(self.denominator, scale, mode)

    def to_int(self) -> int:
        return self.to_big_integer().to_int()

    def to_float(self) -> float:
        """Correctly rounded quotient; overflows to a signed infinity."""
        numerator = digits_to_int(self.numerator.value)
        try:
            return numerator / digits_to_int(self.denominator.value)
        except OverflowError:
            return math.inf if numerator > 0 else -math.inf

    def serialize(self) -> str:
        return f"{self.numerator.value}/{self.denominator.value}"

    def __str__(self) -> str:
        if self.denominator.value == "1":
            return self.numerator.value
        return self.serialize()


_ZERO = Rational(Integer("0"), Integer("1"))
_ONE = Rational(Integer("1"), Integer("1"))
_TEN = Rational(Integer("10"), Integer("1"))
