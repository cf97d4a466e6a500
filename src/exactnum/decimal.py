"""Arbitrary-precision decimal: an unscaled integer and a non-negative scale.

The value of ``Decimal(unscaled, scale)`` is ``unscaled * 10**-scale``. Scales
are never negative: a negative scale is folded into the unscaled value by
appending zeros.

Two decimals with different scales are aligned by appending zeros to the
unscaled value of the one with the smaller scale ("rescaling"); that is the
only scale change that never loses precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from .base import Number, register_variant, variant
from .config import get_engine
from .errors import DivisionByZeroError, InvalidArgumentError, NumberFormatError
from .grammar import NumberKind, NumberToken, is_canonical
from .integer import Integer, check_exponent
from .rounding import RoundingMode

DecimalLike = Union["Decimal", Integer, int, float, str]


def check_scale(scale: int) -> int:
    if not isinstance(scale, int) or isinstance(scale, bool):
        raise TypeError("scale must be an int")
    if scale < 0:
        raise InvalidArgumentError("the scale cannot be negative")
    return scale


def _with_zeros(value: str, zeros: int) -> str:
    """``value * 10**zeros`` on digit strings; zero stays ``"0"``."""
    if value == "0" or zeros <= 0:
        return value
    return value + "0" * zeros


@register_variant(NumberKind.DECIMAL)
@dataclass(frozen=True, eq=False)
class Decimal(Number):
    """Immutable decimal number."""

    unscaled: str
    scale: int = 0

    def __post_init__(self) -> None:
        if not is_canonical(self.unscaled):
            raise NumberFormatError(f"{self.unscaled!r} is not a canonical unscaled digit string")
        if not isinstance(self.scale, int) or isinstance(self.scale, bool):
            raise TypeError("scale must be an int")
        if self.scale < 0:
            raise InvalidArgumentError("the scale cannot be negative")

    # -- Construction -------------------------------------------------------

    @classmethod
    def _from_token(cls, token: NumberToken) -> "Decimal":
        unscaled, scale = token.unscaled_and_scale()
        return cls(unscaled, scale)

    @classmethod
    def of_unscaled(cls, value: Any, scale: int = 0) -> "Decimal":
        """``value * 10**-scale`` where ``value`` is converted exactly to an ``Integer``."""
        check_scale(scale)
        return cls(Integer.of(value).value, scale)

    @classmethod
    def deserialize(cls, payload: str) -> "Decimal":
        """Inverse of ``serialize()``: ``"<unscaled>:<scale>"``."""
        if not isinstance(payload, str):
            raise NumberFormatError("decimal payload must be a str")
        unscaled, sep, scale = payload.partition(":")
        if not sep or not scale.isascii() or not scale.isdigit():
            raise NumberFormatError(f"malformed decimal payload {payload!r}")
        return cls(unscaled, int(scale))

    @classmethod
    def zero(cls) -> "Decimal":
        return _ZERO

    @classmethod
    def one(cls) -> "Decimal":
        return _ONE

    @classmethod
    def ten(cls) -> "Decimal":
        return _TEN

    # -- Scale helpers ------------------------------------------------------

    def _value_with_min_scale(self, scale: int) -> str:
        """Unscaled value rescaled up to ``scale`` (no-op if already at or above it)."""
        return _with_zeros(self.unscaled, scale - self.scale)

    def _aligned(self, that: "Decimal") -> tuple[str, str]:
        """Unscaled values of ``self`` and ``that`` at their common (maximum) scale."""
        return (
            self._value_with_min_scale(that.scale),
            that._value_with_min_scale(self.scale),
        )

    def _padded(self) -> str:
        """Unscaled value left-padded with zeros to at least ``scale + 1`` digits."""
        negative = self.unscaled[0] == "-"
        digits = self.unscaled[1:] if negative else self.unscaled
        digits = digits.rjust(self.scale + 1, "0")
        return "-" + digits if negative else digits

    # -- Arithmetic ---------------------------------------------------------

    def plus(self, that: DecimalLike) -> "Decimal":
        that = Decimal.of(that)
        if that.unscaled == "0" and that.scale <= self.scale:
            return self
        a, b = self._aligned(that)
        return Decimal(get_engine().add(a, b), max(self.scale, that.scale))

    def minus(self, that: DecimalLike) -> "Decimal":
        that = Decimal.of(that)
        if that.unscaled == "0" and that.scale <= self.scale:
            return self
        a, b = self._aligned(that)
        return Decimal(get_engine().sub(a, b), max(self.scale, that.scale))

    def multiplied_by(self, that: DecimalLike) -> "Decimal":
        that = Decimal.of(that)
        if that.unscaled == "1" and that.scale == 0:
            return self
        return Decimal(get_engine().mul(self.unscaled, that.unscaled), self.scale + that.scale)

    def divided_by(
        self,
        that: DecimalLike,
        scale: Optional[int] = None,
        mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> "Decimal":
        """Quotient at ``scale`` (default: ``self.scale``), rounded with ``mode``."""
        mode = RoundingMode.parse(mode)
        that = Decimal.of(that)
        if that.unscaled == "0":
            raise DivisionByZeroError("division by zero")

        if scale is None:
            scale = self.scale
        else:
            check_scale(scale)

        if that.unscaled == "1" and that.scale == 0 and scale == self.scale:
            return self

        p = self._value_with_min_scale(that.scale + scale)
        q = that._value_with_min_scale(self.scale - scale)
        return Decimal(get_engine().div_round(p, q, mode), scale)

    def exactly_divided_by(self, that: DecimalLike) -> "Decimal":
        """Exact quotient at the smallest scale that represents it.

        The divisor, once aligned with the dividend, is stripped of trailing
        zeros and then of its factors 5 and 2; each factor removed adds one
        digit of scale. If the quotient still does not terminate at that scale
        the division raises ``RoundingNecessaryError``.
        """
        that = Decimal.of(that)
        if that.unscaled == "0":
            raise DivisionByZeroError("division by zero")

        engine = get_engine()
        _, b = self._aligned(that)
        d = b.rstrip("0")
        scale = len(b) - len(d)

        for prime in (5, 2):
            while int(d[-1]) % prime == 0:
                d = engine.div_q(d, str(prime))
                scale += 1

        return self.divided_by(that, scale).strip_trailing_zeros()

    def quotient(self, that: DecimalLike) -> "Decimal":
        """Truncated integral quotient, at scale 0."""
        that = Decimal.of(that)
        if that.unscaled == "0":
            raise DivisionByZeroError("division by zero")
        a, b = self._aligned(that)
        return Decimal(get_engine().div_q(a, b), 0)

    def remainder(self, that: DecimalLike) -> "Decimal":
        """Remainder of ``quotient()``, at the larger of the two scales."""
        that = Decimal.of(that)
        if that.unscaled == "0":
            raise DivisionByZeroError("division by zero")
        a, b = self._aligned(that)
        return Decimal(get_engine().div_r(a, b), max(self.scale, that.scale))

    def quotient_and_remainder(self, that: DecimalLike) -> tuple["Decimal", "Decimal"]:
        that = Decimal.of(that)
        if that.unscaled == "0":
            raise DivisionByZeroError("division by zero")
        a, b = self._aligned(that)
        q, r = get_engine().div_qr(a, b)
        return Decimal(q, 0), Decimal(r, max(self.scale, that.scale))

    def power(self, exponent: int) -> "Decimal":
        check_exponent(exponent)
        if exponent == 0:
            return _ONE
        if exponent == 1:
            return self
        return Decimal(get_engine().pow(self.unscaled, exponent), self.scale * exponent)

    def with_point_moved_left(self, n: int) -> "Decimal":
        if n == 0:
            return self
        if n < 0:
            return self.with_point_moved_right(-n)
        return Decimal(self.unscaled, self.scale + n)

    def with_point_moved_right(self, n: int) -> "Decimal":
        if n == 0:
            return self
        if n < 0:
            return self.with_point_moved_left(-n)
        scale = self.scale - n
        if scale >= 0:
            return Decimal(self.unscaled, scale)
        return Decimal(_with_zeros(self.unscaled, -scale), 0)

    def strip_trailing_zeros(self) -> "Decimal":
        if self.scale == 0:
            return self
        trimmed = self.unscaled.rstrip("0")
        if not trimmed or trimmed == "-":
            return _ZERO
        zeros = min(len(self.unscaled) - len(trimmed), self.scale)
        if zeros == 0:
            return self
        return Decimal(self.unscaled[:-zeros], self.scale - zeros)

    def negated(self) -> "Decimal":
        return Decimal(get_engine().neg(self.unscaled), self.scale)

    def absolute(self) -> "Decimal":
        return self.negated() if self.unscaled[0] == "-" else self

    # -- Comparison ---------------------------------------------------------

    def signum(self) -> int:
        if self.unscaled == "0":
            return 0
        return -1 if self.unscaled[0] == "-" else 1

    def compare_to(self, that: Any) -> int:
        that = Number.of(that)
        if isinstance(that, Integer):
            that = that.to_big_decimal()
        if isinstance(that, Decimal):
            a, b = self._aligned(that)
            return get_engine().cmp(a, b)
        return -that.compare_to(self)

    # -- Accessors ----------------------------------------------------------

    def unscaled_value(self) -> Integer:
        return Integer(self.unscaled)

    def integral(self) -> str:
        """Signed digits left of the decimal point."""
        if self.scale == 0:
            return self.unscaled
        return self._padded()[: -self.scale]

    def fraction(self) -> str:
        """Digits right of the decimal point (exactly ``scale`` of them)."""
        if self.scale == 0:
            return ""
        return self._padded()[-self.scale:]

    # -- Conversion ---------------------------------------------------------

    def to_big_integer(self) -> Integer:
        exact = self if self.scale == 0 else self.divided_by(_ONE, 0)
        return Integer(exact.unscaled)

    def to_big_decimal(self) -> "Decimal":
        return self

    def to_big_rational(self) -> Number:
        numerator = Integer(self.unscaled)
        denominator = Integer("1" + "0" * self.scale)
        return variant(NumberKind.RATIONAL)(numerator, denominator)  # type: ignore[call-arg]

    def to_scale(self, scale: int, mode: RoundingMode = RoundingMode.UNNECESSARY) -> "Decimal":
        mode = RoundingMode.parse(mode)
        check_scale(scale)
        if scale == self.scale:
            return self
        return self.divided_by(_ONE, scale, mode)

    def to_int(self) -> int:
        return self.to_big_integer().to_int()

    def to_float(self) -> float:
        return float(str(self))

    def serialize(self) -> str:
        return f"{self.unscaled}:{self.scale}"

    def __str__(self) -> str:
        if self.scale == 0:
            return self.unscaled
        padded = self._padded()
        return padded[: -self.scale] + "." + padded[-self.scale:]


_ZERO = Decimal("0")
_ONE = Decimal("1")
_TEN = Decimal("10")
