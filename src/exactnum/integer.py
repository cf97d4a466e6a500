"""Arbitrary-precision signed integer.

``Integer`` wraps a canonical digit string. Every operation coerces its operand
with ``Integer.of()`` and delegates to the configured engine, with shortcuts
for identity and zero operands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .base import INT_MAX, INT_MIN, Number, hash_digits, register_variant, variant
from .config import get_engine
from .engine import MAX_POWER
from .errors import (
    DivisionByZeroError,
    IntegerOverflowError,
    InvalidArgumentError,
    NumberFormatError,
)
from .grammar import NumberKind, NumberToken, is_canonical
from .rounding import RoundingMode

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

IntegerLike = Union["Integer", int, str]


def check_exponent(exponent: int) -> int:
    if not isinstance(exponent, int) or isinstance(exponent, bool):
        raise TypeError("exponent must be an int")
    if not 0 <= exponent <= MAX_POWER:
        raise InvalidArgumentError(f"the exponent {exponent} is not in the range 0 to {MAX_POWER}")
    return exponent


def check_base(base: int) -> int:
    if not isinstance(base, int) or isinstance(base, bool):
        raise TypeError("base must be an int")
    if not 2 <= base <= 36:
        raise InvalidArgumentError(f"base {base} is not in range 2 to 36")
    return base


@register_variant(NumberKind.INTEGER)
@dataclass(frozen=True, eq=False)
class Integer(Number):
    """Immutable integer; ``value`` is a canonical digit string."""

    value: str

    def __post_init__(self) -> None:
        if not is_canonical(self.value):
            raise NumberFormatError(f"{self.value!r} is not a canonical integer digit string")

    # -- Construction -------------------------------------------------------

    @classmethod
    def _from_token(cls, token: NumberToken) -> "Integer":
        return cls(token.integer_digits())

    @classmethod
    def parse(cls, text: str, base: int = 10) -> "Integer":
        """Parse ``text`` in ``base`` (2..36); digits beyond 9 are case-insensitive letters."""
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        check_base(base)
        if not text:
            raise NumberFormatError("the value cannot be empty")

        sign = ""
        if text[0] == "-":
            sign = "-"
            text = text[1:]
        elif text[0] == "+":
            text = text[1:]
        if not text:
            raise NumberFormatError("the value cannot be empty")

        text = text.lstrip("0")
        if not text:
            return _ZERO
        if text == "1":
            return cls(sign + "1")
        if base == 10 and text.isascii() and text.isdigit():
            return cls(sign + text)

        engine = get_engine()
        base_digits = str(base)
        result = "0"
        power = "1"
        for char in reversed(text.lower()):
            index = DIGITS.find(char)
            if index < 0 or index >= base:
                raise InvalidArgumentError(f"{char!r} is not a valid character in base {base}")
            if index:
                term = power if index == 1 else engine.mul(power, str(index))
                result = engine.add(result, term)
            power = engine.mul(power, base_digits)

        return cls(sign + result)

    @classmethod
    def deserialize(cls, payload: str) -> "Integer":
        if not isinstance(payload, str):
            raise NumberFormatError("integer payload must be a str")
        return cls(payload)

    @classmethod
    def zero(cls) -> "Integer":
        return _ZERO

    @classmethod
    def one(cls) -> "Integer":
        return _ONE

    @classmethod
    def ten(cls) -> "Integer":
        return _TEN

    # -- Arithmetic ---------------------------------------------------------

    def plus(self, that: IntegerLike) -> "Integer":
        that = Integer.of(that)
        if that.value == "0":
            return self
        if self.value == "0":
            return that
        return Integer(get_engine().add(self.value, that.value))

    def minus(self, that: IntegerLike) -> "Integer":
        that = Integer.of(that)
        if that.value == "0":
            return self
        return Integer(get_engine().sub(self.value, that.value))

    def multiplied_by(self, that: IntegerLike) -> "Integer":
        that = Integer.of(that)
        if that.value == "1":
            return self
        if self.value == "1":
            return that
        return Integer(get_engine().mul(self.value, that.value))

    def divided_by(self, that: IntegerLike, mode: RoundingMode = RoundingMode.UNNECESSARY) -> "Integer":
        """Division rounded with ``mode``; UNNECESSARY requires an exact result."""
        mode = RoundingMode.parse(mode)
        that = Integer.of(that)
        if that.value == "0":
            raise DivisionByZeroError("division by zero")
        if that.value == "1":
            return self
        return Integer(get_engine().div_round(self.value, that.value, mode))

    def exactly_divided_by(self, that: Any) -> Number:
        """Exact quotient as a ``Decimal``; fails if the decimal expansion does not terminate."""
        return self.to_big_decimal().exactly_divided_by(that)  # type: ignore[attr-defined]

    def quotient(self, that: IntegerLike) -> "Integer":
        """Truncated quotient (toward zero)."""
        that = Integer.of(that)
        if that.value == "0":
            raise DivisionByZeroError("division by zero")
        if that.value == "1":
            return self
        return Integer(get_engine().div_q(self.value, that.value))

    def remainder(self, that: IntegerLike) -> "Integer":
        """Remainder of the truncated division; carries the sign of ``self``."""
        that = Integer.of(that)
        if that.value == "0":
            raise DivisionByZeroError("division by zero")
        return Integer(get_engine().div_r(self.value, that.value))

    def quotient_and_remainder(self, that: IntegerLike) -> tuple["Integer", "Integer"]:
        that = Integer.of(that)
        if that.value == "0":
            raise DivisionByZeroError("division by zero")
        q, r = get_engine().div_qr(self.value, that.value)
        return Integer(q), Integer(r)

    def gcd(self, that: IntegerLike) -> "Integer":
        """Greatest common divisor, always >= 0."""
        that = Integer.of(that)
        if that.value == "0" and self.value[0] != "-":
            return self
        if self.value == "0" and that.value[0] != "-":
            return that
        return Integer(get_engine().gcd(self.value, that.value))

    def power(self, exponent: int) -> "Integer":
        check_exponent(exponent)
        if exponent == 0:
            return _ONE
        if exponent == 1:
            return self
        return Integer(get_engine().pow(self.value, exponent))

    def negated(self) -> "Integer":
        return Integer(get_engine().neg(self.value))

    def absolute(self) -> "Integer":
        return self.negated() if self.value[0] == "-" else self

    # -- Comparison ---------------------------------------------------------

    def signum(self) -> int:
        if self.value == "0":
            return 0
        return -1 if self.value[0] == "-" else 1

    def compare_to(self, that: Any) -> int:
        that = Number.of(that)
        if isinstance(that, Integer):
            return get_engine().cmp(self.value, that.value)
        return -that.compare_to(self)

    # -- Conversion ---------------------------------------------------------

    def to_big_integer(self) -> "Integer":
        return self

    def to_big_decimal(self) -> Number:
        return variant(NumberKind.DECIMAL)(self.value, 0)  # type: ignore[call-arg]

    def to_big_rational(self) -> Number:
        return variant(NumberKind.RATIONAL)(self, _ONE)  # type: ignore[call-arg]

    def to_scale(self, scale: int, mode: RoundingMode = RoundingMode.UNNECESSARY) -> Number:
        return self.to_big_decimal().to_scale(scale, mode)

    def to_int(self) -> int:
        engine = get_engine()
        if engine.cmp(self.value, str(INT_MIN)) < 0 or engine.cmp(self.value, str(INT_MAX)) > 0:
            raise IntegerOverflowError(self.value, INT_MIN, INT_MAX)
        return int(self.value)

    def to_float(self) -> float:
        return float(self.value)

    def to_base(self, base: int) -> str:
        """Digits of this integer in ``base`` (2..36), lowercase, with a leading ``-`` if negative."""
        check_base(base)
        if base == 10 or self.value == "0":
            return self.value

        engine = get_engine()
        negative = self.value[0] == "-"
        value = engine.abs(self.value)
        base_digits = str(base)
        out: list[str] = []
        while value != "0":
            value, remainder = engine.div_qr(value, base_digits)
            out.append(DIGITS[int(remainder)])
        if negative:
            out.append("-")
        return "".join(reversed(out))

    def serialize(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash_digits(self.value)


_ZERO = Integer("0")
_ONE = Integer("1")
_TEN = Integer("10")
