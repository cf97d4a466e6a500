"""Textual grammar for numbers.

``classify()`` turns a string into a ``NumberToken`` tagged with the shape it
matched; value construction happens later, in the variant registered for that
tag. Accepted shapes:

- integer:  ``[+-]?[0-9]+``
- decimal:  ``[+-]?[0-9]+(\\.[0-9]+)?([eE][+-]?[0-9]+)?`` with a fraction or exponent
- rational: ``[+-]?[0-9]+/[0-9]+``

Leading zeros are allowed in input and stripped. Surrounding whitespace and
empty input are rejected. Decimal exponents are limited to ``MAX_EXPONENT`` in
magnitude.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, unique

from .errors import NumberFormatError

_NUMBER_RE = re.compile(
    r"(?P<sign>[-+])?"
    r"(?P<integral>[0-9]+)"
    r"(?:"
    r"(?:\.(?P<fractional>[0-9]+))?(?:[eE](?P<exponent>[-+]?[0-9]+))?"
    r"|/(?P<denominator>[0-9]+)"
    r")"
)

_CANONICAL_RE = re.compile(r"0|-?[1-9][0-9]*")

# Largest exponent magnitude accepted in a decimal literal.
MAX_EXPONENT = 1_000_000


@unique
class NumberKind(Enum):
    """Tag of the closed set of number variants, ordered from narrowest to broadest."""

    INTEGER = 0
    DECIMAL = 1
    RATIONAL = 2


@dataclass(frozen=True)
class NumberToken:
    """A classified number literal. Digit fields keep the input's leading zeros."""

    kind: NumberKind
    negative: bool
    integral: str
    fractional: str = ""
    exponent: int = 0
    denominator: str = ""

    def integer_digits(self) -> str:
        """Canonical digit string of the signed integral part."""
        return canonical_digits(self.integral, negative=self.negative)

    def unscaled_and_scale(self) -> tuple[str, int]:
        """``(unscaled, scale)`` for a decimal literal; negative scales are padded away."""
        unscaled = canonical_digits(self.integral + self.fractional, negative=self.negative)
        scale = len(self.fractional) - self.exponent
        if scale < 0:
            if unscaled != "0":
                unscaled += "0" * -scale
            scale = 0
        return unscaled, scale

    def rational_digits(self) -> tuple[str, str]:
        """``(numerator, denominator)`` canonical strings; the denominator may be ``"0"``."""
        return self.integer_digits(), canonical_digits(self.denominator)


def _parse_exponent(exponent: str, text: str) -> int:
    digits = exponent.lstrip("+-").lstrip("0")
    if len(digits) > len(str(MAX_EXPONENT)) or int(digits or "0") > MAX_EXPONENT:
        raise NumberFormatError(
            f"the exponent of {text[:32]!r} is out of range -{MAX_EXPONENT} to {MAX_EXPONENT}"
        )
    value = int(digits or "0")
    return -value if exponent[0] == "-" else value


def classify(text: str) -> NumberToken:
    """Classify ``text`` as an integer, decimal or rational literal."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    if not text:
        raise NumberFormatError("the value cannot be empty")

    m = _NUMBER_RE.fullmatch(text)
    if m is None:
        raise NumberFormatError(f"{text!r} does not represent a valid number")

    negative = m.group("sign") == "-"
    integral = m.group("integral")

    denominator = m.group("denominator")
    if denominator is not None:
        return NumberToken(NumberKind.RATIONAL, negative, integral, denominator=denominator)

    fractional = m.group("fractional")
    exponent = m.group("exponent")
    if fractional is not None or exponent is not None:
        return NumberToken(
            NumberKind.DECIMAL,
            negative,
            integral,
            fractional=fractional or "",
            exponent=_parse_exponent(exponent, text) if exponent is not None else 0,
        )

    return NumberToken(NumberKind.INTEGER, negative, integral)


def canonical_digits(digits: str, *, negative: bool = False) -> str:
    """Strip leading zeros and attach the sign; zero is never signed."""
    stripped = digits.lstrip("0")
    if not stripped:
        return "0"
    return "-" + stripped if negative else stripped


def is_canonical(value: object) -> bool:
    return isinstance(value, str) and _CANONICAL_RE.fullmatch(value) is not None
