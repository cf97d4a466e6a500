"""The ``Number`` contract shared by ``Integer``, ``Decimal`` and ``Rational``.

The three variants form a closed tagged union keyed by ``NumberKind``. Each
variant registers itself here, so the parse dispatch in ``Number.of()`` and the
conversions between variants never need module-level imports between
``integer``, ``decimal`` and ``rational``.

Conversion table (rows: from, columns: to):

============  =========  =========  =========
              INTEGER    DECIMAL    RATIONAL
============  =========  =========  =========
INTEGER       identity   exact      exact
DECIMAL       scale 0    identity   exact
RATIONAL      d == 1     terminal   identity
============  =========  =========  =========

"scale 0", "d == 1" and "terminal" conversions raise ``RoundingNecessaryError``
when the value cannot be represented exactly in the target variant.
"""

from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Optional, TypeVar

from .config import get_engine
from .errors import InvalidArgumentError, NumberFormatError, StateRestoreError
from .grammar import NumberKind, classify
from .rounding import RoundingMode

N = TypeVar("N", bound="Number")

_VARIANTS: dict[NumberKind, type["Number"]] = {}

_CONVERTERS: dict[NumberKind, str] = {
    NumberKind.INTEGER: "to_big_integer",
    NumberKind.DECIMAL: "to_big_decimal",
    NumberKind.RATIONAL: "to_big_rational",
}

# Native integer range for ``to_int()``.
INT_MIN: int = -(2**63)
INT_MAX: int = 2**63 - 1

_HASH_MODULUS = str(sys.hash_info.modulus)


def register_variant(kind: NumberKind) -> Callable[[type[N]], type[N]]:
    """Class decorator: tag a ``Number`` subclass and make it the variant for ``kind``."""

    def decorate(cls: type[N]) -> type[N]:
        if kind in _VARIANTS:
            raise RuntimeError(f"variant for {kind.name} already registered: {_VARIANTS[kind].__name__}")
        cls.kind = kind
        _VARIANTS[kind] = cls
        return cls

    return decorate


def variant(kind: NumberKind) -> type["Number"]:
    return _VARIANTS[kind]


def _parse(value: Any) -> "Number":
    if isinstance(value, Number):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a number")
    if isinstance(value, int):
        return _VARIANTS[NumberKind.INTEGER](str(value))  # type: ignore[call-arg]
    if isinstance(value, float):
        if not math.isfinite(value):
            raise NumberFormatError(f"{value!r} cannot be represented exactly")
        value = repr(value)
        # Integral floats parse as integers: 1.0 -> 1.
        if value.endswith(".0"):
            value = value[:-2]
    if isinstance(value, str):
        token = classify(value)
        return _VARIANTS[token.kind]._from_token(token)
    raise TypeError(f"cannot convert {type(value).__name__} to a number")


def _operand(value: Any) -> Optional["Number"]:
    """Coerce an operator operand; ``None`` means the operator should return NotImplemented."""
    if isinstance(value, Number):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return _parse(value)
    return None


def _widen(a: "Number", b: "Number") -> tuple["Number", "Number"]:
    kind = a.kind if a.kind.value >= b.kind.value else b.kind
    return a.convert(kind), b.convert(kind)


def hash_digits(value: str) -> int:
    """``hash(int(value))`` for a canonical digit string, without building the int."""
    if len(value) <= 18:
        return hash(int(value))
    engine = get_engine()
    h = int(engine.div_r(engine.abs(value), _HASH_MODULUS))
    if value[0] == "-":
        h = -h
    return -2 if h == -1 else h


# Digits converted per int() call; stays under sys.get_int_max_str_digits().
_INT_CHUNK = 4000


def digits_to_int(value: str) -> int:
    """``int(value)`` for a canonical digit string of any length."""
    if len(value) <= _INT_CHUNK:
        return int(value)
    negative = value[0] == "-"
    digits = value[1:] if negative else value
    n = 0
    for i in range(0, len(digits), _INT_CHUNK):
        chunk = digits[i:i + _INT_CHUNK]
        n = n * 10 ** len(chunk) + int(chunk)
    return -n if negative else n


class Number(ABC):
    """Arbitrary-precision exact number."""

    kind: ClassVar[NumberKind]

    # -- Construction -------------------------------------------------------

    @classmethod
    def of(cls: type[N], value: Any) -> N:
        """Create a number from a ``Number``, ``int``, ``float`` or string.

        On ``Number`` itself the parsed variant is returned as is. On a concrete
        variant the value is converted exactly to that variant.
        """
        number = _parse(value)
        if cls is Number:
            return number  # type: ignore[return-value]
        return number.convert(cls.kind)  # type: ignore[return-value]

    @classmethod
    @abstractmethod
    def _from_token(cls, token: Any) -> "Number":
        """Build the variant from a classified literal of its own kind."""

    @classmethod
    @abstractmethod
    def deserialize(cls: type[N], payload: str) -> N:
        """Inverse of ``serialize()``."""

    @classmethod
    def min(cls: type[N], *values: Any) -> N:
        """Smallest of ``values``, each converted with ``cls.of``."""
        result: Optional[N] = None
        for value in values:
            number = cls.of(value)
            if result is None or number.is_less_than(result):
                result = number
        if result is None:
            raise InvalidArgumentError("min() expects at least one value")
        return result

    @classmethod
    def max(cls: type[N], *values: Any) -> N:
        """Largest of ``values``, each converted with ``cls.of``."""
        result: Optional[N] = None
        for value in values:
            number = cls.of(value)
            if result is None or number.is_greater_than(result):
                result = number
        if result is None:
            raise InvalidArgumentError("max() expects at least one value")
        return result

    @staticmethod
    def compare(x: Any, y: Any) -> int:
        return Number.of(x).compare_to(Number.of(y))

    # -- Contract -----------------------------------------------------------

    @abstractmethod
    def signum(self) -> int:
        """-1, 0 or 1."""

    @abstractmethod
    def compare_to(self, that: Any) -> int:
        """-1, 0 or 1 as ``self`` is less than, equal to or greater than ``that``."""

    @abstractmethod
    def to_big_integer(self) -> "Number":
        ...

    @abstractmethod
    def to_big_decimal(self) -> "Number":
        ...

    @abstractmethod
    def to_big_rational(self) -> "Number":
        ...

    @abstractmethod
    def to_scale(self, scale: int, mode: RoundingMode = RoundingMode.UNNECESSARY) -> "Number":
        """Decimal representation at ``scale``, rounded with ``mode``."""

    @abstractmethod
    def to_int(self) -> int:
        """Exact native integer in the signed 64-bit range."""

    @abstractmethod
    def to_float(self) -> float:
        """Nearest float; this conversion is lossy."""

    @abstractmethod
    def serialize(self) -> str:
        """Transport form; see ``deserialize()``."""

    @abstractmethod
    def negated(self: N) -> N:
        ...

    @abstractmethod
    def absolute(self: N) -> N:
        ...

    @abstractmethod
    def __str__(self) -> str:
        ...

    def convert(self, kind: NumberKind) -> "Number":
        """Exact conversion to the variant tagged ``kind``."""
        return getattr(self, _CONVERTERS[kind])()

    # -- Derived predicates -------------------------------------------------

    def is_equal_to(self, that: Any) -> bool:
        return self.compare_to(that) == 0

    def is_less_than(self, that: Any) -> bool:
        return self.compare_to(that) < 0

    def is_less_than_or_equal_to(self, that: Any) -> bool:
        return self.compare_to(that) <= 0

    def is_greater_than(self, that: Any) -> bool:
        return self.compare_to(that) > 0

    def is_greater_than_or_equal_to(self, that: Any) -> bool:
        return self.compare_to(that) >= 0

    def is_zero(self) -> bool:
        return self.signum() == 0

    def is_negative(self) -> bool:
        return self.signum() < 0

    def is_negative_or_zero(self) -> bool:
        return self.signum() <= 0

    def is_positive(self) -> bool:
        return self.signum() > 0

    def is_positive_or_zero(self) -> bool:
        return self.signum() >= 0

    # -- Python protocol ----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        that = _operand(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) == 0

    def __lt__(self, other: object) -> bool:
        that = _operand(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) < 0

    def __le__(self, other: object) -> bool:
        that = _operand(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) <= 0

    def __gt__(self, other: object) -> bool:
        that = _operand(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) > 0

    def __ge__(self, other: object) -> bool:
        that = _operand(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) >= 0

    def __hash__(self) -> int:
        # Equal values hash equal across variants and with int.
        reduced = self.to_big_rational().simplified()  # type: ignore[attr-defined]
        numerator = reduced.numerator.value
        denominator = reduced.denominator.value
        if denominator == "1":
            return hash_digits(numerator)
        return hash((numerator, denominator))

    def __add__(self, other: Any) -> "Number":
        that = _operand(other)
        if that is None:
            return NotImplemented
        a, b = _widen(self, that)
        return a.plus(b)  # type: ignore[attr-defined]

    def __radd__(self, other: Any) -> "Number":
        that = _operand(other)
        if that is None:
            return NotImplemented
        a, b = _widen(that, self)
        return a.plus(b)  # type: ignore[attr-defined]

    def __sub__(self, other: Any) -> "Number":
        that = _operand(other)
        if that is None:
            return NotImplemented
        a, b = _widen(self, that)
        return a.minus(b)  # type: ignore[attr-defined]

    def __rsub__(self, other: Any) -> "Number":
        that = _operand(other)
        if that is None:
            return NotImplemented
        a, b = _widen(that, self)
        return a.minus(b)  # type: ignore[attr-defined]

    def __mul__(self, other: Any) -> "Number":
        that = _operand(other)
        if that is None:
            return NotImplemented
        a, b = _widen(self, that)
        return a.multiplied_by(b)  # type: ignore[attr-defined]

    def __rmul__(self, other: Any) -> "Number":
        that = _operand(other)
        if that is None:
            return NotImplemented
        a, b = _widen(that, self)
        return a.multiplied_by(b)  # type: ignore[attr-defined]

    def __truediv__(self, other: Any) -> "Number":
        # Exact: always computed on rationals.
        that = _operand(other)
        if that is None:
            return NotImplemented
        return self.to_big_rational().divided_by(that)  # type: ignore[attr-defined]

    def __rtruediv__(self, other: Any) -> "Number":
        that = _operand(other)
        if that is None:
            return NotImplemented
        return that.to_big_rational().divided_by(self)  # type: ignore[attr-defined]

    def __pow__(self, exponent: int) -> "Number":
        if not isinstance(exponent, int) or isinstance(exponent, bool):
            return NotImplemented
        return self.power(exponent)  # type: ignore[attr-defined]

    def __neg__(self: N) -> N:
        return self.negated()

    def __pos__(self: N) -> N:
        return self

    def __abs__(self: N) -> N:
        return self.absolute()

    def __bool__(self) -> bool:
        return self.signum() != 0

    def __int__(self) -> int:
        """Exact and unbounded; fractional values raise ``RoundingNecessaryError``."""
        return digits_to_int(self.to_big_integer().value)  # type: ignore[attr-defined]

    def __float__(self) -> float:
        return self.to_float()

    # -- Pickling -----------------------------------------------------------

    def __getstate__(self) -> str:
        return self.serialize()

    def __setstate__(self, state: str) -> None:
        if self.__dict__:
            raise StateRestoreError(
                f"cannot restore state onto an initialized {type(self).__name__}"
            )
        restored = type(self).deserialize(state)
        self.__dict__.update(restored.__dict__)
