"""The arithmetic engine contract.

An engine performs integer arithmetic on canonical digit strings: an optional
``-`` sign (never on zero) followed by decimal digits with no leading zero.

Callers validate operands before they reach an engine. Any other input format
is undefined behaviour, and every method returns canonical strings.

Subclasses implement the primitive operations (``add``, ``sub``, ``mul``,
``div_qr``, ``pow``, ``cmp``). ``neg``, ``abs``, ``gcd`` and ``div_round`` are
shared and defined here in terms of those primitives.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..errors import InvalidArgumentError, RoundingNecessaryError
from ..rounding import RoundingMode


# Largest exponent accepted by ``power()`` on every value type.
MAX_POWER: int = 1_000_000


class Engine(ABC):
    """Integer arithmetic over canonical digit strings."""

    name: str = "abstract"

    # -- Sign helpers -------------------------------------------------------

    def abs(self, a: str) -> str:
        return a[1:] if a[0] == "-" else a

    def neg(self, a: str) -> str:
        if a == "0":
            return "0"
        if a[0] == "-":
            return a[1:]
        return "-" + a

    # -- Primitives ---------------------------------------------------------

    @abstractmethod
    def cmp(self, a: str, b: str) -> int:
        """Return -1, 0 or 1 as ``a`` is less than, equal to or greater than ``b``."""

    @abstractmethod
    def add(self, a: str, b: str) -> str:
        """Return ``a + b``."""

    @abstractmethod
    def sub(self, a: str, b: str) -> str:
        """Return ``a - b``."""

    @abstractmethod
    def mul(self, a: str, b: str) -> str:
        """Return ``a * b``."""

    @abstractmethod
    def div_qr(self, a: str, b: str) -> tuple[str, str]:
        """Truncating division: ``a = q*b + r`` with ``r`` carrying the sign of ``a``.

        ``b`` must not be zero.
        """

    @abstractmethod
    def pow(self, a: str, exponent: int) -> str:
        """Return ``a ** exponent`` for ``0 <= exponent <= MAX_POWER``."""

    def div_q(self, a: str, b: str) -> str:
        return self.div_qr(a, b)[0]

    def div_r(self, a: str, b: str) -> str:
        return self.div_qr(a, b)[1]

    # -- Derived operations -------------------------------------------------

    def gcd(self, a: str, b: str) -> str:
        """Greatest common divisor, always >= 0; ``gcd("0", "0") == "0"``."""
        a = self.abs(a)
        b = self.abs(b)
        while b != "0":
            a, b = b, self.div_r(a, b)
        return a

    def div_round(self, a: str, b: str, mode: RoundingMode) -> str:
        """Divide ``a`` by ``b`` and round the quotient according to ``mode``.

        The truncated quotient is moved one unit away from zero when the mode
        asks for it, based on the discarded remainder:

        - ``UNNECESSARY`` fails when the remainder is nonzero.
        - ``UP``/``DOWN``/``CEILING``/``FLOOR`` only look at remainder != 0 and the
          sign of the result.
        - ``HALF_*`` compare ``2*|r|`` with ``|b|``; ties are resolved per mode, and
          ``HALF_EVEN`` looks at the last digit of the truncated quotient.

        ``b`` must not be zero; callers raise ``DivisionByZeroError`` first.
        """
        if not isinstance(mode, RoundingMode):
            raise InvalidArgumentError(f"invalid rounding mode: {mode!r}")

        quotient, remainder = self.div_qr(a, b)

        has_discarded_fraction = remainder != "0"
        is_positive_or_zero = (a[0] == "-") == (b[0] == "-")

        def half_cmp() -> int:
            twice = self.abs(self.mul(remainder, "2"))
            return self.cmp(twice, self.abs(b))

        if mode is RoundingMode.UNNECESSARY:
            if has_discarded_fraction:
                raise RoundingNecessaryError(
                    "rounding is necessary to represent the result of the operation at this scale"
                )
            increment = False
        elif mode is RoundingMode.UP:
            increment = has_discarded_fraction
        elif mode is RoundingMode.DOWN:
            increment = False
        elif mode is RoundingMode.CEILING:
            increment = has_discarded_fraction and is_positive_or_zero
        elif mode is RoundingMode.FLOOR:
            increment = has_discarded_fraction and not is_positive_or_zero
        elif mode is RoundingMode.HALF_UP:
            increment = half_cmp() >= 0
        elif mode is RoundingMode.HALF_DOWN:
            increment = half_cmp() > 0
        elif mode is RoundingMode.HALF_CEILING:
            increment = half_cmp() >= 0 if is_positive_or_zero else half_cmp() > 0
        elif mode is RoundingMode.HALF_FLOOR:
            increment = half_cmp() > 0 if is_positive_or_zero else half_cmp() >= 0
        else:  # HALF_EVEN
            last_digit_is_even = int(quotient[-1]) % 2 == 0
            increment = half_cmp() > 0 if last_digit_is_even else half_cmp() >= 0

        if increment:
            return self.add(quotient, "1" if is_positive_or_zero else "-1")
        return quotient

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
