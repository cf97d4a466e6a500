"""Schoolbook digit-string arithmetic.

Operands small enough to fit a native machine word go through Python's integer
operators directly. Everything else runs digit by digit:

- addition/subtraction propagate a carry/borrow from the least significant digit,
- multiplication accumulates digit products and normalizes carries once,
- division is long division on a growing leading window of the dividend.
"""

from __future__ import annotations

import sys

from ..errors import InvalidArgumentError
from .base import Engine

# Digits that always fit a signed machine word, and digits whose product does.
if sys.maxsize > 2**32:
    MAX_DIGITS_ADD_DIV: int = 18
    MAX_DIGITS_MUL: int = 9
else:  # pragma: no cover
    MAX_DIGITS_ADD_DIV = 9
    MAX_DIGITS_MUL = 4


def _split(a: str) -> tuple[bool, str]:
    """(negative, digits) for a canonical string."""
    if a[0] == "-":
        return True, a[1:]
    return False, a


def _cmp_digits(a: str, b: str) -> int:
    """Compare two unsigned digit strings without leading zeros."""
    if len(a) != len(b):
        return 1 if len(a) > len(b) else -1
    if a == b:
        return 0
    return 1 if a > b else -1


def _add_digits(a: str, b: str) -> str:
    length = max(len(a), len(b))
    a = a.rjust(length, "0")
    b = b.rjust(length, "0")

    out: list[str] = []
    carry = 0
    for i in range(length - 1, -1, -1):
        total = ord(a[i]) + ord(b[i]) - 96 + carry
        if total >= 10:
            carry = 1
            total -= 10
        else:
            carry = 0
        out.append(chr(total + 48))
    if carry:
        out.append("1")
    return "".join(reversed(out))


def _sub_digits(a: str, b: str) -> str:
    """``a - b`` for unsigned digit strings with ``a >= b``."""
    if a == b:
        return "0"
    b = b.rjust(len(a), "0")

    out: list[str] = []
    borrow = 0
    for i in range(len(a) - 1, -1, -1):
        diff = ord(a[i]) - ord(b[i]) - borrow
        if diff < 0:
            borrow = 1
            diff += 10
        else:
            borrow = 0
        out.append(chr(diff + 48))
    return "".join(reversed(out)).lstrip("0") or "0"


def _mul_digits(a: str, b: str) -> str:
    da = [ord(c) - 48 for c in reversed(a)]
    db = [ord(c) - 48 for c in reversed(b)]

    acc = [0] * (len(da) + len(db))
    for i, x in enumerate(da):
        if x == 0:
            continue
        for j, y in enumerate(db):
            acc[i + j] += x * y

    carry = 0
    for k in range(len(acc)):
        total = acc[k] + carry
        acc[k] = total % 10
        carry = total // 10
    while carry:
        acc.append(carry % 10)
        carry //= 10

    text = "".join(chr(d + 48) for d in reversed(acc)).lstrip("0")
    return text or "0"


def _div_digits(a: str, b: str) -> tuple[str, str]:
    """Long division of unsigned digit strings; ``b`` is nonzero."""
    if _cmp_digits(a, b) < 0:
        return "0", a

    quotient: list[str] = []
    window = "0"
    for ch in a:
        window = ch if window == "0" else window + ch
        digit = 0
        while _cmp_digits(window, b) >= 0:
            window = _sub_digits(window, b)
            digit += 1
        quotient.append(chr(digit + 48))

    return "".join(quotient).lstrip("0") or "0", window


class SchoolbookEngine(Engine):
    """Pure digit-string engine; the default backend."""

    name = "schoolbook"

    def __init__(
        self,
        *,
        max_digits_add_div: int = MAX_DIGITS_ADD_DIV,
        max_digits_mul: int = MAX_DIGITS_MUL,
    ) -> None:
        if max_digits_add_div < 0 or max_digits_mul < 0:
            raise InvalidArgumentError("fast-path thresholds must be non-negative")
        self.max_digits_add_div = max_digits_add_div
        self.max_digits_mul = max_digits_mul

    def cmp(self, a: str, b: str) -> int:
        a_neg, a_dig = _split(a)
        b_neg, b_dig = _split(b)
        if a_neg and not b_neg:
            return -1
        if b_neg and not a_neg:
            return 1
        result = _cmp_digits(a_dig, b_dig)
        return -result if a_neg else result

    def add(self, a: str, b: str) -> str:
        if a == "0":
            return b
        if b == "0":
            return a

        a_neg, a_dig = _split(a)
        b_neg, b_dig = _split(b)

        if len(a_dig) <= self.max_digits_add_div and len(b_dig) <= self.max_digits_add_div:
            return str(int(a) + int(b))

        if a_neg == b_neg:
            result = _add_digits(a_dig, b_dig)
            return self.neg(result) if a_neg else result

        # Opposite signs: subtract the smaller magnitude from the larger one.
        order = _cmp_digits(a_dig, b_dig)
        if order == 0:
            return "0"
        if order > 0:
            result = _sub_digits(a_dig, b_dig)
            return self.neg(result) if a_neg else result
        result = _sub_digits(b_dig, a_dig)
        return self.neg(result) if b_neg else result

    def sub(self, a: str, b: str) -> str:
        return self.add(a, self.neg(b))

    def mul(self, a: str, b: str) -> str:
        if a == "0" or b == "0":
            return "0"
        if a == "1":
            return b
        if b == "1":
            return a
        if a == "-1":
            return self.neg(b)
        if b == "-1":
            return self.neg(a)

        a_neg, a_dig = _split(a)
        b_neg, b_dig = _split(b)

        if len(a_dig) <= self.max_digits_mul and len(b_dig) <= self.max_digits_mul:
            return str(int(a) * int(b))

        result = _mul_digits(a_dig, b_dig)
        return self.neg(result) if a_neg != b_neg else result

    def div_qr(self, a: str, b: str) -> tuple[str, str]:
        if a == "0":
            return "0", "0"
        if a == b:
            return "1", "0"
        if b == "1":
            return a, "0"
        if b == "-1":
            return self.neg(a), "0"

        a_neg, a_dig = _split(a)
        b_neg, b_dig = _split(b)

        if len(a_dig) <= self.max_digits_add_div and len(b_dig) <= self.max_digits_add_div:
            # Truncate toward zero on magnitudes; Python's // floors.
            q, r = divmod(int(a_dig), int(b_dig))
            if a_neg != b_neg:
                q = -q
            if a_neg:
                r = -r
            return str(q), str(r)

        q_dig, r_dig = _div_digits(a_dig, b_dig)
        q = self.neg(q_dig) if a_neg != b_neg else q_dig
        r = self.neg(r_dig) if a_neg else r_dig
        return q, r

    def pow(self, a: str, exponent: int) -> str:
        if exponent == 0:
            return "1"
        if exponent == 1:
            return a

        odd = exponent % 2
        result = self.pow(self.mul(a, a), exponent // 2)
        if odd:
            result = self.mul(result, a)
        return result
