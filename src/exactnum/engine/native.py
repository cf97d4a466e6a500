"""Engine backed by Python's built-in arbitrary-precision ``int``.

Used as the reference oracle for the schoolbook engine in parity tests, and as
a faster drop-in backend. Results are converted back to canonical strings so
the two backends are interchangeable.

Conversions between ``str`` and ``int`` are subject to the interpreter's
integer string conversion limit (``sys.get_int_max_str_digits()``); operands
past that limit need the schoolbook engine.
"""

from __future__ import annotations

from .base import Engine


class NativeIntEngine(Engine):
    name = "native"

    def cmp(self, a: str, b: str) -> int:
        x = int(a)
        y = int(b)
        return (x > y) - (x < y)

    def add(self, a: str, b: str) -> str:
        return str(int(a) + int(b))

    def sub(self, a: str, b: str) -> str:
        return str(int(a) - int(b))

    def mul(self, a: str, b: str) -> str:
        return str(int(a) * int(b))

    def div_qr(self, a: str, b: str) -> tuple[str, str]:
        x = int(a)
        y = int(b)
        # Truncation toward zero, not floor.
        q = abs(x) // abs(y)
        if (x < 0) != (y < 0):
            q = -q
        return str(q), str(x - q * y)

    def pow(self, a: str, exponent: int) -> str:
        return str(int(a) ** exponent)

    def gcd(self, a: str, b: str) -> str:
        x = abs(int(a))
        y = abs(int(b))
        while y:
            x, y = y, x % y
        return str(x)
