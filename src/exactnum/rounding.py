"""Rounding modes for scale-changing divisions.

A rounding mode decides, from the remainder a division discards, whether the
truncated quotient keeps its value or moves one unit away from zero.
"""

from __future__ import annotations

from enum import Enum, unique

from .errors import InvalidArgumentError


@unique
class RoundingMode(Enum):
    """Closed set of rounding policies consumed by ``Engine.div_round``."""

    UP = "up"                      # away from zero
    DOWN = "down"                  # toward zero (truncate)
    CEILING = "ceiling"            # toward +inf
    FLOOR = "floor"                # toward -inf
    HALF_UP = "half_up"            # nearest, ties away from zero
    HALF_DOWN = "half_down"        # nearest, ties toward zero
    HALF_CEILING = "half_ceiling"  # nearest, ties toward +inf
    HALF_FLOOR = "half_floor"      # nearest, ties toward -inf
    HALF_EVEN = "half_even"        # nearest, ties to the even neighbour
    UNNECESSARY = "unnecessary"    # exact result required

    @classmethod
    def parse(cls, value: "RoundingMode | str") -> "RoundingMode":
        """Accept a member, its value (``"half_up"``) or its name (``"HALF_UP"``)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            for mode in cls:
                if key == mode.value or key == mode.name:
                    return mode
        raise InvalidArgumentError(f"invalid rounding mode: {value!r}")
