"""`engine`: integer arithmetic on canonical digit strings.

Backends:
- `SchoolbookEngine` (default): digit-by-digit algorithms with native-word fast paths.
- `NativeIntEngine`: delegates to Python's built-in `int`.

Both satisfy the `Engine` contract and are interchangeable. Value types never
pick a backend themselves; see `exactnum.config`.
"""

from .base import MAX_POWER, Engine
from .native import NativeIntEngine
from .schoolbook import SchoolbookEngine

ENGINES: dict[str, type[Engine]] = {
    SchoolbookEngine.name: SchoolbookEngine,
    NativeIntEngine.name: NativeIntEngine,
}

__all__ = [
    "ENGINES",
    "MAX_POWER",
    "Engine",
    "NativeIntEngine",
    "SchoolbookEngine",
]
