"""Process-wide engine selection.

The engine is chosen once: either explicitly with ``configure_engine()`` at
startup, or lazily from the environment the first time a value needs it.

Environment:
- ``EXACTNUM_ENGINE``: ``schoolbook`` (default) or ``native``.

Once arithmetic has run, the selection is locked. Switching backends while
values are being computed would mix results from different engines, so a later
``configure_engine()`` with a different engine (type or settings) raises
``EngineConfigurationError``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Union

from .engine import ENGINES, Engine
from .errors import EngineConfigurationError

logger = logging.getLogger(__name__)

ENV_ENGINE = "EXACTNUM_ENGINE"
DEFAULT_BACKEND = "schoolbook"


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


@dataclass(frozen=True)
class EngineConfig:
    """Which backend to instantiate."""

    backend: str = DEFAULT_BACKEND

    def __post_init__(self) -> None:
        if not isinstance(self.backend, str):
            raise TypeError("backend must be a str")
        if self.backend not in ENGINES:
            raise EngineConfigurationError(
                f"unknown engine backend {self.backend!r} (expected one of {sorted(ENGINES)})"
            )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        backend = _env_str(ENV_ENGINE, DEFAULT_BACKEND).lower()
        if backend not in ENGINES:
            logger.warning(
                "ignoring %s=%r (expected one of %s); using %r",
                ENV_ENGINE, backend, sorted(ENGINES), DEFAULT_BACKEND,
            )
            backend = DEFAULT_BACKEND
        return cls(backend=backend)

    def create(self) -> Engine:
        return ENGINES[self.backend]()


_engine: Optional[Engine] = None
_locked: bool = False


def configure_engine(engine: Union[Engine, EngineConfig, str, None] = None) -> Engine:
    """Select the engine used by every value type. Call once at startup.

    Accepts an ``Engine`` instance, an ``EngineConfig``, a backend name, or
    ``None`` to read the environment. Returns the active engine. Once locked,
    only an engine of the same type and settings is accepted (the active one
    is returned).
    """
    global _engine

    if engine is None:
        selected = EngineConfig.from_env().create()
    elif isinstance(engine, Engine):
        selected = engine
    elif isinstance(engine, EngineConfig):
        selected = engine.create()
    elif isinstance(engine, str):
        selected = EngineConfig(backend=engine.strip().lower()).create()
    else:
        raise TypeError(f"cannot configure engine from {type(engine).__name__}")

    if _locked and _engine is not None:
        if type(_engine) is type(selected) and vars(_engine) == vars(selected):
            return _engine
        raise EngineConfigurationError(
            f"engine already in use ({_engine.name}); configure it once before any arithmetic"
        )

    _engine = selected
    logger.info("exactnum engine configured: %s", selected.name)
    return selected


def get_engine() -> Engine:
    """Return the active engine, resolving it from the environment on first use."""
    global _engine, _locked

    if _engine is None:
        _engine = EngineConfig.from_env().create()
        logger.info("exactnum engine selected from environment: %s", _engine.name)
    _locked = True
    return _engine
