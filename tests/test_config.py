"""Tests for exactnum/config.py: engine selection and locking."""

import logging

import pytest

from exactnum import config
from exactnum.config import ENV_ENGINE, EngineConfig, configure_engine, get_engine
from exactnum.engine import NativeIntEngine, SchoolbookEngine
from exactnum.errors import EngineConfigurationError
from exactnum.integer import Integer


@pytest.fixture
def fresh(monkeypatch):
    """Unconfigured, unlocked engine state; restored after the test."""
    monkeypatch.setattr(config, "_engine", None)
    monkeypatch.setattr(config, "_locked", False)
    monkeypatch.delenv(ENV_ENGINE, raising=False)


# ---------------------------------------------------------------------------
# EngineConfig
# ---------------------------------------------------------------------------

class TestEngineConfig:
    def test_default_backend(self):
        assert EngineConfig().backend == "schoolbook"
        assert isinstance(EngineConfig().create(), SchoolbookEngine)

    def test_native_backend(self):
        assert isinstance(EngineConfig(backend="native").create(), NativeIntEngine)

    def test_unknown_backend(self):
        with pytest.raises(EngineConfigurationError):
            EngineConfig(backend="gmp")

    def test_non_str_backend(self):
        with pytest.raises(TypeError):
            EngineConfig(backend=1)  # type: ignore[arg-type]

    def test_frozen(self):
        cfg = EngineConfig()
        with pytest.raises(AttributeError):
            cfg.backend = "native"  # type: ignore

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_ENGINE, " Native ")
        assert EngineConfig.from_env().backend == "native"

    def test_from_env_blank_uses_default(self, monkeypatch):
        monkeypatch.setenv(ENV_ENGINE, "   ")
        assert EngineConfig.from_env().backend == "schoolbook"

    def test_from_env_unknown_warns_and_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv(ENV_ENGINE, "gmp")
        with caplog.at_level(logging.WARNING, logger="exactnum.config"):
            cfg = EngineConfig.from_env()
        assert cfg.backend == "schoolbook"
        assert any(ENV_ENGINE in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# configure_engine / get_engine
# ---------------------------------------------------------------------------

class TestSelection:
    def test_lazy_resolution_from_env(self, fresh, monkeypatch):
        monkeypatch.setenv(ENV_ENGINE, "native")
        assert isinstance(get_engine(), NativeIntEngine)

    def test_lazy_resolution_default(self, fresh):
        assert isinstance(get_engine(), SchoolbookEngine)

    def test_get_engine_returns_same_instance(self, fresh):
        assert get_engine() is get_engine()

    def test_configure_by_name(self, fresh):
        engine = configure_engine("native")
        assert isinstance(engine, NativeIntEngine)
        assert get_engine() is engine

    def test_configure_by_instance(self, fresh):
        engine = SchoolbookEngine(max_digits_add_div=0, max_digits_mul=0)
        assert configure_engine(engine) is engine
        assert Integer("99999999999").plus(1) == Integer("100000000000")
        assert get_engine() is engine

    def test_configure_by_config(self, fresh):
        assert isinstance(configure_engine(EngineConfig("native")), NativeIntEngine)

    def test_configure_from_env(self, fresh, monkeypatch):
        monkeypatch.setenv(ENV_ENGINE, "native")
        assert isinstance(configure_engine(), NativeIntEngine)

    def test_configure_rejects_other_types(self, fresh):
        with pytest.raises(TypeError):
            configure_engine(42)  # type: ignore[arg-type]

    def test_configure_unknown_name(self, fresh):
        with pytest.raises(EngineConfigurationError):
            configure_engine("gmp")

    def test_reconfigure_before_use(self, fresh):
        configure_engine("native")
        assert isinstance(configure_engine("schoolbook"), SchoolbookEngine)

    def test_configuration_is_logged(self, fresh, caplog):
        with caplog.at_level(logging.INFO, logger="exactnum.config"):
            configure_engine("native")
        assert any("native" in r.getMessage() for r in caplog.records)


class TestLocking:
    def test_switching_after_use_raises(self, fresh):
        configure_engine("schoolbook")
        Integer("2").plus(2)
        with pytest.raises(EngineConfigurationError):
            configure_engine("native")

    def test_same_backend_after_use_is_accepted(self, fresh):
        first = configure_engine("schoolbook")
        Integer("2").plus(2)
        assert configure_engine("schoolbook") is first

    def test_same_backend_with_other_settings_after_use_raises(self, fresh):
        configure_engine("schoolbook")
        Integer("2").plus(2)
        with pytest.raises(EngineConfigurationError):
            configure_engine(SchoolbookEngine(max_digits_add_div=0, max_digits_mul=0))

    def test_equivalent_instance_after_use_returns_active_engine(self, fresh):
        first = configure_engine(SchoolbookEngine(max_digits_add_div=0, max_digits_mul=0))
        Integer("2").plus(2)
        assert configure_engine(SchoolbookEngine(max_digits_add_div=0, max_digits_mul=0)) is first

    def test_lock_error_is_a_runtime_error(self, fresh):
        get_engine()
        with pytest.raises(RuntimeError):
            configure_engine(NativeIntEngine())
