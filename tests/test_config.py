"""Tests for engine configuration and errors."""

import logging

import pytest

from snapcore.config import EngineConfig, configure_logging, get_config, set_config
from snapcore.exceptions import ConfigurationError, RosterValidationError, SnapcoreError


class TestEngineConfig:
    """Tests for EngineConfig defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        """Test defaults with no environment variables set."""
        for name in ("SNAPCORE_SEED", "SNAPCORE_LOG_LEVEL", "SNAPCORE_VALIDATE_ROSTERS",
                     "SNAPCORE_HOME_FIELD_ADVANTAGE"):
            monkeypatch.delenv(name, raising=False)

        config = EngineConfig.from_env()

        assert config.seed is None
        assert config.log_level == "WARNING"
        assert config.validate_rosters is False
        assert config.home_field_advantage == 2.5

    def test_environment_overrides(self, monkeypatch):
        """Test every setting can be overridden from the environment."""
        monkeypatch.setenv("SNAPCORE_SEED", "99")
        monkeypatch.setenv("SNAPCORE_LOG_LEVEL", "debug")
        monkeypatch.setenv("SNAPCORE_VALIDATE_ROSTERS", "TRUE")
        monkeypatch.setenv("SNAPCORE_HOME_FIELD_ADVANTAGE", "3.5")

        config = EngineConfig.from_env()

        assert config.seed == 99
        assert config.log_level == "debug"
        assert config.validate_rosters is True
        assert config.home_field_advantage == 3.5

    def test_blank_seed_means_unseeded(self, monkeypatch):
        monkeypatch.setenv("SNAPCORE_SEED", "  ")
        assert EngineConfig.from_env().seed is None

    def test_valid_config_has_no_errors(self):
        assert EngineConfig(log_level="info", home_field_advantage=3).validate() == []

    def test_bad_log_level(self):
        """Test an unknown log level is reported."""
        errors = EngineConfig(log_level="LOUD", home_field_advantage=2.5).validate()
        assert len(errors) == 1
        assert "LOUD" in errors[0]

    def test_home_field_out_of_range(self):
        errors = EngineConfig(log_level="INFO", home_field_advantage=12).validate()
        assert any("HOME_FIELD" in e for e in errors)

    def test_raise_if_invalid(self):
        """Test invalid config raises with every error attached."""
        config = EngineConfig(log_level="LOUD", home_field_advantage=-1)
        with pytest.raises(ConfigurationError) as exc_info:
            config.raise_if_invalid()
        assert len(exc_info.value.errors) == 2


class TestGlobalConfig:
    """Tests for the module-level config accessor."""

    def test_set_and_get(self):
        config = EngineConfig(seed=7, log_level="INFO")
        set_config(config)
        assert get_config() is config

    def test_reset_rereads_environment(self, monkeypatch):
        """Test set_config(None) makes the next read come from the environment."""
        monkeypatch.setenv("SNAPCORE_SEED", "31")
        set_config(None)
        assert get_config().seed == 31
        assert get_config() is get_config()

    def test_configure_logging_uses_config_level(self):
        set_config(EngineConfig(log_level="INFO"))
        configure_logging()
        # basicConfig is a no-op once handlers exist; the call itself must not fail
        assert logging.getLogger("snapcore").getEffectiveLevel() <= logging.WARNING


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_configuration_error_message(self):
        error = ConfigurationError(["first", "second"])
        assert str(error) == "first; second"
        assert isinstance(error, SnapcoreError)

    def test_roster_validation_error_message(self):
        error = RosterValidationError("Bears", ["no kicker", "no punter"])
        assert str(error) == "Bears: no kicker, no punter"
        assert error.team_name == "Bears"
        assert error.problems == ["no kicker", "no punter"]
