"""
Engine configuration.

Controls seeding, logging and roster validation for play resolution.
All settings can be overridden via environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from snapcore.exceptions import ConfigurationError


def _env_seed() -> Optional[int]:
    raw = os.getenv("SNAPCORE_SEED")
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


@dataclass
class EngineConfig:
    """Configuration for the play-resolution engine."""

    # Seed for resolvers built without an explicit rng (None = entropy)
    seed: Optional[int] = field(default_factory=_env_seed)

    log_level: str = field(default_factory=lambda: os.getenv("SNAPCORE_LOG_LEVEL", "WARNING"))

    # Check rosters before every play and raise on missing starters
    validate_rosters: bool = field(
        default_factory=lambda: os.getenv("SNAPCORE_VALIDATE_ROSTERS", "false").lower() == "true"
    )

    # Points of home-field advantage (converted to rating at 2 per point)
    home_field_advantage: float = field(
        default_factory=lambda: float(os.getenv("SNAPCORE_HOME_FIELD_ADVANTAGE", "2.5"))
    )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL
        ):
            errors.append(f"SNAPCORE_LOG_LEVEL '{self.log_level}' is not a logging level")
        if not 0 <= self.home_field_advantage <= 10:
            errors.append("SNAPCORE_HOME_FIELD_ADVANTAGE must be between 0 and 10 points")
        return errors

    def raise_if_invalid(self) -> None:
        errors = self.validate()
        if errors:
            raise ConfigurationError(errors)


# Singleton config instance
_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the global engine configuration."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def set_config(config: Optional[EngineConfig]) -> None:
    """
    Replace the global configuration.

    Passing None makes the next get_config() re-read the environment.
    Useful for testing.
    """
    global _config
    _config = config


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a basic stderr handler for scripts and demos.

    The library itself never installs handlers.
    """
    logging.basicConfig(
        level=(level or get_config().log_level).upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
