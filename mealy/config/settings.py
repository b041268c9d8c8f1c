"""Configuration for the mealy command line.

Defaults live here; a YAML file can override any of them and command line
flags override the file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from mealy.utils.result import ConfigError, Err, Ok, Result

LOG_LEVELS = ("debug", "info", "warn", "warning", "error")
LOG_FORMATS = ("json", "text")


@dataclass
class ParserConfig:
    """Document parsing settings."""

    # Fail on the first bad line instead of skipping it
    strict: bool = False


@dataclass
class EngineConfig:
    """Execution settings."""

    record_history: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "warn"
    format: str = "json"


@dataclass
class MealyConfig:
    """Complete configuration."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Where the configuration was loaded from, if anywhere
    source: Optional[Path] = None

    @classmethod
    def from_yaml(cls, path: Path) -> Result["MealyConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        if not isinstance(data, dict):
            return Err(ConfigError(
                field="yaml",
                message="Top level of the configuration must be a mapping",
            ))

        return cls.from_dict(data).map(lambda config: config.with_source(path))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["MealyConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Result with loaded config or error
        """
        for section in ("parser", "engine", "logging"):
            if not isinstance(data.get(section, {}), dict):
                return Err(ConfigError(
                    field=section,
                    message="Must be a mapping",
                ))

        parser_data = data.get("parser", {})
        parser = ParserConfig(
            strict=parser_data.get("strict", False),
        )

        engine_data = data.get("engine", {})
        engine = EngineConfig(
            record_history=engine_data.get("record_history", False),
        )

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=str(logging_data.get("level", "warn")),
            format=str(logging_data.get("format", "json")),
        )

        config = cls(parser=parser, engine=engine, logging=logging_config)
        validation = config.validate()
        if validation.is_err():
            return Err(validation.unwrap_err())
        return Ok(config)

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        if not isinstance(self.parser.strict, bool):
            return Err(ConfigError(
                field="parser.strict",
                message=f"Must be a boolean, got {self.parser.strict!r}",
            ))

        if not isinstance(self.engine.record_history, bool):
            return Err(ConfigError(
                field="engine.record_history",
                message=f"Must be a boolean, got {self.engine.record_history!r}",
            ))

        if self.logging.level.lower() not in LOG_LEVELS:
            return Err(ConfigError(
                field="logging.level",
                message=f"Must be one of {', '.join(LOG_LEVELS)}, got {self.logging.level}",
            ))

        if self.logging.format.lower() not in LOG_FORMATS:
            return Err(ConfigError(
                field="logging.format",
                message=f"Must be one of {', '.join(LOG_FORMATS)}, got {self.logging.format}",
            ))

        return Ok(None)

    def with_source(self, source: Path) -> "MealyConfig":
        """Return a copy of this config recording where it was loaded from."""
        return MealyConfig(
            parser=self.parser,
            engine=self.engine,
            logging=self.logging,
            source=source,
        )


def load_config(path: Optional[Path] = None) -> Result[MealyConfig, ConfigError]:
    """
    Load configuration.

    Args:
        path: YAML file to load; defaults are used when None

    Returns:
        Result with loaded config or error
    """
    if path is None:
        return Ok(MealyConfig())
    return MealyConfig.from_yaml(path)
