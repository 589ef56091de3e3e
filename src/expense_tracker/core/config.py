#!/usr/bin/env python3
"""
Configuration Management for the Expense Tracker

Handles environment-based configuration with sensible defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ExportConfig:
    """Export engine configuration."""

    output_dir: Path
    delay_ms: int = 600
    history_limit: int = 50
    share_origin: str = "http://localhost:3000"


@dataclass
class Config:
    """
    Main configuration class for the expense tracker.

    Loads configuration from environment variables with defaults
    appropriate to each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    export: ExportConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("EXPENSES_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_expense_tracker"
            data_dir = Path(os.getenv("EXPENSES_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("EXPENSES_DATA_DIR", "./data")).expanduser().resolve()

        output_dir = Path(os.getenv("EXPENSES_OUTPUT_DIR", str(data_dir / "exports"))).expanduser()

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        # Artificial export latency is pure pacing; tests skip it
        default_delay = "0" if env == Environment.TEST else "600"

        export = ExportConfig(
            output_dir=output_dir,
            delay_ms=int(os.getenv("EXPORT_DELAY_MS", default_delay)),
            history_limit=int(os.getenv("EXPORT_HISTORY_LIMIT", "50")),
            share_origin=os.getenv("SHARE_ORIGIN", "http://localhost:3000").rstrip("/"),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            export=export,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [("data_dir", self.data_dir), ("output_dir", self.output_dir)]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.export.delay_ms < 0:
            errors.append("EXPORT_DELAY_MS must be non-negative")
        if self.export.history_limit <= 0:
            errors.append("EXPORT_HISTORY_LIMIT must be positive")
        if not self.export.share_origin.startswith(("http://", "https://")):
            errors.append(f"SHARE_ORIGIN must be an http(s) URL: {self.export.share_origin}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if isinstance(field_value, ExportConfig):
                result[field_name] = {
                    name: str(value) if isinstance(value, Path) else value
                    for name, value in field_value.__dict__.items()
                }
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def get_output_dir() -> Path:
    """Get the export output directory path."""
    return get_config().output_dir
