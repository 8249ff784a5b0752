#!/usr/bin/env python3
"""
Configuration Management for the Ledger Exporter

Handles environment-based configuration with secure defaults and validation.
Credentials for the budgeting service, the mapping file location, and the
output settings are all read from environment variables (optionally via a
.env file).
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .currency import is_valid_currency_code

# Load environment variables from .env file
load_dotenv()


class ConfigurationError(Exception):
    """Raised when the run cannot start because of missing or invalid configuration."""

    pass


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ActualConfig:
    """Connection settings for the Actual Budget REST bridge."""

    server_url: str = "http://localhost:5007"
    api_key: str | None = None
    sync_id: str | None = None
    encryption_password: str | None = None
    timeout: int = 30
    since_date: str = "1970-01-01"


@dataclass
class ExportConfig:
    """Ledger output settings."""

    mappings_file: Path
    output_file: Path
    currency: str = "EUR"
    column_width: int = 80


# Environment variable name for each required run credential
REQUIRED_CREDENTIALS = {
    "ACTUAL_API_KEY": "api_key",
    "ACTUAL_SYNC_ID": "sync_id",
}


@dataclass
class Config:
    """
    Main configuration class for the exporter.

    Loads configuration from environment variables with defaults suitable for
    a local Actual Budget setup.
    """

    environment: Environment
    actual: ActualConfig
    export: ExportConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("LEDGEREXPORT_ENV", "development"))

        actual = ActualConfig(
            server_url=os.getenv("ACTUAL_SERVER_URL", "http://localhost:5007").rstrip("/"),
            api_key=os.getenv("ACTUAL_API_KEY") or None,
            sync_id=os.getenv("ACTUAL_SYNC_ID") or None,
            encryption_password=os.getenv("ACTUAL_ENCRYPTION_PASSWORD") or None,
            timeout=int(os.getenv("ACTUAL_TIMEOUT", "30")),
            since_date=os.getenv("ACTUAL_SINCE_DATE", "1970-01-01"),
        )

        export = ExportConfig(
            mappings_file=Path(os.getenv("LEDGEREXPORT_MAPPINGS", "./mappings.json")).expanduser(),
            output_file=Path(os.getenv("LEDGEREXPORT_OUTPUT", "./transactions.beancount")).expanduser(),
            currency=os.getenv("LEDGEREXPORT_CURRENCY", "EUR").upper(),
            column_width=int(os.getenv("LEDGEREXPORT_COLUMN_WIDTH", "80")),
        )

        return cls(
            environment=env,
            actual=actual,
            export=export,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.actual.timeout <= 0:
            errors.append("ACTUAL_TIMEOUT must be positive")
        if self.export.column_width <= 0:
            errors.append("LEDGEREXPORT_COLUMN_WIDTH must be positive")
        if not is_valid_currency_code(self.export.currency):
            errors.append(f"LEDGEREXPORT_CURRENCY is not a valid commodity code: {self.export.currency}")
        if not self.actual.server_url.startswith(("http://", "https://")):
            errors.append(f"ACTUAL_SERVER_URL must be an http(s) URL: {self.actual.server_url}")

        return errors

    def missing_credentials(self) -> list[str]:
        """Names of required run credentials that are not set."""
        return [
            env_name
            for env_name, attr in REQUIRED_CREDENTIALS.items()
            if not getattr(self.actual, attr)
        ]

    def require_credentials(self) -> None:
        """
        Ensure every credential needed to reach the budgeting service is set.

        Raises:
            ConfigurationError: Naming all missing environment variables
        """
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(
                f"Environment variable(s) required but not set: {', '.join(missing)}"
            )

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # httpx logs every request at INFO
        if self.environment != Environment.DEVELOPMENT:
            logging.getLogger("httpx").setLevel(logging.WARNING)
            logging.getLogger("httpcore").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Dotted names of settings that must never be printed."""
        return ["actual.api_key", "actual.encryption_password"]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Settings as plain data for display; secrets are redacted unless asked for."""
        sensitive = set() if include_sensitive else set(self.get_sensitive_fields())

        def section(name: str, values: Any) -> dict[str, Any]:
            result: dict[str, Any] = {}
            for key, value in vars(values).items():
                if f"{name}.{key}" in sensitive and value is not None:
                    result[key] = "***REDACTED***"
                else:
                    result[key] = str(value) if isinstance(value, Path) else value
            return result

        return {
            "environment": self.environment.value,
            "actual": section("actual", self.actual),
            "export": section("export", self.export),
            "debug": self.debug,
            "log_level": self.log_level,
        }


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()

