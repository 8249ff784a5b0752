"""
Core Utilities Package

Shared primitives used by the data sources and the ledger renderer.

This package provides:
- Currency handling with integer arithmetic for precision
- Money and FinancialDate value types
- Configuration management for environment-specific settings
- JSON helpers for cache and mapping files
"""

from .config import (
    ActualConfig,
    Config,
    ConfigurationError,
    Environment,
    ExportConfig,
    get_config,
    reload_config,
)
from .currency import (
    is_valid_currency_code,
    minor_units_to_str,
    validate_sum_equals_total,
)
from .dates import FinancialDate
from .money import Money

__all__ = [
    "ActualConfig",
    # Configuration
    "Config",
    "ConfigurationError",
    "Environment",
    "ExportConfig",
    "FinancialDate",
    "Money",
    "get_config",
    # Currency utilities
    "is_valid_currency_code",
    "minor_units_to_str",
    "reload_config",
    "validate_sum_equals_total",
]
