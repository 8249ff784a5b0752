"""
Ledger Exporter - Actual Budget to Beancount

Exports the transactions of an Actual Budget file into a plain-text
double-entry ledger.

Key Features:
- Split, transfer and expense/income transactions rendered as balanced records
- One 'open' directive per account, dated at first use
- Closing balance assertions from the live account balances
- Up-front mapping validation listing every unmapped name at once

Domain Packages:
- core: Currency handling, value types, configuration
- actual: Actual Budget models and data sources
- beancount: Mapping, classification and rendering
- cli: Command-line interface

Example Usage:
    from ledgerexport.actual import CacheDataSource
    from ledgerexport.beancount import MappingTable, NameMapper, run_export

    mapper = NameMapper(MappingTable.load("mappings.json"))
    run_export(CacheDataSource("data/actual"), mapper, "ledger.beancount")
"""

__version__ = "0.1.0"

from .core.config import ConfigurationError, Environment, get_config
from .core.money import Money

__all__ = [
    "ConfigurationError",
    "Environment",
    "Money",
    "get_config",
]
