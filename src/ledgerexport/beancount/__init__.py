"""
Beancount Export Package

Renders Actual Budget data as a Beancount ledger.

Key Components:
- mapper: Actual names → Beancount account paths, with up-front validation
- resolver: Id lookups for accounts, categories, payees and transfer legs
- registry: One 'open' directive per account, dated at first use
- renderer: Classification and rendering of split, transfer and expense records
- balances: Closing balance assertions from live balances
- output: Ordered accumulation of text fragments
- exporter: Run functions tying it all together
"""

from .balances import generate_balances
from .directives import LedgerStyle
from .exporter import ExportResult, export_ledger, run_export
from .mapper import MappingError, MappingKind, MappingTable, NameMapper
from .output import OutputAccumulator
from .registry import AccountRegistry
from .renderer import (
    ExportContext,
    ExportStats,
    TransactionKind,
    TransactionRenderer,
    classify,
)
from .resolver import EntityResolver

__all__ = [
    "AccountRegistry",
    "EntityResolver",
    "ExportContext",
    "ExportResult",
    "ExportStats",
    "LedgerStyle",
    "MappingError",
    "MappingKind",
    "MappingTable",
    "NameMapper",
    "OutputAccumulator",
    "TransactionKind",
    "TransactionRenderer",
    "classify",
    "export_ledger",
    "generate_balances",
    "run_export",
]
