"""
Actual Budget Integration Package

Read-only access to an Actual Budget file.

This package provides:
- Domain models for accounts, categories, payees and transactions
- A live data source talking to an Actual Budget REST bridge
- A local JSON cache for offline and repeatable exports
"""

from .models import (
    ActualAccount,
    ActualCategory,
    ActualData,
    ActualPayee,
    ActualTransaction,
    order_chronologically,
)
from .sources import (
    CacheDataSource,
    DataSource,
    DataSourceError,
    HttpDataSource,
    fetch_actual_data,
    save_cache,
)

__all__ = [
    # Domain models
    "ActualAccount",
    "ActualCategory",
    "ActualData",
    "ActualPayee",
    "ActualTransaction",
    "order_chronologically",
    # Data sources
    "CacheDataSource",
    "DataSource",
    "DataSourceError",
    "HttpDataSource",
    "fetch_actual_data",
    "save_cache",
]
