#!/usr/bin/env python3
"""
Actual Budget Data Sources

Read access to the four flat collections (transactions, accounts, categories,
payees) plus per-account balances.

Two implementations:
- HttpDataSource: live fetch through an Actual Budget REST bridge
- CacheDataSource: JSON files previously written by save_cache()

The exporter only depends on the DataSource protocol, so either can feed it.
"""

import logging
from pathlib import Path
from typing import Any, Protocol

import httpx

from ..core.config import ActualConfig
from ..core.json_utils import read_json, unwrap_data_envelope, write_json
from .models import (
    ActualAccount,
    ActualCategory,
    ActualData,
    ActualPayee,
    ActualTransaction,
    order_chronologically,
)

logger = logging.getLogger(__name__)

CACHE_FILES = {
    "accounts": "accounts.json",
    "categories": "categories.json",
    "payees": "payees.json",
    "transactions": "transactions.json",
    "balances": "balances.json",
}


class DataSourceError(Exception):
    """Raised when data cannot be fetched from the budgeting service or cache."""

    pass


class DataSource(Protocol):
    """
    Protocol for read access to budgeting-service data.

    open()/close() bracket a run; every getter may only be called in between.
    """

    def open(self) -> None: ...

    def close(self) -> None: ...

    def get_accounts(self) -> list[ActualAccount]: ...

    def get_categories(self) -> list[ActualCategory]: ...

    def get_payees(self) -> list[ActualPayee]: ...

    def get_transactions(self) -> list[ActualTransaction]:
        """Return top-level transactions, newest first."""
        ...

    def get_account_balance(self, account_id: str) -> int | None:
        """Return the account's current balance in minor units, or None if unknown."""
        ...


class HttpDataSource:
    """
    Data source backed by an Actual Budget REST bridge.

    Endpoints live under /v1/budgets/{sync_id}/ and wrap every payload in a
    {"data": ...} envelope. Authentication uses the x-api-key header; an
    end-to-end encrypted budget additionally needs budget-encryption-password.
    """

    def __init__(self, config: ActualConfig, client: httpx.Client | None = None):
        """
        Initialize the data source.

        Args:
            config: Connection settings (server URL, API key, sync id)
            client: Pre-built httpx client, mainly for tests. When omitted,
                    open() creates one from the config.
        """
        self.config = config
        self._client = client
        self._owns_client = client is None
        self._accounts: list[ActualAccount] | None = None

    @property
    def budget_path(self) -> str:
        return f"/v1/budgets/{self.config.sync_id}"

    def _headers(self) -> dict[str, str]:
        headers = {"accept": "application/json"}
        if self.config.api_key:
            headers["x-api-key"] = self.config.api_key
        if self.config.encryption_password:
            headers["budget-encryption-password"] = self.config.encryption_password
        return headers

    def open(self) -> None:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.server_url,
                headers=self._headers(),
                timeout=float(self.config.timeout),
            )
        logger.info(f"Connected to Actual budget {self.config.sync_id} at {self.config.server_url}")

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        if self._client is None:
            raise DataSourceError("Data source is not open")

        url = f"{self.budget_path}{path}"
        try:
            response = self._client.get(url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            raise DataSourceError(f"Request to {url} failed: {e}") from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("error", response.text) if isinstance(body, dict) else response.text
            raise DataSourceError(f"GET {url} returned {response.status_code}: {detail}")

        try:
            return unwrap_data_envelope(response.json())
        except ValueError as e:
            raise DataSourceError(f"GET {url} returned invalid JSON: {e}") from e

    def get_accounts(self) -> list[ActualAccount]:
        if self._accounts is None:
            self._accounts = [ActualAccount.from_dict(acc) for acc in self._get("/accounts")]
        return self._accounts

    def get_categories(self) -> list[ActualCategory]:
        return [ActualCategory.from_dict(cat) for cat in self._get("/categories")]

    def get_payees(self) -> list[ActualPayee]:
        return [ActualPayee.from_dict(payee) for payee in self._get("/payees")]

    def get_transactions(self) -> list[ActualTransaction]:
        # The bridge only lists transactions per account
        transactions: list[ActualTransaction] = []
        for account in self.get_accounts():
            raw = self._get(
                f"/accounts/{account.id}/transactions",
                params={"since_date": self.config.since_date},
            )
            transactions.extend(ActualTransaction.from_dict(tx) for tx in raw)
            logger.debug(f"Fetched {len(raw)} transactions for account {account.name}")

        # Newest first, like the service's own listing
        transactions.sort(key=lambda tx: tx.date, reverse=True)
        return transactions

    def get_account_balance(self, account_id: str) -> int | None:
        balance = self._get(f"/accounts/{account_id}/balance")
        return None if balance is None else int(balance)


class CacheDataSource:
    """Data source reading the JSON files written by save_cache()."""

    def __init__(self, cache_dir: str | Path):
        self.cache_dir = Path(cache_dir)
        self._balances: dict[str, int] | None = None

    def _load(self, name: str) -> Any:
        path = self.cache_dir / CACHE_FILES[name]
        if not path.exists():
            raise DataSourceError(f"Actual cache file not found: {path}")
        try:
            return unwrap_data_envelope(read_json(path))
        except ValueError as e:
            raise DataSourceError(f"Actual cache file is not valid JSON: {path}: {e}") from e

    def open(self) -> None:
        if not self.cache_dir.is_dir():
            raise DataSourceError(f"Actual cache directory not found: {self.cache_dir}")
        logger.info(f"Reading Actual data from cache {self.cache_dir}")

    def close(self) -> None:
        self._balances = None

    def get_accounts(self) -> list[ActualAccount]:
        return [ActualAccount.from_dict(acc) for acc in self._load("accounts")]

    def get_categories(self) -> list[ActualCategory]:
        return [ActualCategory.from_dict(cat) for cat in self._load("categories")]

    def get_payees(self) -> list[ActualPayee]:
        return [ActualPayee.from_dict(payee) for payee in self._load("payees")]

    def get_transactions(self) -> list[ActualTransaction]:
        return [ActualTransaction.from_dict(tx) for tx in self._load("transactions")]

    def get_account_balance(self, account_id: str) -> int | None:
        if self._balances is None:
            self._balances = {key: int(value) for key, value in self._load("balances").items()}
        return self._balances.get(account_id)


def fetch_actual_data(source: DataSource) -> ActualData:
    """
    Fetch every collection the exporter needs, one request after another.

    The source must already be open. Any failure aborts the whole fetch.
    Accounts without a known balance are left out of the balances.

    Returns:
        ActualData with transactions in chronological (oldest first) order
    """
    transactions = source.get_transactions()
    accounts = source.get_accounts()
    categories = source.get_categories()
    payees = source.get_payees()
    balances: dict[str, int] = {}
    for account in accounts:
        balance = source.get_account_balance(account.id)
        if balance is None:
            logger.debug(f"No current balance for account {account.name}")
            continue
        balances[account.id] = balance

    logger.info(
        f"Fetched {len(transactions)} transactions, {len(accounts)} accounts, "
        f"{len(categories)} categories, {len(payees)} payees"
    )

    return ActualData(
        transactions=order_chronologically(transactions),
        accounts=accounts,
        categories=categories,
        payees=payees,
        balances=balances,
    )


def save_cache(data: ActualData, cache_dir: str | Path) -> Path:
    """
    Write fetched data to a cache directory readable by CacheDataSource.

    Transactions are stored newest first, the order the service returns them.

    Returns:
        The cache directory
    """
    cache_dir = Path(cache_dir)

    write_json(cache_dir / CACHE_FILES["accounts"], [acc.to_dict() for acc in data.accounts])
    write_json(cache_dir / CACHE_FILES["categories"], [cat.to_dict() for cat in data.categories])
    write_json(cache_dir / CACHE_FILES["payees"], [payee.to_dict() for payee in data.payees])
    write_json(
        cache_dir / CACHE_FILES["transactions"],
        [tx.to_dict() for tx in reversed(data.transactions)],
    )
    write_json(cache_dir / CACHE_FILES["balances"], data.balances)

    logger.info(f"Saved Actual data cache to {cache_dir}")
    return cache_dir
