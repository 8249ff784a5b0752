#!/usr/bin/env python3
"""Tests for the Actual Budget data sources."""

import json

import httpx
import pytest

from ledgerexport.actual.sources import (
    CacheDataSource,
    DataSourceError,
    HttpDataSource,
    fetch_actual_data,
    save_cache,
)
from ledgerexport.core.config import ActualConfig
from tests.fixtures.actual_data import tx_dict

ACCOUNTS = [{"id": "a1", "name": "Checking"}, {"id": "a2", "name": "Savings"}]
CATEGORIES = [{"id": "c1", "name": "Food", "group_id": "g1"}]
PAYEES = [{"id": "p1", "name": "Store"}]
TRANSACTIONS = {
    "a1": [
        tx_dict("t3", account="a1", date="2024-01-03", transfer_id="t2", amount=-500),
        tx_dict("t1", account="a1", date="2024-01-01", category="c1", payee="p1"),
    ],
    "a2": [tx_dict("t2", account="a2", date="2024-01-03", transfer_id="t3", amount=500)],
}
BALANCES = {"a1": -2000, "a2": 500}


def make_handler(requests: list[httpx.Request]):
    """Mock Actual REST bridge."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        prefix = "/v1/budgets/sync-1"

        if not path.startswith(prefix):
            return httpx.Response(404, json={"error": "budget not found"})
        path = path[len(prefix):]

        if path == "/accounts":
            return httpx.Response(200, json={"data": ACCOUNTS})
        if path == "/categories":
            return httpx.Response(200, json={"data": CATEGORIES})
        if path == "/payees":
            return httpx.Response(200, json={"data": PAYEES})
        if path.endswith("/transactions"):
            account_id = path.split("/")[2]
            return httpx.Response(200, json={"data": TRANSACTIONS[account_id]})
        if path.endswith("/balance"):
            account_id = path.split("/")[2]
            return httpx.Response(200, json={"data": BALANCES[account_id]})
        return httpx.Response(404, json={"error": "not found"})

    return handler


@pytest.fixture
def actual_config() -> ActualConfig:
    return ActualConfig(server_url="http://actual.test", api_key="key-1", sync_id="sync-1")


@pytest.fixture
def requests_seen() -> list:
    return []


@pytest.fixture
def http_source(actual_config, requests_seen):
    client = httpx.Client(
        base_url=actual_config.server_url, transport=httpx.MockTransport(make_handler(requests_seen))
    )
    source = HttpDataSource(actual_config, client=client)
    source.open()
    yield source
    source.close()
    client.close()


class TestHttpDataSource:
    """Test the live REST bridge data source."""

    @pytest.mark.actual
    def test_fetches_collections(self, http_source):
        assert [acc.name for acc in http_source.get_accounts()] == ["Checking", "Savings"]
        assert [cat.name for cat in http_source.get_categories()] == ["Food"]
        assert [payee.name for payee in http_source.get_payees()] == ["Store"]

    @pytest.mark.actual
    def test_transactions_merged_newest_first(self, http_source):
        transactions = http_source.get_transactions()

        assert {tx.id for tx in transactions} == {"t1", "t2", "t3"}
        assert transactions[-1].id == "t1"

    @pytest.mark.actual
    def test_transactions_requested_with_since_date(self, http_source, requests_seen):
        http_source.get_transactions()

        tx_requests = [r for r in requests_seen if r.url.path.endswith("/transactions")]
        assert len(tx_requests) == 2
        assert all(r.url.params["since_date"] == "1970-01-01" for r in tx_requests)

    @pytest.mark.actual
    def test_sends_api_key(self, http_source, requests_seen):
        http_source.get_payees()
        assert requests_seen[-1].headers["x-api-key"] == "key-1"
        assert "budget-encryption-password" not in requests_seen[-1].headers

    @pytest.mark.actual
    def test_sends_encryption_password_when_configured(self, actual_config, requests_seen):
        actual_config.encryption_password = "e2e-secret"
        client = httpx.Client(
            base_url=actual_config.server_url, transport=httpx.MockTransport(make_handler(requests_seen))
        )
        source = HttpDataSource(actual_config, client=client)
        source.open()
        source.get_payees()

        assert requests_seen[-1].headers["budget-encryption-password"] == "e2e-secret"

    @pytest.mark.actual
    def test_balance(self, http_source):
        assert http_source.get_account_balance("a1") == -2000

    @pytest.mark.actual
    def test_error_status_raises(self, actual_config, requests_seen):
        actual_config.sync_id = "unknown"
        client = httpx.Client(
            base_url=actual_config.server_url, transport=httpx.MockTransport(make_handler(requests_seen))
        )
        source = HttpDataSource(actual_config, client=client)
        source.open()

        with pytest.raises(DataSourceError, match="404"):
            source.get_accounts()

    @pytest.mark.actual
    @pytest.mark.parametrize("body", [["bad", "request"], "server exploded", 42])
    def test_error_status_with_non_object_body(self, actual_config, body):
        def reject(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json=body)

        client = httpx.Client(base_url=actual_config.server_url, transport=httpx.MockTransport(reject))
        source = HttpDataSource(actual_config, client=client)
        source.open()

        with pytest.raises(DataSourceError, match="500"):
            source.get_accounts()

    @pytest.mark.actual
    def test_null_balance_is_unknown(self, actual_config):
        def no_balance(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": None})

        client = httpx.Client(base_url=actual_config.server_url, transport=httpx.MockTransport(no_balance))
        source = HttpDataSource(actual_config, client=client)
        source.open()

        assert source.get_account_balance("a1") is None

    @pytest.mark.actual
    def test_transport_error_raises(self, actual_config):
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(base_url=actual_config.server_url, transport=httpx.MockTransport(fail))
        source = HttpDataSource(actual_config, client=client)
        source.open()

        with pytest.raises(DataSourceError, match="connection refused"):
            source.get_accounts()

    @pytest.mark.actual
    def test_not_open_raises(self, actual_config):
        with pytest.raises(DataSourceError):
            HttpDataSource(actual_config).get_accounts()


class TestFetchActualData:
    """Test the sequential fetch of everything the exporter needs."""

    @pytest.mark.actual
    def test_fetch_orders_oldest_first_and_collects_balances(self, http_source):
        data = fetch_actual_data(http_source)

        assert data.transactions[0].id == "t1"
        assert [tx.date.to_iso_string() for tx in data.transactions] == sorted(
            tx.date.to_iso_string() for tx in data.transactions
        )
        assert data.balances == BALANCES


class TestCacheDataSource:
    """Test the JSON cache data source."""

    @pytest.mark.actual
    def test_save_and_reload(self, http_source, temp_dir):
        data = fetch_actual_data(http_source)
        save_cache(data, temp_dir / "cache")

        source = CacheDataSource(temp_dir / "cache")
        source.open()
        reloaded = fetch_actual_data(source)
        source.close()

        assert [tx.id for tx in reloaded.transactions] == [tx.id for tx in data.transactions]
        assert reloaded.accounts == data.accounts
        assert reloaded.balances == data.balances

    @pytest.mark.actual
    def test_cache_stores_newest_first(self, http_source, temp_dir):
        data = fetch_actual_data(http_source)
        save_cache(data, temp_dir)

        stored = json.loads((temp_dir / "transactions.json").read_text())
        assert stored[0]["id"] == data.transactions[-1].id

    @pytest.mark.actual
    def test_accepts_data_envelope(self, temp_dir):
        (temp_dir / "accounts.json").write_text(json.dumps({"data": ACCOUNTS}))
        source = CacheDataSource(temp_dir)
        source.open()

        assert len(source.get_accounts()) == 2

    @pytest.mark.actual
    def test_missing_directory(self, temp_dir):
        with pytest.raises(DataSourceError):
            CacheDataSource(temp_dir / "nope").open()

    @pytest.mark.actual
    def test_missing_file(self, temp_dir):
        source = CacheDataSource(temp_dir)
        source.open()
        with pytest.raises(DataSourceError, match="payees.json"):
            source.get_payees()

    @pytest.mark.actual
    def test_corrupt_file(self, temp_dir):
        (temp_dir / "categories.json").write_text("{not json")
        source = CacheDataSource(temp_dir)
        source.open()
        with pytest.raises(DataSourceError, match="not valid JSON"):
            source.get_categories()

    @pytest.mark.actual
    def test_missing_balance(self, temp_dir):
        (temp_dir / "balances.json").write_text(json.dumps({"a1": 100}))
        source = CacheDataSource(temp_dir)
        source.open()

        assert source.get_account_balance("a1") == 100
        assert source.get_account_balance("a2") is None
