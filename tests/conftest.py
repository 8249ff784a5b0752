"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from ledgerexport.core import config as config_module
from ledgerexport.core.dates import FinancialDate
from tests.fixtures.actual_data import DEFAULT_MAPPINGS


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def run_date() -> FinancialDate:
    """Fixed date for balance assertions."""
    return FinancialDate.from_string("2024-06-30")


@pytest.fixture
def mappings_file(temp_dir):
    """Default mapping table written as JSON."""
    import json

    path = temp_dir / "mappings.json"
    path.write_text(json.dumps(DEFAULT_MAPPINGS), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables and reset the cached config."""
    monkeypatch.setenv("LEDGEREXPORT_ENV", "test")
    monkeypatch.setenv("ACTUAL_SERVER_URL", "http://actual.test")
    monkeypatch.setenv("ACTUAL_API_KEY", "test-api-key")
    monkeypatch.setenv("ACTUAL_SYNC_ID", "test-sync-id")
    monkeypatch.delenv("ACTUAL_ENCRYPTION_PASSWORD", raising=False)
    monkeypatch.delenv("LEDGEREXPORT_CURRENCY", raising=False)
    monkeypatch.delenv("LEDGEREXPORT_COLUMN_WIDTH", raising=False)
    monkeypatch.delenv("LEDGEREXPORT_MAPPINGS", raising=False)
    monkeypatch.delenv("LEDGEREXPORT_OUTPUT", raising=False)
    monkeypatch.delenv("ACTUAL_SINCE_DATE", raising=False)
    monkeypatch.delenv("ACTUAL_TIMEOUT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    monkeypatch.setattr(config_module, "_config", None)
    yield
    config_module._config = None


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "actual: Tests for Actual Budget models and data sources")
    config.addinivalue_line("markers", "beancount: Tests for ledger rendering")
    config.addinivalue_line("markers", "cli: Tests for the command-line interface")
