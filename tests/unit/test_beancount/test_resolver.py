#!/usr/bin/env python3
"""Tests for entity resolution."""

import logging

import pytest

from ledgerexport.actual.models import ActualAccount
from ledgerexport.beancount.resolver import EntityResolver
from tests.fixtures.actual_data import make_data, make_mapper, make_tx


@pytest.fixture
def resolver():
    transactions = [
        make_tx("t1", category="c1", payee="p1"),
        make_tx("t2", account="a1", transfer_id="t3", amount=-500),
        make_tx("t3", account="a2", transfer_id="t2", amount=500),
    ]
    accounts = [
        ActualAccount(id="a1", name="Checking"),
        ActualAccount(id="a2", name="Savings"),
        ActualAccount(id="a7", name="Unmapped"),
    ]
    return EntityResolver(make_data(transactions, accounts=accounts), make_mapper())


class TestLookups:
    """Test id-based lookups."""

    @pytest.mark.beancount
    def test_entities_by_id(self, resolver):
        assert resolver.account("a2").name == "Savings"
        assert resolver.category("c3").name == "Salary"
        assert resolver.payee("p2").name == "Landlord"

    @pytest.mark.beancount
    def test_missing_entity_warns(self, resolver, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolver.account("nope") is None
            assert resolver.category("nope") is None

        assert "Account nope not found" in caplog.text
        assert "Category nope not found" in caplog.text

    @pytest.mark.beancount
    def test_related_transaction(self, resolver):
        assert resolver.related_transaction(make_tx("t2", transfer_id="t3")).id == "t3"

    @pytest.mark.beancount
    def test_missing_related_transaction_warns(self, resolver, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolver.related_transaction(make_tx("t9", transfer_id="gone")) is None

        assert "no related transaction was found" in caplog.text


class TestMappedPaths:
    """Test resolution through to ledger account paths."""

    @pytest.mark.beancount
    def test_mapped_account_and_category(self, resolver):
        tx = make_tx("t1", category="c1")
        assert resolver.mapped_account(tx) == "Assets:Bank:Checking"
        assert resolver.mapped_category(tx) == "Expenses:Food"

    @pytest.mark.beancount
    def test_unmapped_account(self, resolver, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolver.mapped_account(make_tx("t5", account="a7")) is None
        assert "Unmapped has no mapped account name" in caplog.text

    @pytest.mark.beancount
    def test_unknown_account(self, resolver):
        assert resolver.mapped_account(make_tx("t5", account="ghost")) is None

    @pytest.mark.beancount
    def test_unknown_category(self, resolver):
        assert resolver.mapped_category(make_tx("t5", category="ghost")) is None

    @pytest.mark.beancount
    def test_payee_name_falls_back_to_empty(self, resolver):
        assert resolver.payee_name(make_tx("t1", payee="p1")) == "Store"
        assert resolver.payee_name(make_tx("t1", payee="ghost")) == ""
        assert resolver.payee_name(make_tx("t1")) == ""
