#!/usr/bin/env python3
"""Tests for the name mapper and mapping file loading."""

import json

import pytest

from ledgerexport.actual.models import ActualAccount, ActualCategory
from ledgerexport.beancount.mapper import MappingError, MappingKind, MappingTable, NameMapper
from ledgerexport.core.config import ConfigurationError
from tests.fixtures.actual_data import DEFAULT_MAPPINGS, make_data, make_mapper


class TestMappingTable:
    """Test building and loading mapping tables."""

    @pytest.mark.beancount
    def test_load_json(self, temp_dir):
        path = temp_dir / "mappings.json"
        path.write_text(json.dumps(DEFAULT_MAPPINGS))

        table = MappingTable.load(path)

        assert table.accounts["Checking"] == "Assets:Bank:Checking"
        assert table.categories["Food"] == "Expenses:Food"

    @pytest.mark.beancount
    def test_load_yaml(self, temp_dir):
        path = temp_dir / "mappings.yaml"
        path.write_text(
            "accounts:\n"
            "  Checking: Assets:Bank:Checking\n"
            "categories:\n"
            "  Food: Expenses:Food\n"
        )

        table = MappingTable.load(path)

        assert table.accounts == {"Checking": "Assets:Bank:Checking"}
        assert table.categories == {"Food": "Expenses:Food"}

    @pytest.mark.beancount
    def test_missing_file(self, temp_dir):
        with pytest.raises(MappingError, match="not found"):
            MappingTable.load(temp_dir / "missing.json")

    @pytest.mark.beancount
    def test_unparsable_file(self, temp_dir):
        path = temp_dir / "mappings.json"
        path.write_text("{broken")
        with pytest.raises(MappingError, match="Could not parse"):
            MappingTable.load(path)

    @pytest.mark.beancount
    def test_missing_section(self):
        with pytest.raises(MappingError, match="categories"):
            MappingTable.from_dict({"accounts": {}})

    @pytest.mark.beancount
    def test_non_string_entry(self):
        with pytest.raises(MappingError, match="non-string"):
            MappingTable.from_dict({"accounts": {"Checking": 42}, "categories": {}})

    @pytest.mark.beancount
    def test_not_an_object(self):
        with pytest.raises(MappingError):
            MappingTable.from_dict(["accounts"])

    @pytest.mark.beancount
    def test_blank_target_is_unmapped(self):
        table = MappingTable.from_dict({"accounts": {"Checking": ""}, "categories": {"Food": None}})
        mapper = NameMapper(table)

        assert mapper.resolve_account("Checking") is None
        assert mapper.resolve_category("Food") is None


class TestNameMapper:
    """Test name resolution and validation."""

    @pytest.mark.beancount
    def test_resolve_by_kind(self):
        mapper = make_mapper()

        assert mapper.resolve(MappingKind.ACCOUNT, "Savings") == "Assets:Bank:Savings"
        assert mapper.resolve(MappingKind.CATEGORY, "Rent") == "Expenses:Rent"
        assert mapper.resolve(MappingKind.ACCOUNT, "Rent") is None

    @pytest.mark.beancount
    def test_validate_passes_when_everything_mapped(self):
        make_mapper().validate(make_data([]))

    @pytest.mark.beancount
    def test_validate_collects_all_missing_names(self):
        data = make_data(
            [],
            accounts=[
                ActualAccount(id="a1", name="Checking"),
                ActualAccount(id="a9", name="Brokerage"),
                ActualAccount(id="a8", name="Cash"),
            ],
            categories=[ActualCategory(id="c1", name="Food"), ActualCategory(id="c9", name="Travel")],
        )

        with pytest.raises(MappingError) as exc_info:
            make_mapper().validate(data)

        error = exc_info.value
        assert error.missing_accounts == ["Brokerage", "Cash"]
        assert error.missing_categories == ["Travel"]
        message = str(error)
        assert '"Brokerage"' in message
        assert '"Cash"' in message
        assert '"Travel"' in message

    @pytest.mark.beancount
    def test_mapping_error_is_configuration_error(self):
        assert issubclass(MappingError, ConfigurationError)
