#!/usr/bin/env python3
"""
Name Mapper

Translates Actual account and category names into Beancount account paths
using a user-supplied mapping file:

    {
      "accounts":   {"Checking": "Assets:Bank:Checking"},
      "categories": {"Food": "Expenses:Food"}
    }

The same document may be written as YAML. The table is loaded once and never
modified during a run.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from ..actual.models import ActualData
from ..core.config import ConfigurationError
from ..core.json_utils import read_json

logger = logging.getLogger(__name__)


class MappingKind(Enum):
    """The two sections of a mapping file."""

    ACCOUNT = "accounts"
    CATEGORY = "categories"


class MappingError(ConfigurationError):
    """
    Raised when the mapping file is unusable or does not cover the data.

    Carries every missing name so the operator can fix the file in one pass.
    """

    def __init__(
        self,
        message: str,
        missing_accounts: list[str] | None = None,
        missing_categories: list[str] | None = None,
    ):
        self.missing_accounts = missing_accounts or []
        self.missing_categories = missing_categories or []
        super().__init__(message)

    @classmethod
    def for_missing(cls, missing_accounts: list[str], missing_categories: list[str]) -> "MappingError":
        lines = ["Some accounts or categories are missing mapped names. Update the mapping file and try again."]
        lines.extend(f'  [Account] "{name}"' for name in missing_accounts)
        lines.extend(f'  [Category] "{name}"' for name in missing_categories)
        return cls("\n".join(lines), missing_accounts, missing_categories)


@dataclass(frozen=True)
class MappingTable:
    """Immutable name → ledger path lookups for accounts and categories."""

    accounts: dict[str, str] = field(default_factory=dict)
    categories: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "MappingTable":
        """
        Build a table from a parsed mapping document.

        Raises:
            MappingError: If a section is missing or holds non-string entries
        """
        if not isinstance(data, dict):
            raise MappingError("Mapping document must be an object with 'accounts' and 'categories'")

        sections: dict[str, dict[str, str]] = {}
        for kind in MappingKind:
            section = data.get(kind.value)
            if section is None:
                raise MappingError(f"Mapping document has no '{kind.value}' section")
            if not isinstance(section, dict):
                raise MappingError(f"Mapping section '{kind.value}' must be a table of names")

            for key, value in section.items():
                if not isinstance(key, str) or not (value is None or isinstance(value, str)):
                    raise MappingError(
                        f"Mapping section '{kind.value}' has a non-string entry: {key!r} -> {value!r}"
                    )
            # Blank targets count as unmapped
            sections[kind.value] = {key: value for key, value in section.items() if value}

        return cls(accounts=sections["accounts"], categories=sections["categories"])

    @classmethod
    def load(cls, path: str | Path) -> "MappingTable":
        """
        Load a mapping file; YAML for .yaml/.yml, JSON otherwise.

        Raises:
            MappingError: If the file is missing, unparsable or malformed
        """
        path = Path(path)
        if not path.exists():
            raise MappingError(f"Mapping file not found: {path}")

        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                with open(path, encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            else:
                data = read_json(path)
        except (ValueError, yaml.YAMLError) as e:
            raise MappingError(f"Could not parse mapping file {path}: {e}") from e

        table = cls.from_dict(data)
        logger.debug(
            f"Loaded {len(table.accounts)} account and {len(table.categories)} category mappings from {path}"
        )
        return table

    def section(self, kind: MappingKind) -> dict[str, str]:
        return self.accounts if kind is MappingKind.ACCOUNT else self.categories


class NameMapper:
    """Resolves raw account/category names to ledger account paths."""

    def __init__(self, table: MappingTable):
        self.table = table

    def resolve(self, kind: MappingKind, raw_name: str) -> str | None:
        """Return the mapped ledger path, or None when the name is unmapped."""
        return self.table.section(kind).get(raw_name)

    def resolve_account(self, raw_name: str) -> str | None:
        return self.resolve(MappingKind.ACCOUNT, raw_name)

    def resolve_category(self, raw_name: str) -> str | None:
        return self.resolve(MappingKind.CATEGORY, raw_name)

    def find_missing(self, data: ActualData) -> tuple[list[str], list[str]]:
        """
        Collect every account and category name without a mapping.

        Returns:
            (missing account names, missing category names), in data order
        """
        missing_accounts = [acc.name for acc in data.accounts if self.resolve_account(acc.name) is None]
        missing_categories = [
            cat.name for cat in data.categories if self.resolve_category(cat.name) is None
        ]
        return missing_accounts, missing_categories

    def validate(self, data: ActualData) -> None:
        """
        Check that every account and category name has a mapping.

        Raises:
            MappingError: Listing all missing names
        """
        missing_accounts, missing_categories = self.find_missing(data)

        for name in missing_accounts:
            logger.warning(f'[Account] "{name}" has no mapped account name')
        for name in missing_categories:
            logger.warning(f'[Category] "{name}" has no mapped category name')

        if missing_accounts or missing_categories:
            raise MappingError.for_missing(missing_accounts, missing_categories)
