#!/usr/bin/env python3
"""
Actual Budget Domain Models

Type-safe models representing Actual Budget API data structures.
These models stay true to the API's JSON shape and use Money/FinancialDate
primitives for amounts and dates.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


@dataclass
class ActualAccount:
    """
    Actual Budget account.

    The display name is the key used in the mapping file.
    """

    id: str
    name: str
    offbudget: bool = False
    closed: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActualAccount":
        """Create ActualAccount from API dict."""
        return cls(
            id=data["id"],
            name=data["name"],
            offbudget=bool(data.get("offbudget", False)),
            closed=bool(data.get("closed", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "offbudget": self.offbudget, "closed": self.closed}


@dataclass
class ActualCategory:
    """Actual Budget category (expense or income)."""

    id: str
    name: str
    group_id: str | None = None
    is_income: bool = False
    hidden: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActualCategory":
        """Create ActualCategory from API dict."""
        return cls(
            id=data["id"],
            name=data["name"],
            group_id=data.get("group_id"),
            is_income=bool(data.get("is_income", False)),
            hidden=bool(data.get("hidden", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "group_id": self.group_id,
            "is_income": self.is_income,
            "hidden": self.hidden,
        }


@dataclass
class ActualPayee:
    """Actual Budget payee. Transfer payees carry the target account id."""

    id: str
    name: str
    transfer_acct: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActualPayee":
        """Create ActualPayee from API dict."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            transfer_acct=data.get("transfer_acct"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "transfer_acct": self.transfer_acct}


@dataclass
class ActualTransaction:
    """
    Actual Budget transaction.

    A top-level transaction is plain (has a category), one leg of a transfer
    (has a transfer_id), or a split parent (is_parent with subtransactions).
    Subtransactions use the same model with is_child set.
    """

    id: str
    account: str
    date: FinancialDate
    amount: Money
    category: str | None = None
    payee: str | None = None
    notes: str | None = None
    transfer_id: str | None = None
    subtransactions: list["ActualTransaction"] = field(default_factory=list)
    is_parent: bool = False
    is_child: bool = False
    parent_id: str | None = None
    cleared: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActualTransaction":
        """
        Create ActualTransaction from API dict.

        Args:
            data: Dictionary from the Actual API (transaction object)

        Returns:
            ActualTransaction instance, with subtransactions parsed recursively
        """
        subtransactions = [cls.from_dict(sub) for sub in data.get("subtransactions") or []]

        return cls(
            id=data["id"],
            account=data["account"],
            date=FinancialDate.from_actual(data["date"]),
            amount=Money.from_minor_units(data.get("amount") or 0),
            category=data.get("category") or None,
            payee=data.get("payee") or None,
            notes=data.get("notes") or None,
            transfer_id=data.get("transfer_id") or None,
            subtransactions=subtransactions,
            is_parent=bool(data.get("is_parent", False)),
            is_child=bool(data.get("is_child", False)),
            parent_id=data.get("parent_id") or None,
            cleared=bool(data.get("cleared", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the API's JSON shape."""
        return {
            "id": self.id,
            "account": self.account,
            "date": self.date.to_iso_string(),
            "amount": self.amount.to_minor_units(),
            "category": self.category,
            "payee": self.payee,
            "notes": self.notes,
            "transfer_id": self.transfer_id,
            "subtransactions": [sub.to_dict() for sub in self.subtransactions],
            "is_parent": self.is_parent,
            "is_child": self.is_child,
            "parent_id": self.parent_id,
            "cleared": self.cleared,
        }

    @property
    def is_split(self) -> bool:
        """Check if this is a split parent with at least one subtransaction."""
        return self.is_parent and len(self.subtransactions) > 0


@dataclass
class ActualData:
    """
    Everything fetched from the budgeting service for one run.

    Collections are read-only for the duration of the run. Transactions are
    expected in chronological order (see order_chronologically).
    """

    transactions: list[ActualTransaction]
    accounts: list[ActualAccount]
    categories: list[ActualCategory]
    payees: list[ActualPayee]
    # Current balance per account id, in minor units
    balances: dict[str, int] = field(default_factory=dict)


def order_chronologically(transactions: list[ActualTransaction]) -> list[ActualTransaction]:
    """
    Put transactions into processing order, oldest first.

    The service returns transactions newest first, so the list is reversed;
    a stable sort by date then fixes up lists concatenated from several
    accounts without disturbing same-day order.
    """
    return sorted(reversed(transactions), key=lambda tx: tx.date)
