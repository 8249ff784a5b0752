#!/usr/bin/env python3
"""
Entity Resolver

Id-based lookups over the fetched collections, plus the mapped-path helpers
the renderer needs. Every collection is indexed once up front.

A failed lookup returns None and logs why; the renderer treats None as
"skip this record".
"""

import logging

from ..actual.models import (
    ActualAccount,
    ActualCategory,
    ActualData,
    ActualPayee,
    ActualTransaction,
)
from .mapper import NameMapper

logger = logging.getLogger(__name__)


class EntityResolver:
    """Looks up accounts, categories, payees and transfer partners by id."""

    def __init__(self, data: ActualData, mapper: NameMapper):
        self.mapper = mapper
        self._accounts: dict[str, ActualAccount] = {acc.id: acc for acc in data.accounts}
        self._categories: dict[str, ActualCategory] = {cat.id: cat for cat in data.categories}
        self._payees: dict[str, ActualPayee] = {payee.id: payee for payee in data.payees}
        # Only top-level transactions; a transfer leg pointing into a split
        # child is not resolvable here
        self._transactions: dict[str, ActualTransaction] = {tx.id: tx for tx in data.transactions}

    def account(self, account_id: str) -> ActualAccount | None:
        account = self._accounts.get(account_id)
        if account is None:
            logger.warning(f"Account {account_id} not found.")
        return account

    def category(self, category_id: str) -> ActualCategory | None:
        category = self._categories.get(category_id)
        if category is None:
            logger.warning(f"Category {category_id} not found.")
        return category

    def payee(self, payee_id: str | None) -> ActualPayee | None:
        if payee_id is None:
            return None
        return self._payees.get(payee_id)

    def related_transaction(self, transaction: ActualTransaction) -> ActualTransaction | None:
        """Find the other leg of a transfer."""
        related = self._transactions.get(transaction.transfer_id) if transaction.transfer_id else None
        if related is None:
            logger.warning(
                f"Transaction {transaction.id} has transfer_id {transaction.transfer_id} "
                "but no related transaction was found."
            )
        return related

    def mapped_account(self, transaction: ActualTransaction) -> str | None:
        """Ledger path of the account that owns the transaction."""
        account = self._accounts.get(transaction.account)
        if account is None or not account.name:
            logger.warning(f"Transaction {transaction.id} has missing account name.")
            return None

        mapped = self.mapper.resolve_account(account.name)
        if mapped is None:
            logger.warning(f"Account {account.name} has no mapped account name")
        return mapped

    def mapped_category(self, transaction: ActualTransaction) -> str | None:
        """Ledger path of the transaction's category."""
        category = self._categories.get(transaction.category) if transaction.category else None
        if category is None or not category.name:
            logger.warning(f"Transaction {transaction.id} has missing category name.")
            return None

        mapped = self.mapper.resolve_category(category.name)
        if mapped is None:
            logger.warning(f"Category {category.name} has no mapped category name")
        return mapped

    def payee_name(self, transaction: ActualTransaction) -> str:
        """Payee display name, or an empty string when it cannot be resolved."""
        payee = self.payee(transaction.payee)
        if payee is None or not payee.name:
            logger.debug(f"Transaction {transaction.id} has missing payee name.")
            return ""
        return payee.name
