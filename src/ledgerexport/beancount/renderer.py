#!/usr/bin/env python3
"""
Transaction Classifier & Renderer

Turns Actual transactions into balanced Beancount records.

Each top-level transaction is classified into exactly one kind:
- SPLIT: parent with subtransactions; one multi-posting record
- SPLIT_CHILD: a subtransaction listed at top level; rendered via its parent
- TRANSFER: one leg of a transfer; one record covering both legs
- EXPENSE: categorized expense or income; account vs. category
- UNCLASSIFIED: nothing to book against; skipped

A record is either emitted whole or not at all. Account openings for a
record are emitted only once every lookup for that record has succeeded.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from ..actual.models import ActualTransaction
from ..core.currency import validate_sum_equals_total
from .directives import LedgerStyle, format_posting, format_transaction, quote
from .output import OutputAccumulator
from .registry import AccountRegistry
from .resolver import EntityResolver

logger = logging.getLogger(__name__)


class TransactionKind(Enum):
    """How a top-level transaction is booked."""

    SPLIT = "split"
    TRANSFER = "transfer"
    EXPENSE = "expense"
    SPLIT_CHILD = "split_child"
    UNCLASSIFIED = "unclassified"


def classify(transaction: ActualTransaction) -> TransactionKind:
    """
    Pick the single booking path for a transaction.

    Precedence is split, split child, transfer, expense. A child never
    books on its own, even when its parent could not be rendered.

    Actual attaches a category to transfers that leave the budget, so a
    transaction with both a transfer_id and a category is booked as a
    transfer.
    """
    if transaction.is_split:
        return TransactionKind.SPLIT
    if transaction.is_child:
        return TransactionKind.SPLIT_CHILD
    if transaction.transfer_id:
        return TransactionKind.TRANSFER
    if transaction.category:
        return TransactionKind.EXPENSE
    return TransactionKind.UNCLASSIFIED


@dataclass
class ExportStats:
    """Per-kind counts of rendered and skipped transactions."""

    rendered: Counter = field(default_factory=Counter)
    skipped: Counter = field(default_factory=Counter)
    already_processed: int = 0
    balances: int = 0

    @property
    def total_rendered(self) -> int:
        return sum(self.rendered.values())

    @property
    def total_skipped(self) -> int:
        return sum(self.skipped.values())


@dataclass
class ExportContext:
    """
    Mutable state of a single export run.

    Owned by the top-level run function and discarded afterwards.
    """

    style: LedgerStyle
    output: OutputAccumulator
    registry: AccountRegistry
    processed_ids: set[str] = field(default_factory=set)
    stats: ExportStats = field(default_factory=ExportStats)

    @classmethod
    def create(cls, style: LedgerStyle | None = None) -> "ExportContext":
        style = style or LedgerStyle()
        output = OutputAccumulator()
        return cls(style=style, output=output, registry=AccountRegistry(output, style))

    def mark_processed(self, *transaction_ids: str) -> None:
        self.processed_ids.update(transaction_ids)

    def is_processed(self, transaction_id: str) -> bool:
        return transaction_id in self.processed_ids


@dataclass
class _Record:
    """A fully resolved record waiting to be emitted."""

    opens: list[str]
    text: str
    ids: list[str]


class TransactionRenderer:
    """Renders classified transactions into the export context."""

    def __init__(self, resolver: EntityResolver, context: ExportContext):
        self.resolver = resolver
        self.context = context

    def process_all(self, transactions: list[ActualTransaction]) -> None:
        """Process transactions in the given (chronological) order."""
        for transaction in transactions:
            self.process(transaction)

    def process(self, transaction: ActualTransaction) -> bool:
        """
        Classify and render one top-level transaction.

        Returns:
            True if a record was emitted
        """
        if self.context.is_processed(transaction.id):
            logger.debug(f"Transaction {transaction.id} has already been processed. Skipping.")
            self.context.stats.already_processed += 1
            return False

        kind = classify(transaction)

        if kind is TransactionKind.SPLIT:
            record = self._build_split(transaction)
        elif kind is TransactionKind.TRANSFER:
            record = self._build_transfer(transaction)
        elif kind is TransactionKind.EXPENSE:
            record = self._build_expense(transaction)
        elif kind is TransactionKind.SPLIT_CHILD:
            logger.debug(
                f"Transaction {transaction.id} is part of split {transaction.parent_id}. Skipping."
            )
            self.context.stats.skipped[kind.value] += 1
            return False
        else:
            logger.warning(
                f"Transaction {transaction.id} has neither category nor transfer_id. Skipping."
            )
            self.context.stats.skipped[kind.value] += 1
            return False

        if record is None:
            self.context.stats.skipped[kind.value] += 1
            return False

        self._emit(transaction, record)
        self.context.stats.rendered[kind.value] += 1
        return True

    def _emit(self, transaction: ActualTransaction, record: _Record) -> None:
        for account in record.opens:
            self.context.registry.open(account, transaction.date)
        self.context.output.append(record.text)
        self.context.mark_processed(*record.ids)

    def _build_split(self, transaction: ActualTransaction) -> _Record | None:
        """
        One record for a split: the parent posting at its own amount, then
        one posting per subtransaction at the negated amount.

        Any unresolvable subtransaction drops the whole split.
        """
        style = self.context.style

        main_account = self.resolver.mapped_account(transaction)
        if main_account is None:
            return None

        destinations: list[str] = []
        for sub in transaction.subtransactions:
            if sub.category:
                destination = self.resolver.mapped_category(sub)
            elif sub.transfer_id:
                related = self.resolver.related_transaction(sub)
                destination = self.resolver.mapped_account(related) if related is not None else None
            else:
                logger.warning(f"SubTx {sub.id} is missing both category and transfer_id. Skipping.")
                destination = None

            if destination is None:
                logger.warning(f"Split transaction {transaction.id} has an unresolvable subtransaction. Skipping.")
                return None
            destinations.append(destination)

        sub_amounts = [sub.amount.to_minor_units() for sub in transaction.subtransactions]
        if not validate_sum_equals_total(sub_amounts, transaction.amount.to_minor_units()):
            logger.warning(
                f"Split transaction {transaction.id}: subtransactions do not sum to {transaction.amount}"
            )

        payee_name = self.resolver.payee_name(transaction)

        postings = [format_posting(main_account, transaction.amount, style, transaction.notes)]
        postings.extend(
            format_posting(destination, -sub.amount, style, sub.notes)
            for sub, destination in zip(transaction.subtransactions, destinations)
        )

        ids = [transaction.id] + [sub.id for sub in transaction.subtransactions]
        text = format_transaction(ids, f"{transaction.date} txn {quote(payee_name)}", postings)

        return _Record(opens=[main_account, *destinations], text=text, ids=ids)

    def _build_expense(self, transaction: ActualTransaction) -> _Record | None:
        """Account posting at the original amount, category posting negated."""
        style = self.context.style

        category_account = self.resolver.mapped_category(transaction)
        if category_account is None:
            return None

        account = self.resolver.mapped_account(transaction)
        if account is None:
            return None

        payee_name = self.resolver.payee_name(transaction)
        header = f"{transaction.date} txn {quote(payee_name)} {quote(transaction.notes)}"
        postings = [
            format_posting(account, transaction.amount, style),
            format_posting(category_account, -transaction.amount, style),
        ]

        return _Record(
            opens=[category_account, account],
            text=format_transaction([transaction.id], header, postings),
            ids=[transaction.id],
        )

    def _build_transfer(self, transaction: ActualTransaction) -> _Record | None:
        """
        Both legs in one record, each at its own amount.

        Transfer legs already carry opposite signs, so nothing is negated.
        """
        style = self.context.style

        related = self.resolver.related_transaction(transaction)
        if related is None:
            return None

        if self.context.is_processed(related.id):
            logger.debug(
                f"Transfer partner {related.id} of {transaction.id} has already been processed. Skipping."
            )
            self.context.mark_processed(transaction.id)
            return None

        account = self.resolver.mapped_account(transaction)
        if account is None:
            return None

        transfer_account = self.resolver.mapped_account(related)
        if transfer_account is None:
            return None

        note = transaction.notes or related.notes or "Transfer"
        ids = [transaction.id, related.id]
        postings = [
            format_posting(account, transaction.amount, style),
            format_posting(transfer_account, related.amount, style),
        ]

        return _Record(
            opens=[account, transfer_account],
            text=format_transaction(ids, f"{transaction.date} txn {quote(note)}", postings),
            ids=ids,
        )
