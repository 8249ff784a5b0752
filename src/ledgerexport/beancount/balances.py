#!/usr/bin/env python3
"""
Balance Synthesizer

Closes the export with one balance assertion per mapped account, using the
live balance reported by the budgeting service and the run date.
"""

import logging

from ..actual.models import ActualAccount
from ..core.dates import FinancialDate
from ..core.money import Money
from .directives import LedgerStyle, format_balance
from .mapper import NameMapper
from .output import OutputAccumulator

logger = logging.getLogger(__name__)


def generate_balances(
    accounts: list[ActualAccount],
    balances: dict[str, int],
    mapper: NameMapper,
    output: OutputAccumulator,
    style: LedgerStyle,
    today: FinancialDate | None = None,
) -> int:
    """
    Append a balance assertion for every mapped account.

    Args:
        accounts: Accounts in the order they should be asserted
        balances: Current balance per account id, in minor units
        mapper: Name mapper for account paths
        output: Accumulator to append to
        style: Ledger layout settings
        today: Assertion date (default: the run's wall-clock date)

    Returns:
        Number of assertions emitted
    """
    today = today or FinancialDate.today()
    emitted = 0

    for account in accounts:
        mapped = mapper.resolve_account(account.name)
        if mapped is None:
            logger.warning(f"Account {account.name} has no mapped account name. Skipping balance generation.")
            continue

        if account.id not in balances:
            logger.warning(f"Account {account.name} has no current balance. Skipping balance generation.")
            continue

        amount = Money.from_minor_units(balances[account.id])
        output.append(format_balance(account.id, mapped, amount, today, style))
        emitted += 1

    return emitted
