#!/usr/bin/env python3
"""
Account Registry

Emits an 'open' directive the first time a ledger account is used. Because
transactions are processed oldest first, the first use is also the earliest
date the account appears.
"""

import logging

from ..core.dates import FinancialDate
from .directives import LedgerStyle, format_open
from .output import OutputAccumulator

logger = logging.getLogger(__name__)


class AccountRegistry:
    """Tracks opened ledger accounts for one run."""

    def __init__(self, output: OutputAccumulator, style: LedgerStyle):
        self.output = output
        self.style = style
        self._opened: set[str] = set()

    def open(self, account: str, date: FinancialDate) -> bool:
        """
        Open an account unless it is already open.

        Returns:
            True if an open directive was emitted
        """
        if account in self._opened:
            return False

        self._opened.add(account)
        self.output.append(format_open(account, date, self.style))
        logger.debug(f"Opened {account} on {date}")
        return True

    @property
    def opened(self) -> frozenset[str]:
        return frozenset(self._opened)
