#!/usr/bin/env python3
"""
Beancount Text Formatting

Builds the text of individual directives. Every fragment starts with a blank
line and ends with a newline, so fragments can simply be concatenated.
"""

from dataclasses import dataclass

from ..core.dates import FinancialDate
from ..core.money import Money

DEFAULT_COLUMN_WIDTH = 80
DEFAULT_CURRENCY = "EUR"

# Amounts are right-justified to this width after the single separator
# space, so decimal points line up; shorter amounts get extra leading spaces.
# Beancount ignores the run of whitespace.
AMOUNT_WIDTH = 12

TX_ID_MARKER = "actual-tx-id"
ACCOUNT_ID_MARKER = "actual-account-id"


@dataclass(frozen=True)
class LedgerStyle:
    """Cosmetic layout settings shared by every directive in a run."""

    currency: str = DEFAULT_CURRENCY
    column_width: int = DEFAULT_COLUMN_WIDTH


def quote(text: str | None) -> str:
    """Render a double-quoted string, escaping backslashes and quotes."""
    escaped = (text or "").replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def inline_note(note: str | None) -> str:
    """Trailing ' ; note' comment for a posting, or nothing."""
    if not note:
        return ""
    # A newline would end the comment early
    return " ; " + " ".join(note.splitlines())


def tx_id_comment(transaction_id: str) -> str:
    return f"; {TX_ID_MARKER}:{transaction_id}"


def format_posting(account: str, amount: Money, style: LedgerStyle, note: str | None = None) -> str:
    """One indented posting line, without the trailing newline."""
    return (
        f"  {account.ljust(style.column_width)} "
        f"{amount.to_decimal_str().rjust(AMOUNT_WIDTH)} {style.currency}{inline_note(note)}"
    )


def format_open(account: str, date: FinancialDate, style: LedgerStyle) -> str:
    return f"\n{date} open {account.ljust(style.column_width)} {style.currency}\n"


def format_transaction(comment_ids: list[str], header: str, postings: list[str]) -> str:
    """
    Assemble a transaction record.

    Args:
        comment_ids: Source transaction ids, one cross-reference comment each
        header: The '<date> txn ...' line
        postings: Formatted posting lines
    """
    lines = [tx_id_comment(tx_id) for tx_id in comment_ids]
    lines.append(header)
    lines.extend(postings)
    return "\n" + "\n".join(lines) + "\n"


def format_balance(
    account_id: str, account: str, amount: Money, date: FinancialDate, style: LedgerStyle
) -> str:
    return (
        f"\n; {ACCOUNT_ID_MARKER}:{account_id}\n"
        f"{date} balance {account.ljust(style.column_width)} "
        f"{amount.to_decimal_str().rjust(AMOUNT_WIDTH)} {style.currency}\n"
    )
