#!/usr/bin/env python3
"""
Currency Conversion and Formatting Utilities

All amounts coming out of the budgeting service are signed integers in minor
currency units (100 = 1.00). Every conversion here uses integer arithmetic;
floating point never touches an amount.

Key Principles:
- Amounts stay integers until the moment they are rendered
- Rendering always produces exactly two fraction digits
- Sign is preserved (negative = outflow)
"""

import re

MINOR_UNITS_PER_MAJOR = 100

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z][A-Z0-9'._-]{0,22}[A-Z0-9]$")


def minor_units_to_str(amount: int) -> str:
    """
    Convert minor units to a decimal string with two fraction digits.

    Args:
        amount: Amount in minor units (may be negative)

    Returns:
        Decimal string

    Example:
        minor_units_to_str(-1500) -> "-15.00"
        minor_units_to_str(5) -> "0.05"
    """
    is_negative = amount < 0
    abs_amount = abs(int(amount))

    major = abs_amount // MINOR_UNITS_PER_MAJOR
    remainder = abs_amount % MINOR_UNITS_PER_MAJOR

    if is_negative:
        return f"-{major}.{remainder:02d}"
    return f"{major}.{remainder:02d}"


def is_valid_currency_code(code: str) -> bool:
    """Check that a commodity code is acceptable in the ledger output."""
    return bool(CURRENCY_CODE_PATTERN.match(code))


def validate_sum_equals_total(amounts: list[int], total: int) -> bool:
    """Check that a list of minor-unit amounts sums exactly to a total."""
    return sum(amounts) == total
