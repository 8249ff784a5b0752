#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Day-precision date for transactions and balance assertions. Ordering is
chronological, so FinancialDate works directly as a sort key.

Actual stores dates as YYYYMMDD integers internally while its REST bridge
returns ISO strings; both forms are accepted.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, order=True)
class FinancialDate:
    """Immutable calendar date rendered as YYYY-MM-DD."""

    date: date

    @classmethod
    def from_string(cls, date_str: str) -> "FinancialDate":
        """
        Parse a YYYY-MM-DD string.

        Raises:
            ValueError: If the string is not an ISO calendar date
        """
        return cls(date=datetime.strptime(date_str.strip(), "%Y-%m-%d").date())

    @classmethod
    def from_actual(cls, value: str | int) -> "FinancialDate":
        """
        Parse a date as Actual hands it out: "2024-01-05", "20240105" or 20240105.

        Raises:
            ValueError: If the value is neither form
        """
        if isinstance(value, int) or (isinstance(value, str) and value.isdigit()):
            return cls(date=datetime.strptime(str(value), "%Y%m%d").date())
        return cls.from_string(value)

    @classmethod
    def today(cls) -> "FinancialDate":
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()
