#!/usr/bin/env python3
"""
Money Primitive Type

Immutable amount wrapper over integer minor units. The ledger output uses a
single currency per run, so the currency code is not part of the value.
"""

from dataclasses import dataclass

from .currency import minor_units_to_str


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in minor units.

    Examples:
        >>> expense = Money.from_minor_units(-1500)
        >>> str(expense)
        '-15.00'
        >>> str(-expense)
        '15.00'
    """

    minor_units: int

    @classmethod
    def from_minor_units(cls, minor_units: int) -> "Money":
        """Create Money from an integer amount in minor units."""
        return cls(minor_units=int(minor_units))

    def to_minor_units(self) -> int:
        """Get value in minor units."""
        return self.minor_units

    def to_decimal_str(self) -> str:
        """Format with exactly two fraction digits."""
        return minor_units_to_str(self.minor_units)

    def __neg__(self) -> "Money":
        return Money(minor_units=-self.minor_units)

    def __str__(self) -> str:
        return self.to_decimal_str()

    def __repr__(self) -> str:
        return f"Money(minor_units={self.minor_units})"
