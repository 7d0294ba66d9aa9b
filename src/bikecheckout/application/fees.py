# src/bikecheckout/application/fees.py
"""
Fee Schedule - Gateway Intermediation Fee by Installment Count

Step table of the gateway's card intermediation fee ("Cobranças online").

Files that USE this module:
- bikecheckout.application.pricing (InstallmentPricingEngine)
- tests.test_pricing (unit tests)

Files that this module USES:
- bikecheckout.domain.errors (InvalidInstallmentCountError)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Sequence, Tuple

from bikecheckout.domain.errors import InvalidInstallmentCountError

# (first installment, last installment, fee percent)
DEFAULT_TIERS: Tuple[Tuple[int, int, Decimal], ...] = (
    (1, 1, Decimal("2.99")),
    (2, 6, Decimal("3.49")),
    (7, 12, Decimal("3.99")),
    (13, 21, Decimal("4.29")),
)


class FeeSchedule:
    """Static, contiguous fee tiers starting at one installment."""

    def __init__(self, tiers: Sequence[Tuple[int, int, Decimal]] = DEFAULT_TIERS):
        tiers = tuple(sorted(tiers))
        expected = 1
        for first, last, percent in tiers:
            if first != expected or last < first:
                raise ValueError(f"Fee tiers must be contiguous from 1, got {first}-{last}")
            if percent < 0:
                raise ValueError("Fee percentages cannot be negative")
            expected = last + 1
        if not tiers:
            raise ValueError("Fee schedule needs at least one tier")
        self.tiers = tiers

    @property
    def max_installments(self) -> int:
        return self.tiers[-1][1]

    def fee_percent(self, installment_count: int) -> Decimal:
        """
        Intermediation fee percent for an installment count (e.g. 3.49).

        Raises:
            InvalidInstallmentCountError: If no tier covers the count
        """
        for first, last, percent in self.tiers:
            if first <= installment_count <= last:
                return percent
        raise InvalidInstallmentCountError(installment_count, self.max_installments)

    def fee_rate(self, installment_count: int) -> Decimal:
        """Fee as a fraction (3.49 -> 0.0349)."""
        return self.fee_percent(installment_count) / 100

    def capped(self, max_installments: int) -> "FeeSchedule":
        """Same tiers, cut off at `max_installments`."""
        if max_installments < 1:
            raise ValueError("max_installments must be at least 1")
        tiers = [
            (first, min(last, max_installments), percent)
            for first, last, percent in self.tiers
            if first <= max_installments
        ]
        return FeeSchedule(tiers)
