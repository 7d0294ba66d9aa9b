# src/bikecheckout/application/pricing.py
"""
Installment Pricing Engine - Reverse Fee Calculation

Computes what a customer must be charged over N installments so that the
merchant nets a target amount after the gateway deducts:
- the intermediation fee (percent, tiered by installment count)
- a fixed per-transaction fee
- the anticipation cost of receiving every installment upfront
  (linear approximation: anticipation_rate * N)

Solving gross - fixed - gross * total_rate = target for gross gives:

    gross = (target + fixed) / (1 - total_rate)

All arithmetic is done with Decimal in currency units and rounded back to
centavos with ROUND_HALF_UP, so results are reproducible across platforms.

Files that USE this module:
- bikecheckout.application.checkout_service (charge amounts and quotes)
- bikecheckout.app (builds the engine from settings)
- tests.test_pricing (unit tests)

Files that this module USES:
- bikecheckout.application.fees (FeeSchedule)
- bikecheckout.domain.models (InstallmentOption)
- bikecheckout.domain.errors (FeeOverflowError, InvalidInstallmentCountError)
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from bikecheckout.application.fees import FeeSchedule
from bikecheckout.domain.errors import FeeOverflowError, InvalidInstallmentCountError
from bikecheckout.domain.models import InstallmentOption

logger = logging.getLogger(__name__)

FIXED_FEE_CENTS = 49  # R$ 0,49 per transaction
ANTICIPATION_RATE = Decimal("0.016")  # 1.6% per installment
MIN_INSTALLMENT_VALUE_CENTS = 500  # R$ 5,00

_CENT = Decimal("1")
_HUNDRED = Decimal(100)


def round_cents(value: Decimal) -> int:
    """Round a Decimal amount of centavos half-up to an int."""
    return int(value.quantize(_CENT, rounding=ROUND_HALF_UP))


class InstallmentPricingEngine:
    """Reverse-pricing of installment plans; a pure function of its inputs."""

    def __init__(
        self,
        fee_schedule: Optional[FeeSchedule] = None,
        fixed_fee_cents: int = FIXED_FEE_CENTS,
        anticipation_rate: Decimal = ANTICIPATION_RATE,
        min_installment_value: int = MIN_INSTALLMENT_VALUE_CENTS,
    ):
        """
        Args:
            fee_schedule: Intermediation fee tiers (defaults to the gateway table)
            fixed_fee_cents: Flat fee per transaction, in centavos
            anticipation_rate: Anticipation cost per installment, as a fraction
            min_installment_value: Floor for per-installment values in ladders
        """
        self.fee_schedule = fee_schedule or FeeSchedule()
        self.fixed_fee_cents = fixed_fee_cents
        self.anticipation_rate = Decimal(anticipation_rate)
        self.min_installment_value = min_installment_value

    def total_rate(self, installment_count: int) -> Decimal:
        """
        Intermediation plus anticipation rate, as a fraction.

        Raises:
            InvalidInstallmentCountError: If installment_count < 1 or not in the fee table
        """
        if installment_count < 1:
            raise InvalidInstallmentCountError(installment_count, self.fee_schedule.max_installments)
        intermediation = self.fee_schedule.fee_rate(installment_count)
        return intermediation + self.anticipation_rate * installment_count

    def reverse_total(self, target_net: int, installment_count: int) -> int:
        """
        Gross amount to charge so the merchant nets `target_net`.

        Args:
            target_net: Net amount the merchant must receive, in centavos
            installment_count: Number of installments (>= 1)

        Returns:
            Gross total in centavos

        Raises:
            InvalidInstallmentCountError: If installment_count < 1
            FeeOverflowError: If the combined rate is 100% or more
        """
        rate = self.total_rate(installment_count)
        if rate >= 1:
            logger.error(
                "Fee rate overflow: rate=%s for %d installments", rate, installment_count
            )
            raise FeeOverflowError(f"Fees exceed 100% of the charge ({rate}) for {installment_count}x")

        target = Decimal(target_net) / _HUNDRED
        fixed = Decimal(self.fixed_fee_cents) / _HUNDRED
        gross = (target + fixed) / (1 - rate)
        return round_cents(gross * _HUNDRED)

    def net_amount(self, gross_total: int, installment_count: int) -> Decimal:
        """
        Forward computation: what the merchant receives for a gross charge.

        Returns:
            Net amount in centavos (not rounded)
        """
        rate = self.total_rate(installment_count)
        gross = Decimal(gross_total)
        return gross - gross * rate - self.fixed_fee_cents

    def installment_option(self, target_net: int, installment_count: int) -> InstallmentOption:
        """Build the installment option for one count (floor not applied)."""
        gross = self.reverse_total(target_net, installment_count)
        per_installment = round_cents(Decimal(gross) / installment_count)
        return InstallmentOption(
            installment_count=installment_count,
            gross_total=gross,
            per_installment_value=per_installment,
            fee_percent=self.fee_schedule.fee_percent(installment_count),
            fee_amount=gross - target_net,
            total_rate=self.total_rate(installment_count),
        )

    def installment_ladder(self, target_net: int, max_installments: int) -> List[InstallmentOption]:
        """
        All installment options from 1 to `max_installments`, ascending.

        Options whose per-installment value falls below the floor are left out.

        Args:
            target_net: Net amount the merchant must receive, in centavos
            max_installments: Highest count to consider (capped by the fee table)

        Returns:
            List of InstallmentOption ordered by installment_count
        """
        ceiling = min(max_installments, self.fee_schedule.max_installments)
        options = []
        for count in range(1, ceiling + 1):
            option = self.installment_option(target_net, count)
            if option.per_installment_value < self.min_installment_value:
                logger.debug(
                    "Skipping %dx: installment %d below floor %d",
                    count, option.per_installment_value, self.min_installment_value,
                )
                continue
            options.append(option)
        return options
