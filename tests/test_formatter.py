# tests/test_formatter.py
"""
Formatter Tests - Unit Tests for Currency and Label Formatting

This module contains unit tests for the BRL currency formatter, installment
labels in both supported languages and charge summaries written to logs.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- bikecheckout.adapters.formatting.formatter (all formatter functions for testing)
- bikecheckout.domain.models (InstallmentOption, ChargeInstruction for test data)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from decimal import Decimal  # Fee percentages for test data

from bikecheckout.adapters.formatting.formatter import (
    charge_summary,  # One-line log summary
    format_brl,  # Format centavos as reais
    installment_label,  # Installment display label
)
from bikecheckout.domain.models import ChargeInstruction, InstallmentOption, OrderTotal, PaymentMethod


class TestFormatBrl:
    @pytest.mark.parametrize("cents,expected", [
        (749900, "R$ 7.499,00"),
        (801749, "R$ 8.017,49"),
        (1015426, "R$ 10.154,26"),
        (49, "R$ 0,49"),
        (0, "R$ 0,00"),
        (-1500, "-R$ 15,00"),
    ])
    def test_format(self, cents, expected):
        assert format_brl(cents) == expected


class TestInstallmentLabel:
    def setup_method(self):
        self.option = InstallmentOption(
            installment_count=3,
            gross_total=804036,
            per_installment_value=268012,
            fee_percent=Decimal("3.49"),
            fee_amount=39136,
            total_rate=Decimal("0.0829"),
        )

    def test_portuguese(self):
        assert installment_label(self.option, lang="pt") == "3x de R$ 2.680,12 (Total: R$ 8.040,36)"

    def test_english(self):
        assert installment_label(self.option, lang="en") == "3x of R$ 2.680,12 (Total: R$ 8.040,36)"


class TestChargeSummary:
    def test_pix(self):
        instruction = ChargeInstruction(
            product_id="g60",
            payment_method=PaymentMethod.PIX,
            chargeable_amount=714900,
            description="G60 + Frete",
            external_reference="g60-1-abc",
            order_total=OrderTotal.of(699900, 15000),
        )
        summary = charge_summary(instruction)
        assert summary == "g60-1-abc PIX R$ 7.149,00 (product R$ 6.999,00 + shipping R$ 150,00)"

    def test_card_mentions_installments(self):
        instruction = ChargeInstruction(
            product_id="g60",
            payment_method=PaymentMethod.CREDIT_CARD,
            chargeable_amount=900000,
            description="G60 + Frete + Taxas",
            external_reference="g60-1-abc",
            order_total=OrderTotal.of(699900, 15000),
            installment_count=10,
            per_installment_value=90000,
        )
        assert charge_summary(instruction).endswith("in 10x of R$ 900,00")
