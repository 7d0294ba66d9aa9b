# tests/test_pricing.py
"""
Pricing Tests - Unit Tests for the Fee Schedule and Reverse Pricing Engine

This module contains unit tests for the gateway fee tiers and the installment
pricing engine: reverse totals, forward consistency, installment ladders and
the minimum installment floor.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- bikecheckout.application.fees (FeeSchedule)
- bikecheckout.application.pricing (InstallmentPricingEngine, round_cents)
- bikecheckout.domain.errors (FeeOverflowError, InvalidInstallmentCountError)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from decimal import Decimal  # Exact rates for assertions

from bikecheckout.application.fees import FeeSchedule  # Fee tiers under test
from bikecheckout.application.pricing import InstallmentPricingEngine, round_cents  # Engine under test
from bikecheckout.domain.errors import FeeOverflowError, InvalidInstallmentCountError  # Expected errors


@pytest.fixture
def engine():
    return InstallmentPricingEngine()


class TestFeeSchedule:
    @pytest.mark.parametrize("count,percent", [
        (1, "2.99"),
        (2, "3.49"),
        (6, "3.49"),
        (7, "3.99"),
        (12, "3.99"),
        (13, "4.29"),
        (21, "4.29"),
    ])
    def test_tier_boundaries(self, count, percent):
        assert FeeSchedule().fee_percent(count) == Decimal(percent)

    def test_fee_rate_is_fraction(self):
        assert FeeSchedule().fee_rate(2) == Decimal("0.0349")

    def test_max_installments(self):
        assert FeeSchedule().max_installments == 21

    def test_count_outside_table(self):
        with pytest.raises(InvalidInstallmentCountError):
            FeeSchedule().fee_percent(22)
        with pytest.raises(InvalidInstallmentCountError):
            FeeSchedule().fee_percent(0)

    def test_gap_in_tiers_rejected(self):
        with pytest.raises(ValueError):
            FeeSchedule([(1, 1, Decimal("2.99")), (3, 6, Decimal("3.49"))])

    def test_capped(self):
        schedule = FeeSchedule().capped(10)
        assert schedule.max_installments == 10
        assert schedule.fee_percent(10) == Decimal("3.99")
        with pytest.raises(InvalidInstallmentCountError):
            schedule.fee_percent(11)


class TestRoundCents:
    def test_half_up(self):
        assert round_cents(Decimal("100.5")) == 101
        assert round_cents(Decimal("100.49")) == 100


class TestReverseTotal:
    def test_single_installment_near_region(self, engine):
        # 7499.00 + 150.00 shipping; (7649.00 + 0.49) / (1 - 0.0299 - 0.016)
        assert engine.reverse_total(764900, 1) == 801749

    def test_twelve_installments_far_region(self, engine):
        assert engine.total_rate(12) == Decimal("0.2319")
        gross = engine.reverse_total(779900, 12)
        assert gross == 1015426

        option = engine.installment_option(779900, 12)
        assert option.per_installment_value == 84619
        assert abs(option.per_installment_value * 12 - option.gross_total) <= 12

    @pytest.mark.parametrize("target", [100, 5000, 123457, 764900, 779900, 1189000])
    @pytest.mark.parametrize("count", [1, 2, 6, 7, 12, 13, 21])
    def test_merchant_nets_target(self, engine, target, count):
        gross = engine.reverse_total(target, count)
        assert abs(engine.net_amount(gross, count) - target) <= 1

    def test_gross_exceeds_target(self, engine):
        for count in range(1, 22):
            assert engine.reverse_total(5000, count) > 5000

    def test_monotonic_in_installments(self, engine):
        totals = [engine.reverse_total(764900, n) for n in range(1, 22)]
        assert totals == sorted(totals)
        assert len(set(totals)) == len(totals)

    def test_zero_installments_rejected(self, engine):
        with pytest.raises(InvalidInstallmentCountError):
            engine.reverse_total(764900, 0)

    def test_count_above_table_rejected(self, engine):
        with pytest.raises(InvalidInstallmentCountError):
            engine.reverse_total(764900, 22)

    def test_fee_overflow(self):
        engine = InstallmentPricingEngine(anticipation_rate=Decimal("0.05"))
        # 0.0429 + 21 * 0.05 >= 1
        with pytest.raises(FeeOverflowError) as exc_info:
            engine.reverse_total(764900, 21)
        assert exc_info.value.status_code == 500

    def test_deterministic(self, engine):
        assert engine.reverse_total(123457, 7) == engine.reverse_total(123457, 7)


class TestInstallmentOption:
    def test_fields(self, engine):
        option = engine.installment_option(764900, 1)
        assert option.installment_count == 1
        assert option.gross_total == 801749
        assert option.per_installment_value == 801749
        assert option.fee_percent == Decimal("2.99")
        assert option.fee_amount == 801749 - 764900
        assert option.total_rate == Decimal("0.0459")


class TestInstallmentLadder:
    def test_full_ladder_for_expensive_order(self, engine):
        ladder = engine.installment_ladder(764900, 21)
        assert [o.installment_count for o in ladder] == list(range(1, 22))

    def test_floor_drops_small_installments(self, engine):
        ladder = engine.installment_ladder(5000, 21)
        assert [o.installment_count for o in ladder] == list(range(1, 14))
        assert all(o.per_installment_value >= 500 for o in ladder)
        # 14x would be R$ 4,92 each
        assert engine.installment_option(5000, 14).per_installment_value == 492

    def test_capped_by_product_max(self, engine):
        ladder = engine.installment_ladder(764900, 6)
        assert [o.installment_count for o in ladder] == [1, 2, 3, 4, 5, 6]

    def test_capped_by_fee_table(self, engine):
        ladder = engine.installment_ladder(764900, 30)
        assert ladder[-1].installment_count == 21

    def test_tiny_order_has_empty_ladder(self, engine):
        assert engine.installment_ladder(100, 21) == []
