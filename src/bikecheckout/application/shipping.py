# src/bikecheckout/application/shipping.py
"""
Shipping Rate Resolver - Flat Shipping by Region Tier

Maps a two-letter region code (UF) to a flat shipping fee in centavos. Region
codes fall into two tiers: "near" (Sul/Sudeste by default) and "far" (every
other two-letter code). Empty or wrong-length codes are rejected rather than
priced at zero, so an order can never be charged without its shipping.

Files that USE this module:
- bikecheckout.application.order_totals (OrderTotalCalculator)
- bikecheckout.application.checkout_service (delivery estimates for quotes)
- tests.test_order_totals (unit tests)

Files that this module USES:
- bikecheckout.domain.errors (SchemaValidationError)
- bikecheckout.domain.models (DeliveryEstimate)
- bikecheckout.shared.validators (region code helpers)
"""
from __future__ import annotations

from typing import Iterable

from bikecheckout.domain.errors import SchemaValidationError
from bikecheckout.domain.models import DeliveryEstimate
from bikecheckout.shared.validators import normalize_region_code, validate_region_code

NEAR_REGIONS = ("SP", "RJ", "MG", "ES", "PR", "SC", "RS")
NEAR_FEE_CENTS = 15000  # R$ 150,00
FAR_FEE_CENTS = 30000  # R$ 300,00

NEAR_DELIVERY = DeliveryEstimate(10, 15)
FAR_DELIVERY = DeliveryEstimate(15, 20)


class ShippingRateResolver:
    """Two-tier flat shipping fee resolver."""

    def __init__(
        self,
        near_regions: Iterable[str] = NEAR_REGIONS,
        near_fee: int = NEAR_FEE_CENTS,
        far_fee: int = FAR_FEE_CENTS,
    ):
        self.near_regions = frozenset(normalize_region_code(r) for r in near_regions)
        self.near_fee = near_fee
        self.far_fee = far_fee

    def _normalize(self, region_code: str) -> str:
        if not validate_region_code(region_code):
            raise SchemaValidationError(
                f"Invalid region code: {region_code!r}",
                details={"uf": "UF deve ter 2 caracteres"},
            )
        return normalize_region_code(region_code)

    def is_near(self, region_code: str) -> bool:
        return self._normalize(region_code) in self.near_regions

    def resolve(self, region_code: str) -> int:
        """
        Shipping fee for a region.

        Args:
            region_code: Two-letter UF, any case

        Returns:
            Flat fee in centavos

        Raises:
            SchemaValidationError: If the code is empty or not two letters
        """
        return self.near_fee if self.is_near(region_code) else self.far_fee

    def estimated_delivery(self, region_code: str) -> DeliveryEstimate:
        return NEAR_DELIVERY if self.is_near(region_code) else FAR_DELIVERY
