# src/bikecheckout/application/order_totals.py
"""
Order Total Calculator - Authoritative Base Total

Composes the catalog price and the shipping fee into the base total the
merchant must net. Recomputed on every request; nothing is cached.

Files that USE this module:
- bikecheckout.application.checkout_service (CheckoutService)
- tests.test_order_totals (unit tests)

Files that this module USES:
- bikecheckout.application.catalog (Catalog)
- bikecheckout.application.shipping (ShippingRateResolver)
- bikecheckout.domain.models (OrderTotal, Product)
"""
from __future__ import annotations

from typing import Tuple

from bikecheckout.application.catalog import Catalog
from bikecheckout.application.shipping import ShippingRateResolver
from bikecheckout.domain.models import OrderTotal, Product


class OrderTotalCalculator:
    def __init__(self, catalog: Catalog, shipping: ShippingRateResolver):
        self.catalog = catalog
        self.shipping = shipping

    def compute(self, product_id: str, region_code: str) -> Tuple[Product, OrderTotal]:
        """Look the product up and price it; returns both."""
        product = self.catalog.lookup(product_id)
        shipping_fee = self.shipping.resolve(region_code)
        return product, OrderTotal.of(product.price_cents, shipping_fee)

    def compute_base_total(self, product_id: str, region_code: str) -> OrderTotal:
        """
        Base total (product + shipping) in centavos.

        Raises:
            ProductNotFoundError: If the product is not in the catalog
            SchemaValidationError: If the region code is malformed
        """
        return self.compute(product_id, region_code)[1]
