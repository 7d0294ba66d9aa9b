"""
Application Layer - Use Cases and Services

This package contains the checkout services: catalog, shipping, fee
schedule, reverse pricing, order totals and the price-integrity guard.
No direct I/O dependencies - uses adapters through interfaces.
"""

from bikecheckout.application.catalog import Catalog, DEFAULT_PRODUCTS
from bikecheckout.application.shipping import ShippingRateResolver
from bikecheckout.application.fees import FeeSchedule
from bikecheckout.application.pricing import InstallmentPricingEngine
from bikecheckout.application.order_totals import OrderTotalCalculator
from bikecheckout.application.security_log import SecurityEventLog
from bikecheckout.application.schemas import CheckoutRequest, parse_checkout_request
from bikecheckout.application.checkout_service import CheckoutService, error_response

__all__ = [
    "Catalog",
    "DEFAULT_PRODUCTS",
    "ShippingRateResolver",
    "FeeSchedule",
    "InstallmentPricingEngine",
    "OrderTotalCalculator",
    "SecurityEventLog",
    "CheckoutRequest",
    "parse_checkout_request",
    "CheckoutService",
    "error_response",
]
