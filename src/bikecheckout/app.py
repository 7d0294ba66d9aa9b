# src/bikecheckout/app.py
"""
Composition Root - Checkout Core Wiring

Builds the checkout service from settings: catalog, shipping tiers, fee
schedule, pricing engine, security event log and the price-mismatch policy.
The HTTP layer that receives requests and the gateway client live outside
this package; they call `create_checkout_service()` once at startup and
reuse the returned service for every request.

Files that USE this module:
- The hosting web application (startup)
- tests.test_app (wiring tests)

Files that this module USES:
- bikecheckout.shared.logging_conf (setup_logging for logging configuration)
- bikecheckout.shared.language (default language)
- bikecheckout.config (settings for configuration management)
- bikecheckout.application.* (services)
- bikecheckout.adapters.persistence.security_store (optional JSONL store)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
from typing import Optional  # Type hints for optional values

from bikecheckout.adapters.persistence.security_store import JsonlSecurityEventStore  # Append-only event file
from bikecheckout.application.catalog import Catalog  # Server-side product catalog
from bikecheckout.application.checkout_service import CheckoutService  # Price-integrity guard
from bikecheckout.application.fees import FeeSchedule  # Gateway fee tiers
from bikecheckout.application.order_totals import OrderTotalCalculator  # Product + shipping totals
from bikecheckout.application.pricing import InstallmentPricingEngine  # Reverse fee calculation
from bikecheckout.application.security_log import SecurityEventLog  # Security audit trail
from bikecheckout.application.shipping import ShippingRateResolver  # Two-tier shipping
from bikecheckout.config.settings import Settings  # Pydantic settings model
from bikecheckout.shared.language import set_language  # Default message language
from bikecheckout.shared.logging_conf import setup_logging  # Configure logging with file rotation

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings, level=logging.INFO) -> None:
    """Set up logging from settings (stdout and/or rotating file)."""
    setup_logging(
        level=level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_to_stdout=settings.log_stdout,
    )


def build_pricing_engine(settings: Settings) -> InstallmentPricingEngine:
    return InstallmentPricingEngine(
        fee_schedule=FeeSchedule().capped(settings.max_installments),
        fixed_fee_cents=settings.fixed_fee_cents,
        anticipation_rate=settings.anticipation_rate,
        min_installment_value=settings.min_installment_value_cents,
    )


def create_checkout_service(
    settings: Optional[Settings] = None,
    catalog: Optional[Catalog] = None,
) -> CheckoutService:
    """
    Wire a CheckoutService.

    Args:
        settings: Settings to use (default: the global settings instance)
        catalog: Catalog to use (default: the shipped bicycle line)

    Returns:
        Ready-to-use CheckoutService
    """
    if settings is None:
        # Import here so tests can build services without reading the environment
        from bikecheckout.config import settings as global_settings
        settings = global_settings

    set_language(settings.default_language)

    catalog = catalog or Catalog.default()
    shipping = ShippingRateResolver(
        near_regions=settings.near_regions,
        near_fee=settings.shipping_near_fee_cents,
        far_fee=settings.shipping_far_fee_cents,
    )
    store = JsonlSecurityEventStore(settings.security_log_file) if settings.security_log_file else None

    service = CheckoutService(
        calculator=OrderTotalCalculator(catalog, shipping),
        pricing=build_pricing_engine(settings),
        security_log=SecurityEventLog(store=store),
        mismatch_tolerance_cents=settings.price_mismatch_tolerance_cents,
        reject_on_mismatch=settings.reject_on_price_mismatch,
    )
    logger.info(
        "Checkout service ready: %d products, mismatch policy=%s, tolerance=%d cents, security store=%s",
        len(catalog),
        settings.price_mismatch_policy,
        settings.price_mismatch_tolerance_cents,
        settings.security_log_file or "none",
    )
    return service
