"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from bikecheckout.domain.models import (
    ChargeInstruction,
    ChargeReceipt,
    CheckoutResult,
    DeliveryEstimate,
    InstallmentOption,
    InstallmentQuote,
    OrderTotal,
    PaymentMethod,
    Product,
    QuotedInstallment,
    RequestContext,
    SecurityEvent,
    SecurityEventKind,
    cents_to_major,
)
from bikecheckout.domain.errors import (
    CheckoutError,
    DomainError,
    FeeOverflowError,
    InvalidInstallmentCountError,
    PriceMismatchError,
    ProductNotFoundError,
    SchemaValidationError,
)

__all__ = [
    "Product",
    "OrderTotal",
    "InstallmentOption",
    "InstallmentQuote",
    "QuotedInstallment",
    "DeliveryEstimate",
    "PaymentMethod",
    "RequestContext",
    "SecurityEvent",
    "SecurityEventKind",
    "ChargeInstruction",
    "ChargeReceipt",
    "CheckoutResult",
    "cents_to_major",
    "DomainError",
    "CheckoutError",
    "SchemaValidationError",
    "ProductNotFoundError",
    "InvalidInstallmentCountError",
    "PriceMismatchError",
    "FeeOverflowError",
]
