# src/bikecheckout/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains the value objects of the checkout core:
- Catalog products
- Order totals and installment options
- Charge instructions handed to the payment gateway
- Security events and their request provenance

All monetary fields are integers in minor currency units (centavos).

Files that USE this module:
- bikecheckout.application.* (all services build and return domain models)
- bikecheckout.adapters.* (adapters serialize domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime, timezone  # Date/time utilities for timestamps
from decimal import Decimal  # Exact arithmetic for money conversions
from enum import Enum  # Enumerations for payment methods and event kinds
from typing import Any, Dict, Optional, Tuple  # Type hints


class PaymentMethod(str, Enum):
    """Payment methods accepted on the checkout wire format."""
    PIX = "PIX"
    CREDIT_CARD = "CREDIT_CARD"
    BOLETO = "BOLETO"


class SecurityEventKind(str, Enum):
    """Kinds of suspicious client behaviour recorded for audit."""
    PRICE_MISMATCH = "PRICE_MISMATCH"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    INVALID_INSTALLMENTS = "INVALID_INSTALLMENTS"


def cents_to_major(cents: int) -> Decimal:
    """Convert centavos to a 2-place Decimal in currency units."""
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


@dataclass(frozen=True)
class Product:
    """
    Catalog entry.

    Attributes:
        product_id: Catalog key (e.g. "ambtus-flash")
        name: Display name
        price_cents: Canonical price in centavos
        max_installments: Highest installment count allowed for this product
        description: Short marketing description
    """
    product_id: str
    name: str
    price_cents: int
    max_installments: int
    description: str = ""


@dataclass(frozen=True)
class OrderTotal:
    """Authoritative total for one product shipped to one region."""
    product_price: int
    shipping_fee: int
    base_total: int

    @classmethod
    def of(cls, product_price: int, shipping_fee: int) -> "OrderTotal":
        return cls(
            product_price=product_price,
            shipping_fee=shipping_fee,
            base_total=product_price + shipping_fee,
        )


@dataclass(frozen=True)
class InstallmentOption:
    """
    One row of an installment plan.

    Attributes:
        installment_count: Number of installments
        gross_total: Amount charged to the payer, fees included
        per_installment_value: round(gross_total / installment_count)
        fee_percent: Gateway intermediation fee for this count (e.g. 3.49)
        fee_amount: gross_total minus the net target
        total_rate: Intermediation plus anticipation rate as a fraction
    """
    installment_count: int
    gross_total: int
    per_installment_value: int
    fee_percent: Decimal
    fee_amount: int
    total_rate: Decimal


@dataclass(frozen=True)
class DeliveryEstimate:
    """Business-day delivery window for a region tier."""
    min_days: int
    max_days: int

    def __str__(self) -> str:
        return f"{self.min_days}-{self.max_days}"


@dataclass(frozen=True)
class QuotedInstallment:
    """Installment option paired with its display label."""
    option: InstallmentOption
    label: str


@dataclass(frozen=True)
class InstallmentQuote:
    """Installment simulation for a product/region pair."""
    product_id: str
    order_total: OrderTotal
    delivery: DeliveryEstimate
    installments: Tuple[QuotedInstallment, ...]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "productPrice": self.order_total.product_price,
            "shipping": self.order_total.shipping_fee,
            "baseTotal": self.order_total.base_total,
            "estimatedDeliveryDays": str(self.delivery),
            "installments": [
                {
                    "installment": q.option.installment_count,
                    "value": q.option.per_installment_value,
                    "total": q.option.gross_total,
                    "fee": str(q.option.fee_percent),
                    "feeAmount": q.option.fee_amount,
                    "label": q.label,
                }
                for q in self.installments
            ],
        }


@dataclass(frozen=True)
class RequestContext:
    """Provenance of a checkout request, used for security events."""
    ip: str = "unknown"
    user_agent: str = "unknown"
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_headers(cls, headers: Dict[str, str]) -> "RequestContext":
        """
        Build a context from HTTP headers (case-insensitive keys).

        The first hop of X-Forwarded-For wins over X-Real-IP.
        """
        lowered = {k.lower(): v for k, v in headers.items()}
        forwarded = lowered.get("x-forwarded-for", "")
        ip = forwarded.split(",")[0].strip() or lowered.get("x-real-ip") or "unknown"
        return cls(ip=ip, user_agent=lowered.get("user-agent") or "unknown")


@dataclass(frozen=True)
class SecurityEvent:
    """Append-only audit record of suspicious client input."""
    kind: SecurityEventKind
    details: Dict[str, Any]
    ip: str
    user_agent: str
    timestamp: datetime

    def to_json(self) -> dict:
        return {
            "kind": self.kind.value,
            "details": self.details,
            "ip": self.ip,
            "user_agent": self.user_agent,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ChargeInstruction:
    """
    Final, server-computed charge handed to the payment gateway.

    Attributes:
        product_id: Catalog key of the purchased product
        payment_method: PIX or CREDIT_CARD
        chargeable_amount: Amount to charge in centavos
        description: Human readable charge description
        external_reference: Idempotency key, unique per checkout attempt
        order_total: Breakdown the amount was derived from
        installment_count: Installments (credit card only)
        per_installment_value: Value of each installment (credit card only)
    """
    product_id: str
    payment_method: PaymentMethod
    chargeable_amount: int
    description: str
    external_reference: str
    order_total: OrderTotal
    installment_count: Optional[int] = None
    per_installment_value: Optional[int] = None

    @property
    def amount(self) -> Decimal:
        """Chargeable amount in currency units, as the gateway expects it."""
        return cents_to_major(self.chargeable_amount)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "productId": self.product_id,
            "paymentMethod": self.payment_method.value,
            "chargeableAmount": self.chargeable_amount,
            "description": self.description,
            "externalReference": self.external_reference,
        }
        if self.installment_count is not None:
            payload["installmentCount"] = self.installment_count
        return payload


@dataclass(frozen=True)
class ChargeReceipt:
    """Result returned by the payment gateway collaborator."""
    payment_id: str
    status: str
    pix_payload: Optional[str] = None


@dataclass(frozen=True)
class CheckoutResult:
    """Instruction that was submitted and the gateway's receipt for it."""
    instruction: ChargeInstruction
    receipt: ChargeReceipt
