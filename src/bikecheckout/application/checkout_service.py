# src/bikecheckout/application/checkout_service.py
"""
Checkout Service - Request Validation and Price-Integrity Guard

Turns an untrusted checkout request into a server-priced charge instruction.
Per request, in order:
1. Parse the body (shape and field formats)
2. Resolve the product in the catalog
3. Compute the base total (product + shipping)
4. PIX: charge the base total. Credit card: validate the installment count
   and charge the reverse-priced gross total. Other methods (BOLETO) are
   rejected as unsupported
5. Compare a client-echoed total against the server amount
6. Emit the charge instruction

Suspicious input (unknown product, bad installment count, price mismatch)
is recorded in the security event log before the request is rejected.

Files that USE this module:
- bikecheckout.app (composition root builds CheckoutService)
- tests.test_checkout_service (unit tests)

Files that this module USES:
- bikecheckout.application.order_totals (OrderTotalCalculator)
- bikecheckout.application.pricing (InstallmentPricingEngine)
- bikecheckout.application.schemas (parse_checkout_request)
- bikecheckout.application.security_log (SecurityEventLog)
- bikecheckout.adapters.gateway.base (PaymentGateway)
- bikecheckout.adapters.formatting.formatter (labels and log summaries)
- bikecheckout.domain.* (models and errors)
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Optional, Tuple

from bikecheckout.adapters.formatting.formatter import charge_summary, installment_label
from bikecheckout.adapters.gateway.base import PaymentGateway
from bikecheckout.application.order_totals import OrderTotalCalculator
from bikecheckout.application.pricing import InstallmentPricingEngine
from bikecheckout.application.schemas import CheckoutRequest, parse_checkout_request
from bikecheckout.application.security_log import SecurityEventLog
from bikecheckout.domain.errors import (
    CheckoutError,
    InvalidInstallmentCountError,
    PriceMismatchError,
    ProductNotFoundError,
    SchemaValidationError,
)
from bikecheckout.domain.models import (
    ChargeInstruction,
    CheckoutResult,
    InstallmentQuote,
    OrderTotal,
    PaymentMethod,
    Product,
    QuotedInstallment,
    RequestContext,
    SecurityEventKind,
    cents_to_major,
)
from bikecheckout.shared.language import translate
from bikecheckout.shared.validators import mask_document

logger = logging.getLogger(__name__)

DEFAULT_MISMATCH_TOLERANCE_CENTS = 5  # R$ 0,05 of float noise


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CheckoutService:
    """Orchestrates validation, pricing and price-integrity checks."""

    def __init__(
        self,
        calculator: OrderTotalCalculator,
        pricing: InstallmentPricingEngine,
        security_log: SecurityEventLog,
        mismatch_tolerance_cents: int = DEFAULT_MISMATCH_TOLERANCE_CENTS,
        reject_on_mismatch: bool = True,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Args:
            calculator: Authoritative order total calculator
            pricing: Installment reverse-pricing engine
            security_log: Where suspicious input is recorded
            mismatch_tolerance_cents: Allowed drift of a client-echoed total
            reject_on_mismatch: Reject (True) or only log (False) price mismatches
            clock: Source of "now" for external references
        """
        self.calculator = calculator
        self.pricing = pricing
        self.security_log = security_log
        self.mismatch_tolerance_cents = mismatch_tolerance_cents
        self.reject_on_mismatch = reject_on_mismatch
        self.clock = clock

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def parse(self, payload: Any) -> CheckoutRequest:
        """Validate the request body; raises SchemaValidationError."""
        try:
            return parse_checkout_request(payload)
        except SchemaValidationError as e:
            logger.info("Checkout rejected: status=400 kind=%s fields=%s", e.error_kind, sorted(e.details))
            raise

    def evaluate(self, payload: Any, context: Optional[RequestContext] = None) -> ChargeInstruction:
        """
        Parse and price a raw checkout request.

        Args:
            payload: Decoded JSON request body
            context: Request provenance for security events

        Returns:
            ChargeInstruction with the server-computed amount

        Raises:
            SchemaValidationError: Malformed request (400)
            ProductNotFoundError: Unknown product (404)
            InvalidInstallmentCountError: Installments out of range (400)
            PriceMismatchError: Client total disagrees, reject policy (403)
            FeeOverflowError: Fee configuration has no solution (500)
        """
        return self.evaluate_request(self.parse(payload), context)

    def evaluate_request(
        self, request: CheckoutRequest, context: Optional[RequestContext] = None
    ) -> ChargeInstruction:
        """Price an already parsed request (steps 2-6)."""
        context = context or RequestContext()

        product, order_total = self._resolve(request, context)

        installment_count = None
        per_installment = None
        if request.payment_method is PaymentMethod.CREDIT_CARD:
            installment_count = request.installments
            chargeable, per_installment = self._price_card(request, product, order_total, context)
            description = translate("charge.description.card", product=product.name)
        elif request.payment_method is PaymentMethod.PIX:
            chargeable = order_total.base_total
            description = translate("charge.description.pix", product=product.name)
        else:
            logger.info("Checkout rejected: status=400 kind=SchemaValidation method=%s", request.payment_method.value)
            raise SchemaValidationError(
                f"Unsupported payment method: {request.payment_method.value}",
                details={"paymentMethod": translate("error.unsupported_payment_method")},
            )

        self._check_client_total(request, chargeable, context)

        instruction = ChargeInstruction(
            product_id=product.product_id,
            payment_method=request.payment_method,
            chargeable_amount=chargeable,
            description=description,
            external_reference=self.new_external_reference(product.product_id),
            order_total=order_total,
            installment_count=installment_count,
            per_installment_value=per_installment,
        )
        logger.info("Charge instruction ready: %s", charge_summary(instruction))
        return instruction

    def submit(
        self,
        payload: Any,
        gateway: PaymentGateway,
        context: Optional[RequestContext] = None,
    ) -> CheckoutResult:
        """
        Price a request and hand the instruction to the payment gateway.

        The gateway is called once, only after every check has passed.
        Gateway errors propagate to the caller.
        """
        request = self.parse(payload)
        instruction = self.evaluate_request(request, context)
        receipt = gateway.create_charge(instruction, request)
        logger.info(
            "Payment created: reference=%s payment_id=%s status=%s",
            instruction.external_reference, receipt.payment_id, receipt.status,
        )
        return CheckoutResult(instruction=instruction, receipt=receipt)

    def quote_installments(
        self, product_id: str, region_code: str, lang: Optional[str] = None
    ) -> InstallmentQuote:
        """
        Installment simulation for a product shipped to a region.

        Raises:
            ProductNotFoundError: Unknown product
            SchemaValidationError: Malformed region code
        """
        product, order_total = self.calculator.compute(product_id, region_code)
        ladder = self.pricing.installment_ladder(order_total.base_total, product.max_installments)
        return InstallmentQuote(
            product_id=product.product_id,
            order_total=order_total,
            delivery=self.calculator.shipping.estimated_delivery(region_code),
            installments=tuple(QuotedInstallment(option, installment_label(option, lang)) for option in ladder),
        )

    def new_external_reference(self, product_id: str) -> str:
        """Unique per checkout attempt: <product>-<epoch ms>-<random>."""
        millis = int(self.clock().timestamp() * 1000)
        return f"{product_id}-{millis}-{uuid.uuid4().hex[:8]}"

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _resolve(self, request: CheckoutRequest, context: RequestContext) -> Tuple[Product, OrderTotal]:
        try:
            return self.calculator.compute(request.product_id, request.region_code)
        except ProductNotFoundError:
            self.security_log.record(
                SecurityEventKind.PRODUCT_NOT_FOUND,
                {
                    "productId": request.product_id,
                    "customerDocument": mask_document(request.customer.cpf_cnpj),
                },
                context,
            )
            logger.info("Checkout rejected: status=404 kind=ProductNotFound")
            raise

    def _price_card(
        self,
        request: CheckoutRequest,
        product: Product,
        order_total: OrderTotal,
        context: RequestContext,
    ) -> Tuple[int, int]:
        count = request.installments
        max_installments = min(product.max_installments, self.pricing.fee_schedule.max_installments)

        if count is None or not 1 <= count <= max_installments:
            self._reject_installments(request, count, max_installments, context)

        option = self.pricing.installment_option(order_total.base_total, count)
        # Counts left out of the offered ladder are not chargeable either
        if option.per_installment_value < self.pricing.min_installment_value:
            self._reject_installments(request, count, max_installments, context)

        return option.gross_total, option.per_installment_value

    def _reject_installments(
        self,
        request: CheckoutRequest,
        count: Optional[int],
        max_installments: int,
        context: RequestContext,
    ) -> None:
        self.security_log.record(
            SecurityEventKind.INVALID_INSTALLMENTS,
            {
                "productId": request.product_id,
                "installments": count,
                "maxInstallments": max_installments,
                "customerDocument": mask_document(request.customer.cpf_cnpj),
            },
            context,
        )
        logger.info("Checkout rejected: status=400 kind=InvalidInstallmentCount")
        raise InvalidInstallmentCountError(count, max_installments)

    def _check_client_total(self, request: CheckoutRequest, chargeable: int, context: RequestContext) -> None:
        if request.client_echoed_total is None:
            return

        echoed_cents = request.client_echoed_total * 100
        difference = echoed_cents - Decimal(chargeable)
        if abs(difference) <= self.mismatch_tolerance_cents:
            return

        self.security_log.record(
            SecurityEventKind.PRICE_MISMATCH,
            {
                "frontEndValue": str(request.client_echoed_total),
                "serverValue": str(cents_to_major(chargeable)),
                "difference": str((difference / 100).quantize(Decimal("0.01"))),
                "productId": request.product_id,
                "method": request.payment_method.value,
                "customerDocument": mask_document(request.customer.cpf_cnpj),
            },
            context,
        )
        if self.reject_on_mismatch:
            logger.info("Checkout rejected: status=403 kind=PriceMismatch")
            raise PriceMismatchError("Client total differs from server total")
        logger.warning("Price mismatch tolerated by policy for product %s", request.product_id)


def error_response(exc: Exception, lang: Optional[str] = None) -> Tuple[int, Dict[str, object]]:
    """
    Map an exception to an HTTP status and a non-leaking response body.

    Returns:
        (status_code, {"errorKind": ..., "message": ...})
    """
    if isinstance(exc, CheckoutError):
        return exc.status_code, exc.to_response(lang)
    logger.error("Unexpected checkout failure: %s (type: %s)", exc, type(exc).__name__, exc_info=exc)
    return 500, {"errorKind": "InternalError", "message": translate("error.internal", lang=lang)}
