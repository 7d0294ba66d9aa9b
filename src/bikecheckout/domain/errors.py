# src/bikecheckout/domain/errors.py
"""
Domain Errors - Checkout Rule Violations

This module defines the checkout error taxonomy. Every error carries the
public error kind, the HTTP status the response layer should use and the
message key used to build a non-leaking client message.

Files that USE this module:
- bikecheckout.application.* (raise errors at the point of detection)
- bikecheckout.app (maps errors to responses)
- tests.* (assert on error kinds)

Files that this module USES:
- bikecheckout.shared.language (public message templates)
"""
from __future__ import annotations

from typing import Dict, Optional

from bikecheckout.shared.language import translate


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class CheckoutError(DomainError):
    """
    Base class for errors that abort a checkout request.

    Attributes:
        error_kind: Public classification sent to the caller
        status_code: HTTP status the response layer should answer with
        message_key: Key of the public message in shared.language
    """
    error_kind = "CheckoutError"
    status_code = 400
    message_key = "error.generic"

    def __init__(self, detail: str = "", **context):
        super().__init__(detail or self.error_kind)
        self.detail = detail
        self.context = context

    def public_message(self, lang: Optional[str] = None) -> str:
        """Client-safe message; never includes internal values."""
        return translate(self.message_key, lang=lang)

    def to_response(self, lang: Optional[str] = None) -> Dict[str, object]:
        """Build the `{errorKind, message}` failure payload."""
        return {"errorKind": self.error_kind, "message": self.public_message(lang)}


class SchemaValidationError(CheckoutError):
    """Raised when the request shape or a field format is invalid."""
    error_kind = "SchemaValidation"
    status_code = 400
    message_key = "error.schema_validation"

    def __init__(self, detail: str = "", details: Optional[Dict[str, str]] = None, **context):
        super().__init__(detail, **context)
        self.details: Dict[str, str] = dict(details or {})

    def to_response(self, lang: Optional[str] = None) -> Dict[str, object]:
        payload = super().to_response(lang)
        if self.details:
            payload["details"] = dict(self.details)
        return payload


class ProductNotFoundError(CheckoutError):
    """Raised when a product id is absent from the catalog."""
    error_kind = "ProductNotFound"
    status_code = 404
    message_key = "error.product_not_found"

    def __init__(self, product_id: str):
        super().__init__(f"Unknown product id: {product_id!r}", product_id=product_id)
        self.product_id = product_id


class InvalidInstallmentCountError(CheckoutError):
    """Raised when an installment count is outside the allowed range."""
    error_kind = "InvalidInstallmentCount"
    status_code = 400
    message_key = "error.invalid_installments"

    def __init__(self, installment_count, max_installments: Optional[int] = None):
        super().__init__(
            f"Invalid installment count: {installment_count!r} (max {max_installments})",
            installment_count=installment_count,
            max_installments=max_installments,
        )
        self.installment_count = installment_count
        self.max_installments = max_installments

    def public_message(self, lang: Optional[str] = None) -> str:
        if self.max_installments is None:
            return translate(self.message_key, lang=lang)
        return translate("error.invalid_installments_max", lang=lang, max=self.max_installments)


class PriceMismatchError(CheckoutError):
    """Raised when a client-echoed total disagrees with the server total."""
    error_kind = "PriceMismatch"
    status_code = 403
    message_key = "error.price_mismatch"


class FeeOverflowError(CheckoutError):
    """Raised when the combined fee rate leaves no valid gross amount."""
    error_kind = "FeeOverflow"
    status_code = 500
    message_key = "error.internal"
