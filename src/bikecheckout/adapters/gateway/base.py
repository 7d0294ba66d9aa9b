# src/bikecheckout/adapters/gateway/base.py
"""
Base Payment Gateway Interface

Defines the contract the checkout core expects from a payment gateway
client. Transport concerns (HTTP, retries, timeouts) belong to the
implementations.

Files that USE this module:
- bikecheckout.application.checkout_service (CheckoutService.submit)
- tests.test_checkout_service (fake gateway)

Files that this module USES:
- bikecheckout.domain.models (ChargeInstruction, ChargeReceipt)
- bikecheckout.application.schemas (CheckoutRequest)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from bikecheckout.domain.models import ChargeInstruction, ChargeReceipt

if TYPE_CHECKING:
    from bikecheckout.application.schemas import CheckoutRequest


class PaymentGateway(ABC):
    @abstractmethod
    def create_charge(self, instruction: ChargeInstruction, request: "CheckoutRequest") -> ChargeReceipt:
        """
        Create a PIX or card charge for a validated instruction.

        The instruction's external_reference is the idempotency key; a gateway
        must not create two charges for the same reference.
        """
        raise NotImplementedError
