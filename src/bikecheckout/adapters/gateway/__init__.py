"""
Gateway Adapters - Payment Gateway Contract

This package defines the interface of the external payment gateway client.
"""

from bikecheckout.adapters.gateway.base import PaymentGateway

__all__ = ["PaymentGateway"]
