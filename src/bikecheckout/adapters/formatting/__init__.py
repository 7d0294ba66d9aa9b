# src/bikecheckout/adapters/formatting/__init__.py
"""
Formatting Adapters - Display Formatting

This package contains currency and installment label formatting.
"""

from bikecheckout.adapters.formatting.formatter import (
    charge_summary,
    format_brl,
    installment_label,
)

__all__ = [
    "format_brl",
    "installment_label",
    "charge_summary",
]
