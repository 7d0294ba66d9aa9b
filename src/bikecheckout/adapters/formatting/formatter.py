# src/bikecheckout/adapters/formatting/formatter.py
"""
Currency Formatter - BRL Amounts and Installment Labels

Formats centavo amounts the way the checkout displays them
("R$ 7.499,00") and builds installment labels
("3x de R$ 2.680,12 (Total: R$ 8.040,36)").

Files that USE this module:
- bikecheckout.application.checkout_service (labels for installment quotes)
- tests.test_formatter (unit tests)

Files that this module USES:
- bikecheckout.domain.models (InstallmentOption, ChargeInstruction, cents_to_major)
- bikecheckout.shared.language (translate for label templates)
"""
from __future__ import annotations

from typing import Optional

from bikecheckout.domain.models import ChargeInstruction, InstallmentOption, cents_to_major
from bikecheckout.shared.language import translate


def format_brl(cents: int) -> str:
    """
    Format centavos as Brazilian reais.

    Args:
        cents: Amount in centavos (e.g. 749900)

    Returns:
        "R$ 7.499,00"
    """
    major = cents_to_major(abs(cents))
    # 7,499.00 -> 7.499,00
    digits = f"{major:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if cents < 0 else ""
    return f"{sign}R$ {digits}"


def installment_label(option: InstallmentOption, lang: Optional[str] = None) -> str:
    """Display label for one installment option."""
    return translate(
        "installment.label",
        lang=lang,
        count=option.installment_count,
        value=format_brl(option.per_installment_value),
        total=format_brl(option.gross_total),
    )


def charge_summary(instruction: ChargeInstruction) -> str:
    """One-line summary of a charge instruction for logs."""
    total = instruction.order_total
    line = (
        f"{instruction.external_reference} {instruction.payment_method.value} "
        f"{format_brl(instruction.chargeable_amount)} "
        f"(product {format_brl(total.product_price)} + shipping {format_brl(total.shipping_fee)})"
    )
    if instruction.installment_count:
        line += f" in {instruction.installment_count}x of {format_brl(instruction.per_installment_value or 0)}"
    return line
