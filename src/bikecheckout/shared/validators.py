# src/bikecheckout/shared/validators.py
"""
Input Validation Utilities - Checkout Field Validation

This module provides the format checks used when parsing checkout requests:
Brazilian national ids (CPF / CNPJ check digits), postal codes (CEP),
e-mail addresses, region codes (UF) and card numbers (Luhn).

Files that USE this module:
- bikecheckout.application.schemas (pydantic field validators)
- bikecheckout.application.shipping (region code normalisation)
- bikecheckout.config.settings (region list validation)

Files that this module USES:
- None (pure utility functions)
"""
import re
from typing import Optional

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_CEP_RE = re.compile(r"^\d{8}$")

# Repeated-digit sequences pass the mod-11 check but are never issued
_REPEATED = {str(d) * 11 for d in range(10)}


def only_digits(value: Optional[str]) -> str:
    """Strip everything but digits (e.g. '529.982.247-25' -> '52998224725')."""
    if not value:
        return ""
    return "".join(ch for ch in value if ch.isdigit())


def validate_cpf(cpf: str) -> bool:
    """
    Validate a CPF using the mod-11 check digits.

    Args:
        cpf: 11 digits, formatted or not

    Returns:
        True if valid, False otherwise
    """
    digits = only_digits(cpf)
    if len(digits) != 11 or digits in _REPEATED:
        return False

    for position in (9, 10):
        total = sum(int(digits[i]) * (position + 1 - i) for i in range(position))
        remainder = total % 11
        check = 0 if remainder < 2 else 11 - remainder
        if check != int(digits[position]):
            return False
    return True


def validate_cnpj(cnpj: str) -> bool:
    """
    Validate a CNPJ using its two weighted check digits.

    Args:
        cnpj: 14 digits, formatted or not

    Returns:
        True if valid, False otherwise
    """
    digits = only_digits(cnpj)
    if len(digits) != 14 or len(set(digits)) == 1:
        return False

    weights_first = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
    weights_second = [6] + weights_first
    for weights, position in ((weights_first, 12), (weights_second, 13)):
        total = sum(int(d) * w for d, w in zip(digits[:position], weights))
        remainder = total % 11
        check = 0 if remainder < 2 else 11 - remainder
        if check != int(digits[position]):
            return False
    return True


def validate_cpf_cnpj(value: str) -> bool:
    """Validate either a CPF (11 digits) or a CNPJ (14 digits)."""
    digits = only_digits(value)
    if len(digits) == 11:
        return validate_cpf(digits)
    if len(digits) == 14:
        return validate_cnpj(digits)
    return False


def validate_cep(cep: str) -> bool:
    """CEP must be exactly 8 digits, no mask."""
    return bool(cep) and bool(_CEP_RE.match(cep))


def validate_email(email: str) -> bool:
    """Loose e-mail shape check: one @ and a dotted domain."""
    return bool(email) and bool(_EMAIL_RE.match(email.strip()))


def normalize_region_code(region_code: Optional[str]) -> str:
    """Trim and upper-case a region code ('sp ' -> 'SP')."""
    return (region_code or "").strip().upper()


def validate_region_code(region_code: Optional[str]) -> bool:
    """A region code is any two-letter code once normalised."""
    code = normalize_region_code(region_code)
    return len(code) == 2 and code.isalpha()


def validate_card_number(number: str) -> bool:
    """
    Validate a card number with the Luhn checksum.

    Args:
        number: Card number, spaces allowed

    Returns:
        True if 13-19 digits and the checksum holds
    """
    digits = only_digits(number)
    if not 13 <= len(digits) <= 19:
        return False
    if len(number.replace(" ", "")) != len(digits):
        return False

    total = 0
    for i, ch in enumerate(reversed(digits)):
        n = int(ch)
        if i % 2 == 1:
            n *= 2
            if n > 9:
                n -= 9
        total += n
    return total % 10 == 0


def mask_document(value: Optional[str]) -> str:
    """Mask a CPF/CNPJ for logs, keeping only the last two digits."""
    digits = only_digits(value)
    if not digits:
        return ""
    return "*" * (len(digits) - 2) + digits[-2:]

