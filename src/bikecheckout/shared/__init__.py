"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Client-facing messages
- Logging configuration
"""

from bikecheckout.shared.validators import (
    mask_document,
    normalize_region_code,
    only_digits,
    validate_card_number,
    validate_cep,
    validate_cnpj,
    validate_cpf,
    validate_cpf_cnpj,
    validate_email,
    validate_region_code,
)
from bikecheckout.shared.language import (
    get_language,
    set_language,
    translate,
    LANG_ENGLISH,
    LANG_PORTUGUESE,
)

__all__ = [
    "only_digits",
    "validate_cpf",
    "validate_cnpj",
    "validate_cpf_cnpj",
    "validate_cep",
    "validate_email",
    "validate_region_code",
    "normalize_region_code",
    "validate_card_number",
    "mask_document",
    "get_language",
    "set_language",
    "translate",
    "LANG_ENGLISH",
    "LANG_PORTUGUESE",
]
