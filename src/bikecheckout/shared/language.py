# src/bikecheckout/shared/language.py
"""
Language Management - Client-facing Message Catalog

This module holds the public messages of the checkout core in Brazilian
Portuguese and English. Messages are deliberately generic: they classify the
failure without echoing computed prices or internal state.

Files that USE this module:
- bikecheckout.domain.errors (public error messages)
- bikecheckout.application.checkout_service (charge descriptions)
- bikecheckout.adapters.formatting.formatter (installment labels)
- bikecheckout.app (sets the default language from settings)

Files that this module USES:
- None (pure utility module)
"""
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Language constants
LANG_PORTUGUESE = "pt"
LANG_ENGLISH = "en"
SUPPORTED_LANGUAGES = (LANG_PORTUGUESE, LANG_ENGLISH)

MESSAGES: Dict[str, Dict[str, str]] = {
    LANG_PORTUGUESE: {
        "error.generic": "Não foi possível processar o pedido.",
        "error.schema_validation": "Dados inválidos no formulário.",
        "error.product_not_found": "Produto não encontrado.",
        "error.invalid_installments": "Número de parcelas inválido.",
        "error.invalid_installments_max": "Número de parcelas inválido (Máx: {max}).",
        "error.price_mismatch": (
            "Erro de segurança: Divergência de valores. "
            "Atualize a página e tente novamente."
        ),
        "error.internal": (
            "Sistema temporariamente instável. "
            "Por favor, tente novamente em alguns instantes."
        ),
        "error.unsupported_payment_method": "Método de pagamento inválido.",
        "charge.description.pix": "{product} + Frete",
        "charge.description.card": "{product} + Frete + Taxas",
        "installment.label": "{count}x de {value} (Total: {total})",
    },
    LANG_ENGLISH: {
        "error.generic": "The order could not be processed.",
        "error.schema_validation": "Invalid form data.",
        "error.product_not_found": "Product not found.",
        "error.invalid_installments": "Invalid number of installments.",
        "error.invalid_installments_max": "Invalid number of installments (max: {max}).",
        "error.price_mismatch": (
            "Security error: price mismatch. "
            "Please reload the page and try again."
        ),
        "error.internal": "The system is temporarily unavailable. Please try again shortly.",
        "error.unsupported_payment_method": "Invalid payment method.",
        "charge.description.pix": "{product} + Shipping",
        "charge.description.card": "{product} + Shipping + Fees",
        "installment.label": "{count}x of {value} (Total: {total})",
    },
}

_default_language = LANG_PORTUGUESE


def get_language() -> str:
    """Get the default language used when none is requested."""
    return _default_language


def set_language(lang: str) -> bool:
    """
    Set the default language.

    Args:
        lang: Language code ("pt" or "en")

    Returns:
        True if the language was set, False if it is not supported
    """
    global _default_language
    if lang not in SUPPORTED_LANGUAGES:
        logger.warning("Unsupported language requested: %s", lang)
        return False
    _default_language = lang
    return True


def translate(key: str, lang: Optional[str] = None, **kwargs: Any) -> str:
    """
    Translate a message key.

    Falls back to the default language when `lang` is unknown, and to the key
    itself when no catalog holds it.

    Args:
        key: Message key (e.g. "error.product_not_found")
        lang: Optional language code; defaults to the configured language
        **kwargs: Template parameters

    Returns:
        Rendered message
    """
    catalog = MESSAGES.get(lang or _default_language) or MESSAGES[_default_language]
    template = catalog.get(key) or MESSAGES[LANG_PORTUGUESE].get(key)
    if template is None:
        logger.warning("Missing translation key: %s", key)
        return key
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.warning("Missing parameter in translation '%s': %s", key, e)
        return template
