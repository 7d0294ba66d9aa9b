# src/bikecheckout/application/schemas.py
"""
Request Schemas - Checkout Request Parsing

Pydantic models for the checkout request body. Keys on the wire are
camelCase (productId, paymentMethod, customer.cpfCnpj, ...). The product
price is never part of the request; the optional clientEchoedTotal is kept
only for price-integrity logging.

Installment counts are not range-checked here: out-of-range counts are a
security concern handled by the checkout service, not a shape error.

Files that USE this module:
- bikecheckout.application.checkout_service (parse_checkout_request)
- bikecheckout.adapters.gateway.base (CheckoutRequest type)
- tests.test_checkout_service (request fixtures)

Files that this module USES:
- bikecheckout.domain.models (PaymentMethod)
- bikecheckout.domain.errors (SchemaValidationError)
- bikecheckout.shared.validators (field format checks)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Dict, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from bikecheckout.domain.errors import SchemaValidationError
from bikecheckout.domain.models import PaymentMethod
from bikecheckout.shared.validators import (
    normalize_region_code,
    only_digits,
    validate_card_number,
    validate_cep,
    validate_cpf_cnpj,
    validate_email,
    validate_region_code,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )


def _check_email(v: str) -> str:
    if not validate_email(v):
        raise ValueError("E-mail inválido")
    return v


def _check_document(v: str) -> str:
    if not validate_cpf_cnpj(v):
        raise ValueError("CPF/CNPJ inválido")
    return only_digits(v)


def _check_cep(v: str) -> str:
    if not validate_cep(v):
        raise ValueError("CEP deve ter 8 dígitos")
    return v


Email = Annotated[str, AfterValidator(_check_email)]
Document = Annotated[str, AfterValidator(_check_document)]
PostalCode = Annotated[str, AfterValidator(_check_cep)]


class CustomerSchema(_WireModel):
    name: str = Field(min_length=3)
    email: Email
    cpf_cnpj: Document
    phone: Optional[str] = None


class AddressSchema(_WireModel):
    cep: PostalCode
    street: str = Field(min_length=5)
    number: str = Field(min_length=1)
    complement: Optional[str] = None
    district: str = Field(min_length=2)
    city: str = Field(min_length=2)
    uf: str

    @field_validator("uf")
    @classmethod
    def validate_uf(cls, v: str) -> str:
        if not validate_region_code(v):
            raise ValueError("UF deve ter 2 caracteres")
        return normalize_region_code(v)


class CreditCardSchema(_WireModel):
    """Card holder data plus either a gateway token or raw card data."""
    token: Optional[str] = None
    holder_name: str = Field(min_length=3)
    holder_email: Email
    holder_cpf_cnpj: Document
    holder_postal_code: PostalCode
    holder_address_number: str = Field(min_length=1)

    number: Optional[str] = None
    expiry_month: Optional[str] = None
    expiry_year: Optional[str] = None
    ccv: Optional[str] = None

    @field_validator("number")
    @classmethod
    def validate_number(cls, v: Optional[str]) -> Optional[str]:
        if v and not validate_card_number(v):
            raise ValueError("Número de cartão inválido")
        return v

    @model_validator(mode="after")
    def require_token_or_card(self) -> "CreditCardSchema":
        if not self.token and not self.number:
            raise ValueError("Informe o token ou os dados do cartão")
        if self.number and not (self.expiry_month and self.expiry_year and self.ccv):
            raise ValueError("Validade e CCV são obrigatórios")
        return self


class CheckoutRequest(_WireModel):
    product_id: str = Field(min_length=1)
    customer: CustomerSchema
    address: AddressSchema
    payment_method: PaymentMethod
    credit_card: Optional[CreditCardSchema] = None
    installments: Optional[StrictInt] = None
    # Advisory only, in currency units; never used to compute the charge
    client_echoed_total: Optional[Decimal] = None

    @model_validator(mode="after")
    def require_card_data(self) -> "CheckoutRequest":
        if self.payment_method is PaymentMethod.CREDIT_CARD:
            if self.credit_card is None:
                raise ValueError("Dados do cartão são obrigatórios")
            if self.installments is None:
                raise ValueError("Número de parcelas é obrigatório")
        return self

    @property
    def region_code(self) -> str:
        return self.address.uf


def _error_details(exc: ValidationError) -> Dict[str, str]:
    """First message per field, keyed by dotted camelCase path."""
    details: Dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "request"
        message = error.get("msg", "invalid")
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.setdefault(field, message)
    return details


def parse_checkout_request(payload: Any) -> CheckoutRequest:
    """
    Validate a raw request body.

    Raises:
        SchemaValidationError: With per-field details when the body is invalid
    """
    try:
        return CheckoutRequest.model_validate(payload)
    except ValidationError as e:
        raise SchemaValidationError("Invalid checkout request", details=_error_details(e)) from e
