# tests/test_validators.py
"""
Validator Tests - Unit Tests for Checkout Field Validation

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- bikecheckout.shared.validators (all validation helpers)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from bikecheckout.shared.validators import (
    mask_document,
    only_digits,
    validate_card_number,
    validate_cep,
    validate_cnpj,
    validate_cpf,
    validate_cpf_cnpj,
    validate_email,
    validate_region_code,
)


class TestDocuments:
    def test_valid_cpf(self):
        assert validate_cpf("52998224725")
        assert validate_cpf("529.982.247-25")

    def test_invalid_cpf_check_digits(self):
        assert not validate_cpf("12345678900")
        assert not validate_cpf("52998224724")

    def test_repeated_digits_rejected(self):
        assert not validate_cpf("11111111111")

    def test_valid_cnpj(self):
        assert validate_cnpj("11.222.333/0001-81")

    def test_invalid_cnpj(self):
        assert not validate_cnpj("11222333000182")
        assert not validate_cnpj("00000000000000")

    def test_cpf_or_cnpj(self):
        assert validate_cpf_cnpj("52998224725")
        assert validate_cpf_cnpj("11222333000181")
        assert not validate_cpf_cnpj("1234")

    def test_only_digits(self):
        assert only_digits("529.982.247-25") == "52998224725"
        assert only_digits(None) == ""

    def test_mask_document(self):
        assert mask_document("529.982.247-25") == "*********25"
        assert mask_document("") == ""


class TestAddressFields:
    def test_cep(self):
        assert validate_cep("01310100")
        assert not validate_cep("01310-100")
        assert not validate_cep("0131010")

    @pytest.mark.parametrize("code,expected", [
        ("SP", True),
        ("ba", True),
        (" rj ", True),
        ("", False),
        ("S", False),
        ("SPX", False),
        ("1A", False),
        (None, False),
    ])
    def test_region_code(self, code, expected):
        assert validate_region_code(code) is expected

    def test_email(self):
        assert validate_email("maria@example.com")
        assert not validate_email("maria@")
        assert not validate_email("maria example.com")


class TestCardNumber:
    def test_luhn_valid(self):
        assert validate_card_number("4111111111111111")
        assert validate_card_number("4111 1111 1111 1111")

    def test_luhn_invalid(self):
        assert not validate_card_number("4111111111111112")

    def test_length(self):
        assert not validate_card_number("4111")

    def test_non_digit_characters(self):
        assert not validate_card_number("4111-1111-1111-1111")

