# tests/test_app.py
"""
Composition Root Tests - Wiring of the Checkout Service from Settings

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- bikecheckout.app (create_checkout_service, configure_logging)
- bikecheckout.config.settings (Settings)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from bikecheckout.app import configure_logging, create_checkout_service  # Wiring under test
from bikecheckout.config.settings import Settings  # Settings for wiring
from bikecheckout.domain.errors import InvalidInstallmentCountError, ProductNotFoundError


class TestCreateCheckoutService:
    def test_default_wiring(self):
        service = create_checkout_service(Settings(_env_file=None))
        assert service.reject_on_mismatch is True
        assert service.mismatch_tolerance_cents == 5
        assert service.calculator.shipping.resolve("SP") == 15000
        assert service.pricing.fixed_fee_cents == 49

    def test_settings_flow_through(self):
        settings = Settings(
            _env_file=None,
            SHIPPING_NEAR_FEE_CENTS=1000,
            SHIPPING_NEAR_REGIONS="BA",
            PRICE_MISMATCH_POLICY="log",
            PRICE_MISMATCH_TOLERANCE_CENTS=20,
        )
        service = create_checkout_service(settings)
        assert service.calculator.shipping.resolve("BA") == 1000
        assert service.calculator.shipping.resolve("SP") == 30000
        assert service.reject_on_mismatch is False
        assert service.mismatch_tolerance_cents == 20

    def test_max_installments_caps_fee_table(self):
        service = create_checkout_service(Settings(_env_file=None, MAX_INSTALLMENTS=12))
        assert service.pricing.fee_schedule.max_installments == 12
        quote = service.quote_installments("ambtus-flash", "SP")
        assert len(quote.installments) == 12

    def test_security_events_persisted(self, tmp_path):
        path = tmp_path / "security.jsonl"
        service = create_checkout_service(Settings(_env_file=None, SECURITY_LOG_FILE=str(path)))
        with pytest.raises(ProductNotFoundError):
            service.quote_installments("nonexistent", "SP")
        assert not path.exists()

        with pytest.raises(InvalidInstallmentCountError):
            service.evaluate({
                "productId": "g60",
                "customer": {"name": "João Souza", "email": "joao@example.com", "cpfCnpj": "52998224725"},
                "address": {
                    "cep": "20040020", "street": "Rua da Assembleia", "number": "10",
                    "district": "Centro", "city": "Rio de Janeiro", "uf": "RJ",
                },
                "paymentMethod": "CREDIT_CARD",
                "creditCard": {
                    "token": "tok_abc123",
                    "holderName": "João Souza",
                    "holderEmail": "joao@example.com",
                    "holderCpfCnpj": "52998224725",
                    "holderPostalCode": "20040020",
                    "holderAddressNumber": "10",
                },
                "installments": 24,
            })
        assert "INVALID_INSTALLMENTS" in path.read_text(encoding="utf-8")


class TestConfigureLogging:
    def test_log_dir(self, tmp_path):
        settings = Settings(_env_file=None, LOG_DIR=str(tmp_path / "logs"), CHECKOUT_LOG_STDOUT="false")
        configure_logging(settings)
        assert (tmp_path / "logs" / "checkout.log").exists()
