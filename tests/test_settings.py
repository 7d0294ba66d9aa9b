# tests/test_settings.py
"""
Settings Tests - Unit Tests for Configuration Loading

This module contains unit tests for the pydantic settings model: defaults,
environment overrides and validation of region lists, mismatch policy and
language.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- bikecheckout.config.settings (Settings)
- pydantic (ValidationError)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from decimal import Decimal  # Expected anticipation rate

from pydantic import ValidationError  # Raised on invalid configuration

from bikecheckout.config.settings import Settings  # Settings model under test


class TestDefaults:
    def test_fee_defaults(self):
        s = Settings(_env_file=None)
        assert s.fixed_fee_cents == 49
        assert s.anticipation_rate == Decimal("0.016")
        assert s.max_installments == 21
        assert s.min_installment_value_cents == 500

    def test_shipping_defaults(self):
        s = Settings(_env_file=None)
        assert s.shipping_near_fee_cents == 15000
        assert s.shipping_far_fee_cents == 30000
        assert s.near_regions == frozenset({"SP", "RJ", "MG", "ES", "PR", "SC", "RS"})

    def test_mismatch_defaults(self):
        s = Settings(_env_file=None)
        assert s.price_mismatch_tolerance_cents == 5
        assert s.reject_on_price_mismatch is True

    def test_no_security_file_by_default(self):
        assert Settings(_env_file=None).security_log_file is None


class TestEnvironment:
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ANTICIPATION_RATE", "0.02")
        monkeypatch.setenv("SHIPPING_NEAR_REGIONS", "sp, rj")
        monkeypatch.setenv("PRICE_MISMATCH_POLICY", "LOG")
        s = Settings(_env_file=None)
        assert s.anticipation_rate == Decimal("0.02")
        assert s.near_regions == frozenset({"SP", "RJ"})
        assert s.reject_on_price_mismatch is False

    def test_security_log_directory_created(self, tmp_path):
        path = tmp_path / "audit" / "security.jsonl"
        Settings(_env_file=None, SECURITY_LOG_FILE=str(path))
        assert path.parent.is_dir()


class TestValidation:
    def test_bad_mismatch_policy(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, PRICE_MISMATCH_POLICY="ignore")

    def test_bad_region_list(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SHIPPING_NEAR_REGIONS="SP,SAO")

    def test_empty_region_list(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SHIPPING_NEAR_REGIONS=" , ")

    def test_bad_language(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, DEFAULT_LANGUAGE="fr")

    def test_max_installments_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, MAX_INSTALLMENTS=22)

    def test_anticipation_rate_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ANTICIPATION_RATE="1.5")
