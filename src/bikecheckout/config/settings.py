# src/bikecheckout/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration for the checkout core using Pydantic
Settings. Fee constants, shipping tiers, the price-mismatch policy and the
logging options are read from environment variables (or a .env file).

Files that USE this module:
- bikecheckout.app (builds the checkout service from settings)
- tests.test_settings (unit tests)

Files that this module USES:
- bikecheckout.shared.validators (region code validation)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from decimal import Decimal  # Exact rates for fee computation
from pathlib import Path  # Object-oriented filesystem paths
from typing import FrozenSet, Optional  # Type hints

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from bikecheckout.shared.validators import (
    normalize_region_code,  # Upper-case and trim region codes
    validate_region_code,  # Two-letter region code check
)

MISMATCH_POLICY_REJECT = "reject"
MISMATCH_POLICY_LOG = "log"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Gateway fees ---
    fixed_fee_cents: int = Field(default=49, alias="FIXED_FEE_CENTS", ge=0)
    anticipation_rate: Decimal = Field(default=Decimal("0.016"), alias="ANTICIPATION_RATE", ge=0, lt=1)
    max_installments: int = Field(default=21, alias="MAX_INSTALLMENTS", ge=1, le=21)
    min_installment_value_cents: int = Field(default=500, alias="MIN_INSTALLMENT_VALUE_CENTS", ge=0)

    # --- Shipping tiers (in centavos) ---
    shipping_near_fee_cents: int = Field(default=15000, alias="SHIPPING_NEAR_FEE_CENTS", ge=0)
    shipping_far_fee_cents: int = Field(default=30000, alias="SHIPPING_FAR_FEE_CENTS", ge=0)
    shipping_near_regions: str = Field(default="SP,RJ,MG,ES,PR,SC,RS", alias="SHIPPING_NEAR_REGIONS")

    # --- Price integrity ---
    price_mismatch_tolerance_cents: int = Field(default=5, alias="PRICE_MISMATCH_TOLERANCE_CENTS", ge=0)
    price_mismatch_policy: str = Field(default=MISMATCH_POLICY_REJECT, alias="PRICE_MISMATCH_POLICY")

    # --- Language Settings ---
    default_language: str = Field(default="pt", alias="DEFAULT_LANGUAGE")

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="CHECKOUT_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")
    security_log_file: Optional[Path] = Field(default=None, alias="SECURITY_LOG_FILE")

    @property
    def near_regions(self) -> FrozenSet[str]:
        """Near-tier region codes as a normalised set."""
        return frozenset(
            normalize_region_code(code)
            for code in self.shipping_near_regions.split(",")
            if code.strip()
        )

    @property
    def reject_on_price_mismatch(self) -> bool:
        return self.price_mismatch_policy == MISMATCH_POLICY_REJECT

    @field_validator("shipping_near_regions")
    @classmethod
    def validate_near_regions(cls, v: str) -> str:
        """Every listed region must be a two-letter code."""
        codes = [code for code in v.split(",") if code.strip()]
        if not codes:
            raise ValueError("SHIPPING_NEAR_REGIONS must list at least one region")
        bad = [code for code in codes if not validate_region_code(code)]
        if bad:
            raise ValueError(f"Invalid region codes in SHIPPING_NEAR_REGIONS: {bad}")
        return v

    @field_validator("price_mismatch_policy")
    @classmethod
    def validate_mismatch_policy(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in (MISMATCH_POLICY_REJECT, MISMATCH_POLICY_LOG):
            raise ValueError("PRICE_MISMATCH_POLICY must be 'reject' or 'log'")
        return v

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate language code."""
        if v not in ["pt", "en"]:
            raise ValueError("DEFAULT_LANGUAGE must be 'pt' or 'en'")
        return v

    def model_post_init(self, __context) -> None:
        """Post-initialization validation."""
        if self.security_log_file is not None:
            self.security_log_file.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
