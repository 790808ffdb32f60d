"""Tests for application and fraud screening configuration."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.config import Settings
from src.domains.fraud.config import FraudConfig
from src.domains.fraud.models import CandidateExpense


class TestSettings:
    def test_default_settings(self):
        settings = Settings()
        assert settings.app_name == "expense-guard"
        assert settings.app_version == "0.1.0"
        assert settings.max_expense_amount == 10_000.0

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("APP_NAME", "test-app")
        monkeypatch.setenv("LOG_FORMAT", "console")
        monkeypatch.setenv("DEBUG", "true")
        settings = Settings()
        assert settings.app_name == "test-app"
        assert settings.log_format == "console"
        assert settings.debug is True

    def test_database_url_default(self):
        settings = Settings()
        assert "postgresql+asyncpg" in settings.database_url


class TestFraudConfig:
    def test_defaults(self):
        config = FraudConfig()
        assert config.duplicate.window_minutes == 60
        assert config.patterns.round_divisors == (100, 50, 25)
        assert config.patterns.description_lookback_days == 7
        assert config.patterns.similar_description_max == 2
        assert config.amount.high == 1_000.0
        assert config.amount.very_high == 5_000.0
        assert config.rapid.window_minutes == 30
        assert config.rapid.max_prior_submissions == 5
        assert config.screening.fail_open is True
        assert config.screening.concurrent is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FRAUD_HIGH_AMOUNT", "1500")
        monkeypatch.setenv("FRAUD_RAPID_MAX_SUBMISSIONS", "8")
        monkeypatch.setenv("FRAUD_FAIL_OPEN", "false")
        config = FraudConfig.from_env()
        assert config.amount.high == 1500.0
        assert config.rapid.max_prior_submissions == 8
        assert config.screening.fail_open is False

    def test_instances_do_not_share_state(self):
        a = FraudConfig()
        a.amount.high = 1.0
        assert FraudConfig().amount.high == 1_000.0


class TestCandidateValidation:
    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            CandidateExpense(user_id="u", amount=Decimal("0"), date="2026-01-15T14:00:00Z")

    def test_amount_bounded_by_maximum(self):
        with pytest.raises(ValidationError):
            CandidateExpense(user_id="u", amount=Decimal("10000.01"), date="2026-01-15T14:00:00Z")

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            CandidateExpense(
                user_id="u", amount=Decimal("10"), category="gifts", date="2026-01-15T14:00:00Z"
            )
