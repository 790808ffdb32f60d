"""Fraud screening configuration with sensible defaults."""

import os
from dataclasses import dataclass, field


@dataclass
class DuplicateThresholds:
    window_minutes: int = 60


@dataclass
class PatternThresholds:
    round_divisors: tuple[int, ...] = (100, 50, 25)
    description_lookback_days: int = 7
    similar_description_max: int = 2


@dataclass
class AmountThresholds:
    high: float = 1_000.0
    very_high: float = 5_000.0


@dataclass
class RapidSubmissionThresholds:
    window_minutes: int = 30
    max_prior_submissions: int = 5


@dataclass
class ScreeningSettings:
    # Store failures count as "no match" unless disabled
    fail_open: bool = True
    # Ignored for stores that do not allow concurrent reads
    concurrent: bool = False


@dataclass
class FraudConfig:
    duplicate: DuplicateThresholds = field(default_factory=DuplicateThresholds)
    patterns: PatternThresholds = field(default_factory=PatternThresholds)
    amount: AmountThresholds = field(default_factory=AmountThresholds)
    rapid: RapidSubmissionThresholds = field(default_factory=RapidSubmissionThresholds)
    screening: ScreeningSettings = field(default_factory=ScreeningSettings)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        if v := os.getenv("FRAUD_DUPLICATE_WINDOW_MINUTES"):
            config.duplicate.window_minutes = int(v)

        if v := os.getenv("FRAUD_DESCRIPTION_LOOKBACK_DAYS"):
            config.patterns.description_lookback_days = int(v)
        if v := os.getenv("FRAUD_SIMILAR_DESCRIPTION_MAX"):
            config.patterns.similar_description_max = int(v)

        if v := os.getenv("FRAUD_HIGH_AMOUNT"):
            config.amount.high = float(v)
        if v := os.getenv("FRAUD_VERY_HIGH_AMOUNT"):
            config.amount.very_high = float(v)

        if v := os.getenv("FRAUD_RAPID_WINDOW_MINUTES"):
            config.rapid.window_minutes = int(v)
        if v := os.getenv("FRAUD_RAPID_MAX_SUBMISSIONS"):
            config.rapid.max_prior_submissions = int(v)

        if v := os.getenv("FRAUD_FAIL_OPEN"):
            config.screening.fail_open = v.lower() in ("1", "true", "yes")
        if v := os.getenv("FRAUD_CONCURRENT"):
            config.screening.concurrent = v.lower() in ("1", "true", "yes")

        return config


# Module-level default instance
default_config = FraudConfig()
