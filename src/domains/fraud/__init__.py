"""Fraud screening domain."""

from .config import FraudConfig, default_config
from .errors import InvalidCandidateError, ScreeningError
from .models import (
    CandidateExpense,
    ExpenseCategory,
    ExpenseStatus,
    FraudStatistics,
    FraudVerdict,
    HistoricalExpense,
    ScreeningDecision,
)
from .rules import ALL_RULES
from .screening import FraudScreener, combine_verdicts
from .service import FraudScreeningService, apply_decision, candidate_from_expense
from .statistics import FraudStatisticsAggregator
from .store import ExpenseStore, SQLAlchemyExpenseStore

__all__ = [
    "ALL_RULES",
    "CandidateExpense",
    "ExpenseCategory",
    "ExpenseStatus",
    "ExpenseStore",
    "FraudConfig",
    "FraudScreener",
    "FraudScreeningService",
    "FraudStatistics",
    "FraudStatisticsAggregator",
    "FraudVerdict",
    "HistoricalExpense",
    "InvalidCandidateError",
    "SQLAlchemyExpenseStore",
    "ScreeningDecision",
    "ScreeningError",
    "apply_decision",
    "candidate_from_expense",
    "combine_verdicts",
    "default_config",
]
