"""Pydantic models for the fraud screening domain."""

from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from src.config import settings

Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


def _as_utc(v: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; stored dates are always tz-aware."""
    if v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v

class ExpenseCategory(StrEnum):
    MEALS = "meals"
    TRANSPORTATION = "transportation"
    ACCOMMODATION = "accommodation"
    OFFICE_SUPPLIES = "office_supplies"
    TRAVEL = "travel"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"


class ExpenseStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CandidateExpense(BaseModel):
    """An expense being screened. ``expense_id`` is set when re-screening an edit."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    amount: Decimal = Field(gt=0)
    category: ExpenseCategory = ExpenseCategory.OTHER
    description: Description = ""
    date: datetime
    expense_id: int | None = None

    @field_validator("amount")
    @classmethod
    def _within_maximum(cls, v: Decimal) -> Decimal:
        if v > Decimal(str(settings.max_expense_amount)):
            raise ValueError(f"amount exceeds maximum of {settings.max_expense_amount}")
        return v

    @field_validator("date")
    @classmethod
    def _aware_date(cls, v: datetime) -> datetime:
        return _as_utc(v)


class HistoricalExpense(BaseModel):
    model_config = ConfigDict(frozen=True)

    expense_id: int
    user_id: str
    amount: Decimal
    category: ExpenseCategory = ExpenseCategory.OTHER
    description: Description = ""
    date: datetime
    created_at: datetime
    status: ExpenseStatus = ExpenseStatus.PENDING
    is_flagged: bool = False

    @field_validator("date", "created_at")
    @classmethod
    def _aware_dates(cls, v: datetime) -> datetime:
        return _as_utc(v)


class FraudVerdict(BaseModel):
    rule_name: str
    flagged: bool
    reason: str = ""
    evidence: dict = Field(default_factory=dict)


class ScreeningDecision(BaseModel):
    is_flagged: bool
    reason: str = ""
    details: list[FraudVerdict] = []


class FraudStatistics(BaseModel):
    total_expenses: int = 0
    flagged_expenses: int = 0
    pending_review: int = 0
    fraud_rate: str = "0"
