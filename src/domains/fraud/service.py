"""Screening pipeline for persisted expenses: candidate -> rules -> write flags back."""

from collections.abc import Callable
from datetime import UTC, datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Expense, ExpenseReviewError

from .config import FraudConfig, default_config
from .models import CandidateExpense, ExpenseStatus, ScreeningDecision
from .rules import DuplicateAmountRule
from .screening import FraudScreener
from .store import ExpenseStore, SQLAlchemyExpenseStore

logger = structlog.get_logger()


def candidate_from_expense(expense: Expense) -> CandidateExpense:
    return CandidateExpense(
        user_id=expense.user_id,
        amount=expense.amount,
        category=expense.category,
        description=expense.description,
        date=expense.date,
        expense_id=expense.id,
    )


def apply_decision(
    expense: Expense,
    decision: ScreeningDecision,
    now: datetime | None = None,
) -> None:
    """Write a screening decision onto the expense's flag fields.

    A re-screen that no longer flags clears the previous flag.
    """
    expense.is_flagged = decision.is_flagged
    expense.flag_reason = decision.reason or None
    expense.flagged_at = (now or datetime.now(UTC)) if decision.is_flagged else None

    duplicate = next(
        (v for v in decision.details if v.rule_name == DuplicateAmountRule.rule_id), None
    )
    similar = []
    if duplicate:
        similar = [
            {"expense_id": r["expense_id"], "time_difference": r["time_difference"]}
            for r in duplicate.evidence.get("related_expenses", [])
        ]
    expense.fraud_metadata = {
        "duplicate_check": duplicate is not None,
        "similar_expenses": similar,
    }


class FraudScreeningService:
    """Screens a new or edited expense row and records the result on it.

    New rows must be passed before they are added to the session so the
    pending row can never be flushed and matched against itself.
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        store_factory: Callable[[AsyncSession], ExpenseStore] = SQLAlchemyExpenseStore,
    ) -> None:
        self._config = config or default_config
        self._store_factory = store_factory

    async def screen_expense(
        self,
        session: AsyncSession,
        expense: Expense,
        now: datetime | None = None,
    ) -> ScreeningDecision:
        # Brand-new rows have no status until flushed
        if expense.status not in (None, ExpenseStatus.PENDING.value):
            raise ExpenseReviewError(f"Expense {expense.id} has already been reviewed")

        screener = FraudScreener(self._store_factory(session), config=self._config)
        candidate = candidate_from_expense(expense)

        with session.no_autoflush:
            decision = await screener.screen(candidate)

        apply_decision(expense, decision, now)
        if expense.status is None:
            expense.status = ExpenseStatus.PENDING.value
        session.add(expense)
        await session.commit()

        logger.info(
            "expense_flags_recorded",
            expense_id=expense.id,
            user_id=expense.user_id,
            is_flagged=decision.is_flagged,
            flag_reason=decision.reason,
        )
        return decision
