"""Duplicate-amount screening rule."""

from datetime import timedelta

from ..config import FraudConfig
from ..models import CandidateExpense, FraudVerdict
from ..store import ExpenseStore
from .base import FraudRule, format_amount


class DuplicateAmountRule(FraudRule):
    """Flags an exact amount repeated by the same owner within +/- the window.

    The window is symmetric around the candidate's occurrence date and both
    bounds are inclusive. Amounts must be equal; there is no tolerance.
    """

    rule_id = "duplicate_amount"

    async def evaluate(
        self,
        candidate: CandidateExpense,
        store: ExpenseStore,
        config: FraudConfig,
    ) -> FraudVerdict:
        window_minutes = config.duplicate.window_minutes
        window = timedelta(minutes=window_minutes)

        matches = await self._query(
            store.find_same_amount(
                candidate.user_id,
                candidate.amount,
                candidate.date - window,
                candidate.date + window,
                exclude_id=candidate.expense_id,
            ),
            config,
            fallback=[],
        )
        if candidate.expense_id is not None:
            matches = [m for m in matches if m.expense_id != candidate.expense_id]

        if not matches:
            return self._not_flagged()

        related = [
            {
                "expense_id": m.expense_id,
                "date": m.date.isoformat(),
                "time_difference": abs((candidate.date - m.date).total_seconds()) / 60,
            }
            for m in matches
        ]

        return self._flagged(
            reason=(
                f"Duplicate amount (${format_amount(candidate.amount)}) "
                f"found within {window_minutes} minutes"
            ),
            evidence={"related_expenses": related},
        )
