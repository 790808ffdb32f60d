"""Rapid-submission screening rule."""

from datetime import timedelta

from ..config import FraudConfig
from ..models import CandidateExpense, FraudVerdict
from ..store import ExpenseStore
from .base import FraudRule


class RapidSubmissionRule(FraudRule):
    """Flags an owner who already created too many records in the window.

    The window is anchored on the candidate's occurrence date, not on the
    current time, so backdated candidates are compared against records
    created around that past date.
    """

    rule_id = "rapid_submission"

    async def evaluate(
        self,
        candidate: CandidateExpense,
        store: ExpenseStore,
        config: FraudConfig,
    ) -> FraudVerdict:
        window_minutes = config.rapid.window_minutes
        created_since = candidate.date - timedelta(minutes=window_minutes)

        count = await self._query(
            store.count_created_since(
                candidate.user_id,
                created_since,
                exclude_id=candidate.expense_id,
            ),
            config,
            fallback=0,
        )

        if count < config.rapid.max_prior_submissions:
            return self._not_flagged()

        # The candidate itself is the next submission
        total = count + 1
        return self._flagged(
            reason=f"Too many submissions ({total}) within {window_minutes} minutes",
            evidence={
                "submission_count": total,
                "window_minutes": window_minutes,
                "window_start": created_since.isoformat(),
            },
        )
