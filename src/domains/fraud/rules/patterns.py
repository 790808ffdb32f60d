"""Suspicious-pattern screening rule: round amounts and repeated descriptions."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from ..config import FraudConfig
from ..models import CandidateExpense, FraudVerdict
from ..store import ExpenseStore
from .base import FraudRule

ROUND_NUMBER = "Round number amount"
SIMILAR_DESCRIPTIONS = "Similar descriptions in recent submissions"


class SuspiciousPatternRule(FraudRule):
    """Two independent sub-checks reported as one verdict.

    The round-number check is a low-confidence signal; a legitimate $100
    purchase trips it too.
    """

    rule_id = "suspicious_pattern"

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))

    async def evaluate(
        self,
        candidate: CandidateExpense,
        store: ExpenseStore,
        config: FraudConfig,
    ) -> FraudVerdict:
        fragments: list[str] = []

        is_round = any(candidate.amount % d == 0 for d in config.patterns.round_divisors)
        if is_round:
            fragments.append(ROUND_NUMBER)

        # A blank description would match every record
        similar = []
        if candidate.description:
            # Lookback runs on creation time, relative to now
            created_since = self._clock() - timedelta(
                days=config.patterns.description_lookback_days
            )
            similar = await self._query(
                store.find_similar_descriptions(
                    candidate.user_id,
                    candidate.description,
                    created_since,
                    exclude_id=candidate.expense_id,
                ),
                config,
                fallback=[],
            )
        if candidate.expense_id is not None:
            similar = [s for s in similar if s.expense_id != candidate.expense_id]

        if len(similar) > config.patterns.similar_description_max:
            fragments.append(SIMILAR_DESCRIPTIONS)

        if not fragments:
            return self._not_flagged()

        return self._flagged(
            reason="; ".join(fragments),
            evidence={
                "round_number": is_round,
                "similar_count": len(similar),
                "similar_expense_ids": [s.expense_id for s in similar],
            },
        )
