"""Amount-threshold screening rule."""

from decimal import Decimal

from ..config import FraudConfig
from ..models import CandidateExpense, FraudVerdict
from ..store import ExpenseStore
from .base import FraudRule, format_amount


class AmountThresholdRule(FraudRule):
    """Flags high and very high amounts. The tiers are exclusive: a very high
    amount is reported once, as very high.

    Pure function of the amount; the store is never queried.
    """

    rule_id = "amount_threshold"

    async def evaluate(
        self,
        candidate: CandidateExpense,
        store: ExpenseStore,
        config: FraudConfig,
    ) -> FraudVerdict:
        return self.check(candidate, config)

    def check(self, candidate: CandidateExpense, config: FraudConfig) -> FraudVerdict:
        amount = candidate.amount
        shown = format_amount(amount)
        very_high = Decimal(str(config.amount.very_high))
        high = Decimal(str(config.amount.high))

        if amount >= very_high:
            return self._flagged(
                reason=f"Very high amount (${shown}) requires additional review",
                evidence={"amount": shown, "threshold": str(very_high), "tier": "very_high"},
            )

        if amount >= high:
            return self._flagged(
                reason=f"High amount (${shown}) flagged for review",
                evidence={"amount": shown, "threshold": str(high), "tier": "high"},
            )

        return self._not_flagged()
