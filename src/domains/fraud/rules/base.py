"""Abstract base class for fraud screening rules."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable
from decimal import Decimal
from typing import TypeVar

import structlog

from ..config import FraudConfig
from ..errors import ScreeningError
from ..models import CandidateExpense, FraudVerdict
from ..store import ExpenseStore

logger = structlog.get_logger()

T = TypeVar("T")


def format_amount(amount: Decimal) -> str:
    """Render an amount without trailing zeros: 5500.00 -> "5500", 125.50 -> "125.5"."""
    return f"{amount.normalize():f}"


class FraudRule(ABC):
    """Base class for all screening rules.

    Rules are async (most need store queries), read-only, and independent of
    one another. A store failure inside a rule is logged and treated as "no
    match" unless ``config.screening.fail_open`` is off.
    """

    rule_id: str

    @abstractmethod
    async def evaluate(
        self,
        candidate: CandidateExpense,
        store: ExpenseStore,
        config: FraudConfig,
    ) -> FraudVerdict:
        """Evaluate this rule and return a FraudVerdict."""
        ...

    async def _query(self, query: Awaitable[T], config: FraudConfig, fallback: T) -> T:
        try:
            return await query
        except Exception as exc:
            if not config.screening.fail_open:
                raise ScreeningError(self.rule_id, exc) from exc
            logger.exception("rule_query_failed", rule_id=self.rule_id)
            return fallback

    def _not_flagged(self) -> FraudVerdict:
        return FraudVerdict(rule_name=self.rule_id, flagged=False)

    def _flagged(self, reason: str, evidence: dict | None = None) -> FraudVerdict:
        return FraudVerdict(
            rule_name=self.rule_id,
            flagged=True,
            reason=reason,
            evidence=evidence or {},
        )
