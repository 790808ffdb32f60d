"""System-wide flagging statistics for review dashboards."""

import structlog

from .models import ExpenseStatus, FraudStatistics
from .store import ExpenseStore

logger = structlog.get_logger()


def fraud_rate(flagged: int, total: int) -> str:
    """Flagged share as a percentage with two decimals, or "0" for an empty store."""
    if total == 0:
        return "0"
    return f"{flagged / total * 100:.2f}"


class FraudStatisticsAggregator:
    def __init__(self, store: ExpenseStore) -> None:
        self._store = store

    async def get_statistics(self) -> FraudStatistics:
        try:
            total = await self._store.count_expenses()
            flagged = await self._store.count_expenses(is_flagged=True)
            pending = await self._store.count_expenses(
                is_flagged=True, status=ExpenseStatus.PENDING.value
            )
        except Exception:
            logger.exception("fraud_statistics_failed")
            return FraudStatistics()

        return FraudStatistics(
            total_expenses=total,
            flagged_expenses=flagged,
            pending_review=pending,
            fraud_rate=fraud_rate(flagged, total),
        )
