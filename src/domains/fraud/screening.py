"""Fraud screening coordinator: runs every rule and combines the verdicts."""

import asyncio
from datetime import datetime

import structlog

from .config import FraudConfig, default_config
from .errors import InvalidCandidateError, ScreeningError
from .models import CandidateExpense, FraudVerdict, ScreeningDecision
from .rules import ALL_RULES, FraudRule
from .store import ExpenseStore

logger = structlog.get_logger()

REASON_SEPARATOR = "; "


def combine_verdicts(verdicts: list[FraudVerdict]) -> ScreeningDecision:
    """Aggregate verdicts, keeping only flagged ones in evaluation order."""
    flagged = [v for v in verdicts if v.flagged]
    return ScreeningDecision(
        is_flagged=bool(flagged),
        reason=REASON_SEPARATOR.join(v.reason for v in flagged if v.reason),
        details=flagged,
    )


class FraudScreener:
    """Screens a candidate expense against the owner's history.

    Flow:
    1. Validate the candidate (owner and amount present)
    2. Run duplicate -> pattern -> threshold -> rapid rules
    3. OR the flags, join the reasons with "; " in that order

    Screening is advisory. A rule that faults is logged and counts as not
    flagged, so ``screen`` only raises for malformed input (or, with
    fail-open disabled, for store failures).
    """

    def __init__(
        self,
        store: ExpenseStore,
        config: FraudConfig | None = None,
        rules: list[FraudRule] | None = None,
    ) -> None:
        self._store = store
        self._config = config or default_config
        self._rules = list(rules) if rules is not None else list(ALL_RULES)

        self._concurrent = self._config.screening.concurrent
        if self._concurrent and not store.supports_concurrent_reads:
            logger.warning(
                "concurrent_screening_disabled",
                store=type(store).__name__,
                reason="store does not allow concurrent reads",
            )
            self._concurrent = False

    async def screen(self, candidate: CandidateExpense) -> ScreeningDecision:
        _validate(candidate)

        if self._concurrent:
            verdicts = list(
                await asyncio.gather(*(self._run_rule(rule, candidate) for rule in self._rules))
            )
        else:
            verdicts = [await self._run_rule(rule, candidate) for rule in self._rules]

        decision = combine_verdicts(verdicts)

        logger.info(
            "expense_screened",
            user_id=candidate.user_id,
            expense_id=candidate.expense_id,
            is_flagged=decision.is_flagged,
            flagged_rules=[v.rule_name for v in decision.details],
        )
        return decision

    async def _run_rule(self, rule: FraudRule, candidate: CandidateExpense) -> FraudVerdict:
        try:
            return await rule.evaluate(candidate, self._store, self._config)
        except ScreeningError:
            raise
        except Exception as exc:
            if not self._config.screening.fail_open:
                raise ScreeningError(rule.rule_id, exc) from exc
            logger.exception("rule_evaluation_error", rule_id=rule.rule_id)
            return FraudVerdict(rule_name=rule.rule_id, flagged=False)


def _validate(candidate: CandidateExpense) -> None:
    if not candidate.user_id:
        raise InvalidCandidateError("candidate expense has no owner")
    if candidate.amount is None or candidate.amount <= 0:
        raise InvalidCandidateError("candidate expense has no positive amount")
    if not isinstance(candidate.date, datetime):
        raise InvalidCandidateError("candidate expense has no occurrence date")
