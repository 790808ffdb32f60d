"""Fraud screening rules package.

Exports ALL_RULES (rule instances in evaluation order) and the individual
rule classes for direct use.
"""

from .amount import AmountThresholdRule
from .base import FraudRule, format_amount
from .duplicate import DuplicateAmountRule
from .patterns import SuspiciousPatternRule
from .velocity import RapidSubmissionRule

# Evaluation order is part of the decision contract
ALL_RULES: list[FraudRule] = [
    DuplicateAmountRule(),
    SuspiciousPatternRule(),
    AmountThresholdRule(),
    RapidSubmissionRule(),
]

__all__ = [
    "ALL_RULES",
    "FraudRule",
    "format_amount",
    "AmountThresholdRule",
    "DuplicateAmountRule",
    "RapidSubmissionRule",
    "SuspiciousPatternRule",
]
