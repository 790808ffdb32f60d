"""Exceptions raised by the fraud screening domain."""


class InvalidCandidateError(ValueError):
    """The candidate expense is missing its owner or a usable amount."""


class ScreeningError(RuntimeError):
    """A rule could not query the expense store while fail-open is disabled."""

    def __init__(self, rule_name: str, cause: BaseException) -> None:
        super().__init__(f"{rule_name} failed: {cause}")
        self.rule_name = rule_name
        self.cause = cause
