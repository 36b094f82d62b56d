"""
Exceptions raised by the validator.

Field and structural failures are never raised: they are recorded in the
ErrorCollector. Only programming errors and misuse of the API surface here.
"""
from typing import Any, Dict, List


class LeanValidatorError(Exception):
    """Base class for validator exceptions."""


class RuleNotFoundError(LeanValidatorError):
    """Raised when a rule reference resolves to nothing."""

    def __init__(self, rule: Any) -> None:
        self.rule = rule
        super().__init__(f"Rule [{rule!r}] is not defined.")


class ValidatedDataRequestedWhileInvalid(LeanValidatorError):
    """Raised when validated data is read from an invalid session."""

    def __init__(self, errors: Dict[str, List[str]]) -> None:
        self.errors = errors
        super().__init__(f"Validation failed: {errors}")


class RuleTableConfigError(LeanValidatorError):
    """Raised when a rule-table config does not match RULE_TABLE_SCHEMA."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid rule table config: {reason}")
