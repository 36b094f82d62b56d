"""
Validator — public entry point for validating one input.

Usage
-----
    v = Validator({"age": 25, "address": {"post_code": "123-4567"}})
    v.field("age", "Age must be 18-99").required().int(18, 99)
    v.field("address").as_object(lambda a: a.field("post_code").required().regex(r"^\\d{3}-\\d{4}$"))
    if v.is_valid():
        data = v.validated_data()
    else:
        errors = v.errors_flat()

A scalar input is validated in whole-value mode: the cursor is already on
the value, so chain operations are called on the validator itself::

    Validator(25).int(18, 99).is_ok()
"""
from typing import Any, Dict, Optional

from lean_validator.models.validation_report import ValidationReport
from lean_validator.validation.error_collector import ErrorCollector
from lean_validator.validation.field_rules import FieldRuleChain
from lean_validator.validation.resolver import RuleResolver
from lean_validator.validation.rule_table import RuleTable
from lean_validator.validation.session import ValidationSession


class Validator:
    """Selects fields and collects the outcome of their rule chains."""

    def __init__(self, data: Any = None, rules: Optional[RuleTable] = None):
        self.session = ValidationSession.from_value({} if data is None else data)
        self.rules = rules if rules is not None else RuleTable.default()
        self.resolver = RuleResolver(self.rules)

    @classmethod
    def make(cls, data: Any = None, rules: Optional[RuleTable] = None) -> "Validator":
        return cls(data, rules=rules)

    def field(self, key: str, message: Optional[str] = None) -> FieldRuleChain:
        """Select *key*; *message* is the default error message for its rules."""
        self.session.select_field(key, message)
        return FieldRuleChain(self)

    def spawn(self, value: Any) -> "Validator":
        """Child validator over *value* sharing this validator's rule table."""
        return type(self)(value, rules=self.rules)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def is_valid(self) -> bool:
        return self.session.is_valid()

    def validated_data(self) -> Dict[str, Any]:
        """
        Validated output.

        Raises:
            ValidatedDataRequestedWhileInvalid: If any error was recorded.
        """
        return self.session.validated_data()

    @property
    def errors(self) -> ErrorCollector:
        return self.session.errors

    def errors_flat(self) -> Dict[str, str]:
        return self.session.errors.flat()

    def is_current_ok(self) -> bool:
        return not self.session.state.is_error

    def is_current_error(self) -> bool:
        return self.session.state.is_error

    def report(self) -> ValidationReport:
        """Snapshot of the current outcome as a ValidationReport."""
        valid = self.is_valid()
        return ValidationReport(
            valid=valid,
            errors=self.errors.to_dict(),
            flat=self.errors.flat(),
            messages=self.errors.all(),
            data=self.validated_data() if valid else None,
        )

    def __getattr__(self, name: str) -> Any:
        # whole-value mode: chain operations on the validator itself
        if name.startswith("_") or "session" not in self.__dict__:
            raise AttributeError(name)
        chain = FieldRuleChain(self)
        try:
            return getattr(chain, name)
        except AttributeError:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'") from None
