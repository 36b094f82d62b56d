"""
FieldRuleChain — fluent rule applications bound to the selected field.

Returned by ``Validator.field(key)``. Every operation first checks the
field status: once ERROR or SKIPPED, it is a no-op returning the chain.

    v.field("age", "Age must be 18-99").required().int(18, 99)
    v.field("nickname").optional("Guest").string()
    v.field("address").as_object(configure_address)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional

from lean_validator.config import settings
from lean_validator.models.rule_reference import MISSING, RuleOutcome
from lean_validator.validation import nested

if TYPE_CHECKING:
    from lean_validator.validation.validator import Validator


def _strict_equals(left: Any, right: Any) -> bool:
    return type(left) is type(right) and left == right


def _matches(value: Any, expect: Any) -> bool:
    if isinstance(expect, (list, tuple, set, frozenset)):
        return any(_strict_equals(value, item) for item in expect)
    return _strict_equals(value, expect)


class FieldRuleChain:
    """Rules for the field currently selected on a Validator."""

    def __init__(self, validator: "Validator"):
        self.validator = validator
        self.session = validator.session
        self.resolver = validator.resolver

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def key(self) -> str:
        return self.session.current_key

    @property
    def value(self) -> Any:
        return self.session.current_value

    def has_value(self) -> bool:
        return self.session.has_value()

    def is_error(self) -> bool:
        return self.session.state.is_error

    def is_ok(self) -> bool:
        return not self.session.state.is_error

    def message(self, msg: str) -> FieldRuleChain:
        """Set the default error message for the rest of this selection."""
        self.session.state.message = msg
        return self

    def set_error(self, message: Optional[str] = None) -> FieldRuleChain:
        """Fail the field directly (for chain-bound rules)."""
        if not self.session.state.is_settled:
            self.session.set_error(message)
        return self

    # ------------------------------------------------------------------
    # Generic application
    # ------------------------------------------------------------------

    def apply(self, rule: Any, *args: Any, message: Optional[str] = None) -> FieldRuleChain:
        """
        Apply *rule* (name, callable, rule class or RuleReference).

        A rule fails by returning False or ``RuleOutcome(passed=False)``;
        ``RuleOutcome.rewrite(v)`` passes and replaces the field value.

        Raises:
            RuleNotFoundError: If *rule* cannot be resolved.
        """
        if self.session.state.is_settled:
            return self
        result, text = self.resolver.invoke(self, rule, args, message)
        self._settle(result, text)
        return self

    def rule(self, name: str, *args: Any, message: Optional[str] = None) -> FieldRuleChain:
        """Apply a rule by name (built-in, alias or external)."""
        return self.apply(name, *args, message=message)

    def _settle(self, result: Any, message: Optional[str]) -> None:
        state = self.session.state
        # chain-bound rules may have settled the field themselves
        if state.is_settled:
            return
        if isinstance(result, RuleOutcome):
            if not result.passed:
                self.session.set_error(message)
                return
            if result.has_value:
                self.session.replace_current_value(result.value)
        elif result is False:
            self.session.set_error(message)
            return
        self.session.set_validated(self.session.current_value)

    # ------------------------------------------------------------------
    # Built-in rule shortcuts
    # ------------------------------------------------------------------

    def string(self, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("string", message=message)

    def int(self, min_value=None, max_value=None, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("int", min_value, max_value, message=message)

    def float(self, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("float", message=message)

    def email(self, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("email", message=message)

    def url(self, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("url", message=message)

    def regex(self, pattern: str, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("regex", pattern, message=message)

    def in_(self, choices: Iterable[Any], message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("in", choices, message=message)

    def contains(self, needle: str, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("contains", needle, message=message)

    def equal_to(self, expect: Any, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("equal_to", expect, message=message)

    def length(self, min_length=None, max_length=None, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("length", min_length, max_length, message=message)

    def alnum(self, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("alnum", message=message)

    def alpha(self, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("alpha", message=message)

    def numeric(self, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("numeric", message=message)

    def alpha_dash(self, message: Optional[str] = None) -> FieldRuleChain:
        return self.apply("alpha_dash", message=message)

    def array_count(
        self,
        min_count: Optional[int] = 1,
        max_count: Optional[int] = None,
        message: Optional[str] = settings.ARRAY_COUNT_MESSAGE,
    ) -> FieldRuleChain:
        """Value must be a list with a length in [min_count, max_count]."""
        if self.session.state.is_settled:
            return self
        value = self.value
        if (
            not isinstance(value, (list, tuple))
            or (min_count is not None and len(value) < min_count)
            or (max_count is not None and len(value) > max_count)
        ):
            self.session.set_error(message)
            return self
        self.session.set_validated(value)
        return self

    # ------------------------------------------------------------------
    # required / optional
    # ------------------------------------------------------------------

    def required(self, message: Optional[str] = None) -> FieldRuleChain:
        if self.session.state.is_settled:
            return self
        if not self.session.has_value():
            self.session.set_error(message or self.session.state.message or settings.REQUIRED_MESSAGE)
            return self
        self.session.set_validated(self.value)
        return self

    def optional(self, default: Any = MISSING) -> FieldRuleChain:
        """
        Skip the remaining rules when the field has no value.

        With *default* (None included), the default is written to the
        output and becomes the working value of the field.
        """
        if self.session.state.is_settled:
            return self
        if self.session.has_value(default):
            return self
        if default is not MISSING:
            self.session.write_default(default)
        self.session.set_skipped()
        return self

    def required_when(
        self,
        condition: Callable[[Mapping[str, Any]], bool],
        message: Optional[str] = None,
        else_overwrite: Any = MISSING,
    ) -> FieldRuleChain:
        """
        Required when ``condition(raw_input)`` is true.

        Otherwise the field is optional, or, when *else_overwrite* is supplied
        (None included), that value is written and the field is skipped.
        """
        if self.session.state.is_settled:
            return self
        if condition(self.session.data):
            return self.required(message)
        if else_overwrite is not MISSING:
            self.session.write_default(else_overwrite)
            self.session.set_skipped()
            return self
        return self.optional()

    def required_if(
        self,
        other_key: str,
        expect: Any,
        message: Optional[str] = None,
        else_overwrite: Any = MISSING,
    ) -> FieldRuleChain:
        """Required when raw ``other_key`` equals *expect* (or is one of them)."""
        return self.required_when(
            lambda data: _matches(data.get(other_key), expect),
            message,
            else_overwrite,
        )

    def required_unless(
        self,
        other_key: str,
        expect: Any,
        message: Optional[str] = None,
        else_overwrite: Any = MISSING,
    ) -> FieldRuleChain:
        return self.required_when(
            lambda data: not _matches(data.get(other_key), expect),
            message,
            else_overwrite,
        )

    def required_with(
        self,
        other_key: str,
        message: Optional[str] = None,
        else_overwrite: Any = MISSING,
    ) -> FieldRuleChain:
        """Required when ``other_key`` is present in the input (even as None)."""
        return self.required_when(lambda data: other_key in data, message, else_overwrite)

    def required_without(
        self,
        other_key: str,
        message: Optional[str] = None,
        else_overwrite: Any = MISSING,
    ) -> FieldRuleChain:
        return self.required_when(lambda data: other_key not in data, message, else_overwrite)

    # ------------------------------------------------------------------
    # Nesting
    # ------------------------------------------------------------------

    def as_object(self, configure: Callable[["Validator"], Any], message: Optional[str] = None) -> FieldRuleChain:
        """Validate a nested mapping with *configure(child_validator)*."""
        nested.validate_object(self, configure, message)
        return self

    def as_list(self, rule: Any, *args: Any, message: Optional[str] = None) -> FieldRuleChain:
        """Apply *rule* to every element of a list."""
        nested.validate_list(self, rule, args, message)
        return self

    def as_list_object(self, configure: Callable[["Validator"], Any], message: Optional[str] = None) -> FieldRuleChain:
        """Validate every mapping of a list with *configure(child_validator)*."""
        nested.validate_list_object(self, configure, message)
        return self
