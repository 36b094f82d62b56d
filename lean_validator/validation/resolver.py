"""
RuleResolver — turns a rule reference plus arguments into a call.

Classification (first match wins):
    1. str naming a built-in or alias                  -> NamedRule
    2. callable whose __name__ names a built-in/alias  -> NamedRule
    3. class                                           -> ExternalRule
       any other callable                              -> PredicateRule
    4. str naming a registered external rule class     -> ExternalRule
Anything else raises RuleNotFoundError.

Trailing-message convention: when a rule declares N positional parameters
(besides the value) and N+1 arguments are supplied with a str last, that
last argument is the error message and is not forwarded to the rule.
"""
import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Tuple

from lean_validator.models.rule_reference import (
    ExternalRule,
    NamedRule,
    PredicateRule,
    RuleReference,
    binds_chain,
)
from lean_validator.validation.errors import RuleNotFoundError
from lean_validator.validation.metrics import record_rule_not_found
from lean_validator.validation.rule_table import RuleTable

if TYPE_CHECKING:
    from lean_validator.validation.field_rules import FieldRuleChain

logger = logging.getLogger(__name__)


def rule_name(func: Any) -> Optional[str]:
    """Public rule name of a callable (``in_`` -> ``in``), if it has one."""
    name = getattr(func, "__name__", None)
    if not isinstance(name, str):
        return None
    return name.rstrip("_") or None


def declared_arity(func: Callable[..., Any], leading: int) -> Optional[int]:
    """
    Positional parameters of *func* after the first *leading* ones.

    None when it cannot be known (no signature, or ``*args``).
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count - leading


def split_message(args: Sequence[Any], arity: Optional[int]) -> Tuple[Tuple[Any, ...], Optional[str]]:
    """Separate a trailing message argument from the rule arguments."""
    args = tuple(args)
    if arity is not None and len(args) == arity + 1 and isinstance(args[-1], str):
        return args[:-1], args[-1]
    return args, None


class RuleResolver:
    """Classifies rule references against a RuleTable and invokes them."""

    def __init__(self, rules: RuleTable):
        self.rules = rules

    def classify(self, rule: Any) -> RuleReference:
        """
        Map *rule* onto the RuleReference union.

        Raises:
            RuleNotFoundError: If *rule* resolves to nothing.
        """
        if isinstance(rule, (NamedRule, PredicateRule, ExternalRule)):
            return rule

        if isinstance(rule, str):
            if self.rules.knows(rule):
                return NamedRule(rule)
            external = self.rules.external(rule)
            if external is not None:
                return ExternalRule(external)
            self._not_found(rule)

        if callable(rule):
            name = rule_name(rule)
            if name is not None and self.rules.knows(name):
                return NamedRule(name)
            if isinstance(rule, type):
                return ExternalRule(rule)
            return PredicateRule(rule, binds_chain(rule))

        self._not_found(rule)

    def invoke(
        self,
        chain: "FieldRuleChain",
        rule: Any,
        args: Sequence[Any],
        message: Optional[str] = None,
    ) -> Tuple[Any, Optional[str]]:
        """
        Run *rule* against the chain's current field.

        Returns:
            ``(result, message)`` where *result* is the raw rule return value
            and *message* the explicit or trailing error message, if any.
        """
        reference = self.classify(rule)
        value = chain.value

        if isinstance(reference, NamedRule):
            func, leading = self.rules.lookup(reference.name)
            call_args, trailing = split_message((*leading, *args), declared_arity(func, 1))
            logger.debug("Rule '%s' on '%s'", reference.name, chain.key)
            return func(value, *call_args), message or trailing

        if isinstance(reference, PredicateRule):
            call_args, trailing = split_message(args, declared_arity(reference.func, 1))
            target = chain if reference.binds_chain else value
            return reference.func(target, *call_args), message or trailing

        call_args, trailing = split_message(args, declared_arity(reference.factory, 0))
        instance = reference.factory(*call_args)
        logger.debug("External rule %s on '%s'", reference.factory.__name__, chain.key)
        return instance(value), message or trailing

    def _not_found(self, rule: Any) -> None:
        record_rule_not_found()
        logger.error("Rule [%r] is not defined", rule)
        raise RuleNotFoundError(rule)
