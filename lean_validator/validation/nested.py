"""
Nested validation: objects, lists, and lists of objects.

Each nested value is validated by a child Validator built with
``Validator.spawn()``. Child errors are merged under the parent path
(``address.post_code``, ``tags.1``, ``users.2.age``); child output is
written as the parent value only when the child is valid.

Every element is evaluated before the parent decides (fail-slow), so
one call reports all failing indices.
"""
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence

from lean_validator.config import settings
from lean_validator.models.field_state import ErrorKind
from lean_validator.validation.error_collector import ErrorCollector
from lean_validator.validation.metrics import record_error

if TYPE_CHECKING:
    from lean_validator.validation.field_rules import FieldRuleChain
    from lean_validator.validation.validator import Validator

logger = logging.getLogger(__name__)


def _is_absent(value: Any) -> bool:
    return value is None


def _structural_error(chain: "FieldRuleChain", expected: str, message: Optional[str]) -> None:
    logger.warning("Field '%s' is not %s (got %s)", chain.key, expected, type(chain.value).__name__)
    chain.session.set_error(message, kind=ErrorKind.STRUCTURAL)


# ---------------------------------------------------------------------------
# as_object
# ---------------------------------------------------------------------------


def validate_object(
    chain: "FieldRuleChain",
    configure: Callable[["Validator"], Any],
    message: Optional[str] = None,
) -> None:
    """
    Validate the current field as a mapping.

    Args:
        chain: Chain of the parent field.
        configure: Called with the child validator to declare its fields.
        message: Parent error message when the value is not a mapping.
    """
    session = chain.session
    if session.state.is_settled:
        return

    value = chain.value
    if _is_absent(value):
        value = {}
    elif not isinstance(value, Mapping):
        _structural_error(chain, "an object", message)
        return

    child = chain.validator.spawn(value)
    configure(child)

    if not child.is_valid():
        logger.debug("Object '%s': %d child error(s)", chain.key, len(child.errors.all()))
        session.merge_errors(child.errors)
        return
    session.set_validated(child.validated_data())


# ---------------------------------------------------------------------------
# as_list
# ---------------------------------------------------------------------------


def validate_list(
    chain: "FieldRuleChain",
    rule: Any,
    args: Sequence[Any],
    message: Optional[str] = None,
) -> None:
    """
    Apply *rule* to every element of the current field.

    Element errors use *message*, else the parent selection message.

    Raises:
        RuleNotFoundError: If *rule* cannot be resolved.
    """
    session = chain.session
    if session.state.is_settled:
        return

    value = chain.value
    if _is_absent(value):
        session.set_validated([])
        return
    if not isinstance(value, (list, tuple)):
        _structural_error(chain, "a list", message)
        return

    element_message = message or session.state.message
    child = chain.validator.spawn({str(index): item for index, item in enumerate(value)})
    for index in range(len(value)):
        child.field(str(index), element_message).apply(rule, *args)

    if not child.is_valid():
        logger.debug("List '%s': %d element error(s)", chain.key, len(child.errors.paths()))
        session.merge_errors(child.errors)
        return
    validated = child.validated_data()
    # skipped elements write nothing and are left out
    keys = (str(index) for index in range(len(value)))
    session.set_validated([validated[key] for key in keys if key in validated])


# ---------------------------------------------------------------------------
# as_list_object
# ---------------------------------------------------------------------------


def validate_list_object(
    chain: "FieldRuleChain",
    configure: Callable[["Validator"], Any],
    message: Optional[str] = None,
) -> None:
    """
    Validate the current field as a list of mappings.

    Non-mapping elements get ``settings.NOT_AN_OBJECT_MESSAGE`` at their
    index; mapping elements are validated by their own child validator.
    """
    session = chain.session
    if session.state.is_settled:
        return

    value = chain.value
    if _is_absent(value):
        session.set_validated([])
        return
    if not isinstance(value, (list, tuple)):
        _structural_error(chain, "a list", message)
        return

    collected = ErrorCollector()
    validated: List[Dict[str, Any]] = []
    for index, item in enumerate(value):
        if not isinstance(item, Mapping):
            collected.add(settings.NOT_AN_OBJECT_MESSAGE, index)
            record_error(ErrorKind.STRUCTURAL.value)
            continue
        child = chain.validator.spawn(item)
        configure(child)
        if child.is_valid():
            validated.append(child.validated_data())
        else:
            collected.merge(child.errors, index)

    if not collected.is_empty():
        logger.debug("List '%s': %d object error(s)", chain.key, len(collected.paths()))
        session.merge_errors(collected)
        return
    session.set_validated(validated)
