"""
Pipeline — one-call entry point: sanitize, validate, report.

    report = run_validation(
        payload,
        lambda v: (
            v.field("name").required().string(),
            v.field("age").optional().int(0, 150),
        ),
        sanitizer=Sanitizer().skip("password"),
    )
    if not report.valid:
        return 422, report.flat
"""
import logging
import sys
from typing import Any, Callable, Optional

from lean_validator.config import settings
from lean_validator.models.validation_report import ValidationReport
from lean_validator.sanitizer.sanitizer import Sanitizer
from lean_validator.validation.metrics import record_session, timed_validation
from lean_validator.validation.rule_table import RuleTable
from lean_validator.validation.validator import Validator

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Root logging setup for scripts; *level* defaults to settings.LOG_LEVEL."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stdout,
    )


def run_validation(
    data: Any,
    configure: Callable[[Validator], Any],
    *,
    rules: Optional[RuleTable] = None,
    sanitizer: Optional[Sanitizer] = None,
) -> ValidationReport:
    """
    Validate *data* with the fields declared by *configure*.

    Args:
        data: Parsed input (mapping, or a scalar for whole-value mode).
        configure: Called once with the validator to declare field rules.
        rules: Rule table to resolve names against. Defaults to the built-ins.
        sanitizer: When given, *data* is cleaned before validation.

    Returns:
        ValidationReport with errors, or with the validated data when valid.

    Raises:
        RuleNotFoundError: If *configure* references an unknown rule.
    """
    if sanitizer is not None:
        data = sanitizer.clean(data)

    validator = Validator(data, rules=rules)
    with timed_validation():
        configure(validator)

    report = validator.report()
    record_session(report.valid)
    if report.valid:
        logger.info("Validation passed: %d field(s)", len(report.data or {}))
    else:
        logger.info("Validation failed: %d path(s) with errors", len(report.errors))
    return report
