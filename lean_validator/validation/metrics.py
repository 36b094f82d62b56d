"""
Prometheus Metrics — validator observability.

Exposes counters and a histogram for:
- Recorded errors per kind (field / structural)
- Rule references that resolved to nothing
- Finished validation runs per outcome
- Validation latency

Helpers are no-ops when LEAN_VALIDATOR_METRICS_ENABLED=false.

Usage
-----
    from lean_validator.validation.metrics import record_session, timed_validation

    with timed_validation():
        configure(validator)
    record_session(validator.is_valid())
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram

from lean_validator.config import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# Recorded errors, labelled by kind ("field" / "structural").
ERRORS: Counter = Counter(
    "lean_validator_errors_total",
    "Total errors recorded by kind",
    ["kind"],
)

# Rule references that could not be resolved (programming errors).
RULE_NOT_FOUND: Counter = Counter(
    "lean_validator_rule_not_found_total",
    "Rule references that resolved to nothing",
)

# Finished validation runs, labelled by outcome ("valid" / "invalid").
SESSIONS: Counter = Counter(
    "lean_validator_sessions_total",
    "Finished validation runs by outcome",
    ["outcome"],
)

# Time spent running caller configuration against a validator (seconds).
VALIDATION_LATENCY: Histogram = Histogram(
    "lean_validator_validation_seconds",
    "Time spent validating one input in seconds",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_error(kind: str) -> None:
    """Increment the error counter for *kind*."""
    if settings.METRICS_ENABLED:
        ERRORS.labels(kind=kind).inc()


def record_rule_not_found() -> None:
    if settings.METRICS_ENABLED:
        RULE_NOT_FOUND.inc()


def record_session(valid: bool) -> None:
    """Increment the session counter with the run's outcome."""
    if settings.METRICS_ENABLED:
        SESSIONS.labels(outcome="valid" if valid else "invalid").inc()


@contextmanager
def timed_validation() -> Generator[None, None, None]:
    """
    Context manager that records validation latency.

    Usage::

        with timed_validation():
            configure(validator)
    """
    if not settings.METRICS_ENABLED:
        yield
        return
    with VALIDATION_LATENCY.time():
        yield
