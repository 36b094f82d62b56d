"""
RuleReference — the closed set of things a caller may pass as a rule.

    NamedRule      built-in predicate or rule-table alias, by name
    PredicateRule  ad-hoc callable, called as fn(value, *args)
                   (or fn(chain, *args) when marked with uses_chain)
    ExternalRule   rule class, built with the args and called with the value

RuleOutcome lets a rule report a rewritten value alongside pass/fail.
"""
from dataclasses import dataclass
from typing import Any, Callable, Union


class _Missing:
    """Sentinel type for "argument not supplied" (distinct from None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class NamedRule:
    name: str


@dataclass(frozen=True)
class PredicateRule:
    func: Callable[..., Any]
    binds_chain: bool = False


@dataclass(frozen=True)
class ExternalRule:
    factory: type


RuleReference = Union[NamedRule, PredicateRule, ExternalRule]


@dataclass(frozen=True)
class RuleOutcome:
    """
    Explicit result of a rule.

    A rule may return a plain bool; returning RuleOutcome lets it also
    replace the field value (e.g. a normalising rule).
    """

    passed: bool
    value: Any = MISSING

    @classmethod
    def rewrite(cls, value: Any) -> "RuleOutcome":
        return cls(passed=True, value=value)

    @classmethod
    def fail(cls) -> "RuleOutcome":
        return cls(passed=False)

    @property
    def has_value(self) -> bool:
        return self.value is not MISSING


def uses_chain(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Mark *func* as a chain-bound rule.

    The resolver calls it as ``func(chain, *args)`` so it can run other rules
    on the current field; pass/fail is then read from the field status.

    Usage::

        @uses_chain
        def upper_code(chain):
            chain.string().regex(r"^[A-Z]+$")

        v.field("code").apply(upper_code)
    """
    func.__lean_binds_chain__ = True
    return func


def binds_chain(func: Callable[..., Any]) -> bool:
    return bool(getattr(func, "__lean_binds_chain__", False))
