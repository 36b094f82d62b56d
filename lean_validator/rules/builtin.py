"""
Built-in predicate library.

Every rule has the shape ``rule(value, *args) -> bool``. Rules are looked up
by name through BUILTIN_RULES; the names are the public rule names (``in``
is a keyword, so its function is ``in_``).
"""
import re
from typing import Any, Callable, Dict, Iterable, Optional
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email


def _strict_equals(left: Any, right: Any) -> bool:
    """Equality that also requires the same type (1 != True != 1.0)."""
    return type(left) is type(right) and left == right


def _check_bounds(rule: str, *bounds: Any) -> None:
    """Reject non-integer bounds, e.g. a message passed where a bound belongs."""
    for bound in bounds:
        if bound is not None and (not isinstance(bound, int) or isinstance(bound, bool)):
            raise TypeError(f"{rule}: bounds must be int or None, got {bound!r}")


def string(value: Any) -> bool:
    return isinstance(value, str)


def int_(value: Any, min_value: Optional[int] = None, max_value: Optional[int] = None) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    if min_value is not None and value < min_value:
        return False
    if max_value is not None and value > max_value:
        return False
    return True


def float_(value: Any) -> bool:
    """Numbers, or strings that parse as a finite float."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if not isinstance(value, str) or value.strip() != value or value == "":
        return False
    try:
        parsed = float(value)
    except ValueError:
        return False
    return parsed not in (float("inf"), float("-inf")) and parsed == parsed


def email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def url(value: Any) -> bool:
    """Absolute URL with a scheme and a host."""
    if not isinstance(value, str) or any(c.isspace() for c in value):
        return False
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)


def regex(value: Any, pattern: str) -> bool:
    return isinstance(value, str) and re.search(pattern, value) is not None


def in_(value: Any, choices: Iterable[Any]) -> bool:
    return any(_strict_equals(value, choice) for choice in choices)


def contains(value: Any, needle: str) -> bool:
    return isinstance(value, str) and needle in value


def equal_to(value: Any, expect: Any) -> bool:
    return _strict_equals(value, expect)


def length(value: Any, min_length: Optional[int] = None, max_length: Optional[int] = None) -> bool:
    """Character length of a string within [min_length, max_length]."""
    _check_bounds("length", min_length, max_length)
    if not isinstance(value, str):
        return False
    size = len(value)
    if min_length is not None and size < min_length:
        return False
    if max_length is not None and size > max_length:
        return False
    return True


BUILTIN_RULES: Dict[str, Callable[..., bool]] = {
    "string": string,
    "int": int_,
    "float": float_,
    "email": email,
    "url": url,
    "regex": regex,
    "in": in_,
    "contains": contains,
    "equal_to": equal_to,
    "length": length,
}
