"""
Sanitizer — string clean-up applied before validation.

Every string leaf of the input runs through a rule list chosen by its dotted
field name (``user.tel``, ``items.0.code``). Fields without an explicit
schema get the global default (``utf8``, ``trim``). Field names may use
``*`` to match exactly one segment::

    s = Sanitizer().to_digits("tel", "items.*.code").skip("password")
    cleaned = s.clean(data)

Non-string values are returned untouched and the input is never mutated.
"""
import logging
import re
import unicodedata
from typing import Any, Callable, Dict, List, Optional

from lean_validator.config.constants import PATH_SEPARATOR, SANITIZER_DEFAULT_RULES, SANITIZER_WILDCARD
from lean_validator.validation.errors import LeanValidatorError

logger = logging.getLogger(__name__)

# Full-width ASCII block (！..～) sits at a fixed offset from ASCII (!..~).
_FULLWIDTH_OFFSET = 0xFEE0
_IDEOGRAPHIC_SPACE = "　"

_TO_HALFWIDTH = {code + _FULLWIDTH_OFFSET: code for code in range(0x21, 0x7F)}
_TO_HALFWIDTH[ord(_IDEOGRAPHIC_SPACE)] = ord(" ")
_TO_FULLWIDTH = {code: code + _FULLWIDTH_OFFSET for code in range(0x21, 0x7F)}
_TO_FULLWIDTH[ord(" ")] = ord(_IDEOGRAPHIC_SPACE)


class UnknownSanitizerRule(LeanValidatorError, AttributeError):
    """Raised when a sanitizer rule name is not registered."""

    def __init__(self, rule: str) -> None:
        self.rule = rule
        super().__init__(f"Sanitizer rule [{rule}] is not defined.")


# ---------------------------------------------------------------------------
# Built-in rules
# ---------------------------------------------------------------------------


def to_utf8(value: str) -> str:
    """Empty string when *value* cannot be encoded as UTF-8 (lone surrogates)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return ""
    return value


def to_trim(value: str) -> str:
    return value.strip()


def to_digits(value: str) -> str:
    return re.sub(r"[^0-9]", "", value)


def to_kana(value: str) -> str:
    """Half-width katakana to full-width (voiced marks joined), full-width ASCII to ASCII."""
    return unicodedata.normalize("NFKC", value)


def to_hankaku(value: str) -> str:
    """Full-width ASCII and ideographic spaces to their ASCII forms."""
    return value.translate(_TO_HALFWIDTH)


def to_zenkaku(value: str) -> str:
    """Full-width everything: katakana via NFKC, then ASCII and spaces."""
    return unicodedata.normalize("NFKC", value).translate(_TO_FULLWIDTH)


DEFAULT_SANITIZER_RULES: Dict[str, Callable[[str], str]] = {
    "utf8": to_utf8,
    "trim": to_trim,
    "digits": to_digits,
    "lower": str.lower,
    "upper": str.upper,
    "kana": to_kana,
    "hankaku": to_hankaku,
    "zenkaku": to_zenkaku,
}


def _wildcard_regex(pattern: str) -> "re.Pattern[str]":
    segments = [
        r"[^.]+" if segment == SANITIZER_WILDCARD else re.escape(segment)
        for segment in pattern.split(PATH_SEPARATOR)
    ]
    return re.compile(re.escape(PATH_SEPARATOR).join(segments))


class Sanitizer:
    """Per-field string clean-up rules."""

    def __init__(self, default_rules: Optional[List[str]] = None):
        self.rules: Dict[str, Callable[[str], str]] = dict(DEFAULT_SANITIZER_RULES)
        self.default_rules: List[str] = list(SANITIZER_DEFAULT_RULES if default_rules is None else default_rules)
        self.schema: Dict[str, List[str]] = {}

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def skip(self, *fields: str) -> "Sanitizer":
        """Leave *fields* untouched (passwords, raw payloads)."""
        for name in fields:
            self.schema[name] = []
        return self

    def skip_trim(self, *fields: str) -> "Sanitizer":
        for name in fields:
            self.schema[name] = ["utf8"]
        return self

    def apply(self, rule: str, *fields: str) -> "Sanitizer":
        """
        Append *rule* to the rule list of each field (default list first).

        Raises:
            UnknownSanitizerRule: If *rule* is not registered.
        """
        if rule not in self.rules:
            raise UnknownSanitizerRule(rule)
        for name in fields:
            current = self.schema.get(name, self.default_rules)
            if rule in current:
                self.schema[name] = list(current)
            else:
                self.schema[name] = [*current, rule]
        return self

    def add_rule(self, name: str, func: Callable[[str], str]) -> "Sanitizer":
        self.rules[name] = func
        return self

    def __getattr__(self, name: str) -> Any:
        # to_<rule>(*fields) shortcuts, e.g. to_digits("tel")
        if name.startswith("to_") and "rules" in self.__dict__:
            rule = name[len("to_"):]
            if rule not in self.rules:
                raise UnknownSanitizerRule(rule)
            return lambda *fields: self.apply(rule, *fields)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def clean(self, data: Any) -> Any:
        """Return a sanitized copy of *data* (dicts and lists are walked)."""
        return self._walk(data, "")

    def _walk(self, value: Any, path: str) -> Any:
        if isinstance(value, dict):
            return {key: self._walk(item, self._join(path, key)) for key, item in value.items()}
        if isinstance(value, list):
            return [self._walk(item, self._join(path, index)) for index, item in enumerate(value)]
        if not isinstance(value, str):
            return value
        for rule in self.rules_for(path):
            value = self.rules[rule](value)
        return value

    @staticmethod
    def _join(prefix: str, key: Any) -> str:
        return str(key) if prefix == "" else f"{prefix}{PATH_SEPARATOR}{key}"

    def rules_for(self, path: str) -> List[str]:
        """Rule list for a dotted field path: exact, then wildcard, then default."""
        if path in self.schema:
            return self.schema[path]
        for pattern, rules in self.schema.items():
            if SANITIZER_WILDCARD in pattern and _wildcard_regex(pattern).fullmatch(path):
                return rules
        return self.default_rules
