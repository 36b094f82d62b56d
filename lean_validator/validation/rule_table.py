"""
RuleTable — the rules a validator can resolve by name.

Three registries:
- builtins  : name -> predicate ``fn(value, *args)``
- aliases   : name -> RuleSpec (built-in target + leading args)
- externals : name -> rule class, built with the args and called with the value

A table is injected into each Validator; ``RuleTable.default()`` gives a
fresh table with the built-in library and the default aliases, so tests and
callers can extend it without touching shared state.
"""
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate
from pydantic import ValidationError as ModelValidationError

from lean_validator.config.constants import DEFAULT_RULE_ALIASES
from lean_validator.config.schemas import RULE_TABLE_SCHEMA
from lean_validator.models.validation_report import RuleSpec
from lean_validator.rules.builtin import BUILTIN_RULES
from lean_validator.validation.errors import RuleNotFoundError, RuleTableConfigError

logger = logging.getLogger(__name__)


class RuleTable:
    """Name-based rule registries for one validator (and its children)."""

    def __init__(
        self,
        builtins: Optional[Mapping[str, Callable[..., Any]]] = None,
        aliases: Optional[Mapping[str, RuleSpec]] = None,
        externals: Optional[Mapping[str, type]] = None,
    ):
        self.builtins: Dict[str, Callable[..., Any]] = dict(builtins or {})
        self.aliases: Dict[str, RuleSpec] = {}
        self.externals: Dict[str, type] = dict(externals or {})
        for name, spec in (aliases or {}).items():
            self.register_alias(name, spec.target, *spec.args)

    @classmethod
    def default(cls) -> "RuleTable":
        table = cls(builtins=BUILTIN_RULES)
        for name, entry in DEFAULT_RULE_ALIASES.items():
            table.register_alias(name, entry["target"], *entry.get("args", []))
        return table

    @classmethod
    def from_config(cls, config: Mapping[str, Any], base: Optional["RuleTable"] = None) -> "RuleTable":
        """
        Build a table from a config mapping, on top of *base* (default table).

        Config shape (see RULE_TABLE_SCHEMA)::

            {"aliases": {"zip": {"target": "regex", "args": ["^\\\\d{3}-\\\\d{4}$"]}}}

        Raises:
            RuleTableConfigError: If the config fails schema or model checks.
            RuleNotFoundError: If an alias targets an unknown built-in.
        """
        try:
            validate(instance=dict(config), schema=RULE_TABLE_SCHEMA)
        except SchemaValidationError as e:
            raise RuleTableConfigError(e.message) from e

        table = (base or cls.default()).copy()
        for name, entry in config.get("aliases", {}).items():
            try:
                spec = RuleSpec(**entry)
            except ModelValidationError as e:
                raise RuleTableConfigError(f"alias '{name}': {e}") from e
            table.register_alias(name, spec.target, *spec.args)

        logger.debug("Rule table loaded: %d aliases", len(table.aliases))
        return table

    def copy(self) -> "RuleTable":
        clone = RuleTable(builtins=self.builtins, externals=self.externals)
        clone.aliases = dict(self.aliases)
        return clone

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_builtin(self, name: str, predicate: Callable[..., Any]) -> "RuleTable":
        self.builtins[name] = predicate
        return self

    def register_alias(self, name: str, target: str, *args: Any) -> "RuleTable":
        if target not in self.builtins:
            raise RuleNotFoundError(target)
        self.aliases[name] = RuleSpec(target=target, args=list(args))
        return self

    def register_external(self, name: str, rule_class: type) -> "RuleTable":
        self.externals[name] = rule_class
        return self

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def knows(self, name: str) -> bool:
        """True if *name* is a built-in or an alias."""
        return name in self.builtins or name in self.aliases

    def lookup(self, name: str) -> Tuple[Callable[..., Any], List[Any]]:
        """
        Resolve a built-in or alias name to ``(predicate, leading_args)``.

        Raises:
            RuleNotFoundError: If *name* is neither.
        """
        if name in self.builtins:
            return self.builtins[name], []
        spec = self.aliases.get(name)
        if spec is None:
            raise RuleNotFoundError(name)
        return self.builtins[spec.target], list(spec.args)

    def external(self, name: str) -> Optional[type]:
        return self.externals.get(name)
