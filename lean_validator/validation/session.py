"""
ValidationSession — state of one validation pass over a mapping.

Holds:
- the raw input (read-only view, never written to),
- a working overlay for substituted values (defaults, rewritten values),
- the validated output,
- the ErrorCollector,
- the current FieldState cursor.

Field status transitions per selection:

    CLEAN → OK | ERROR | SKIPPED

ERROR and SKIPPED are sticky until the next select_field(); callers check
``state.is_settled`` before applying a rule.
"""
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from lean_validator.config import settings
from lean_validator.config.constants import CURRENT_ITEM_KEY
from lean_validator.models.field_state import ErrorKind, FieldState, FieldStatus
from lean_validator.models.rule_reference import MISSING
from lean_validator.validation.error_collector import ErrorCollector
from lean_validator.validation.errors import ValidatedDataRequestedWhileInvalid
from lean_validator.validation.metrics import record_error

logger = logging.getLogger(__name__)


class ValidationSession:
    """Raw input, validated output and errors for one validation pass."""

    def __init__(self, data: Mapping[str, Any]):
        self._data: Mapping[str, Any] = MappingProxyType(dict(data))
        self._overlay: Dict[str, Any] = {}
        self._validated: Dict[str, Any] = {}
        self.errors = ErrorCollector()
        self.state = FieldState()

    @classmethod
    def from_value(cls, value: Any) -> "ValidationSession":
        """
        Build a session from any input value.

        Mappings are used as-is; strings and numbers become a single-value
        session whose cursor is already on CURRENT_ITEM_KEY; lists and tuples
        are keyed by index (``"0"``, ``"1"``, ...); anything else gives an
        empty session.
        """
        if isinstance(value, Mapping):
            return cls(value)
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            session = cls({CURRENT_ITEM_KEY: value})
            session.select_field(CURRENT_ITEM_KEY)
            return session
        if isinstance(value, (list, tuple)):
            return cls({str(index): item for index, item in enumerate(value)})
        return cls({})

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def select_field(self, key: str, message: Optional[str] = None) -> None:
        """Move the cursor to *key*; resets status for this selection only."""
        self.state = FieldState(key=key, message=message)

    @property
    def current_key(self) -> str:
        return self.state.key

    @property
    def data(self) -> Mapping[str, Any]:
        """Raw input, read-only."""
        return self._data

    def value_at(self, key: str) -> Any:
        if key in self._overlay:
            return self._overlay[key]
        return self._data.get(key)

    @property
    def current_value(self) -> Any:
        return self.value_at(self.state.key)

    def has_value(self, default: Any = MISSING) -> bool:
        """
        True iff the current value is present, not None and not "".

        When absent and *default* is supplied, the default becomes the
        working value of the key for the rest of this session.
        """
        value = self.current_value
        if value is not None and value != "":
            return True
        if default is not MISSING:
            self._overlay[self.state.key] = default
        return False

    def replace_current_value(self, value: Any) -> None:
        """Rewrite the working value of the current key (raw input untouched)."""
        self._overlay[self.state.key] = value

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _error_path(self) -> tuple:
        if self.state.key in ("", CURRENT_ITEM_KEY):
            return ()
        return (self.state.key,)

    def set_error(self, message: Optional[str] = None, kind: ErrorKind = ErrorKind.FIELD) -> None:
        """Record *message* (or the selection default) and mark the field ERROR."""
        text = message or self.state.message or settings.DEFAULT_MESSAGE
        self.errors.add(text, *self._error_path())
        self._mark_error()
        record_error(kind.value)
        logger.debug("Field '%s' failed (%s): %s", self.state.key, kind.value, text)

    def merge_errors(self, collector: ErrorCollector, *path: str) -> None:
        """Merge a child collector under *path* (default: the current key)."""
        if not path:
            path = self._error_path()
        self.errors.merge(collector, *path)
        self._mark_error()

    def _mark_error(self) -> None:
        self.state.status = FieldStatus.ERROR
        self._validated.pop(self.state.key, None)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def set_validated(self, value: Any) -> None:
        """Write *value* for the current key unless it is ERROR or SKIPPED."""
        if self.state.is_settled:
            return
        self._validated[self.state.key] = value
        self.state.status = FieldStatus.OK

    def write_default(self, value: Any) -> None:
        """Write a default/overwrite value; call before set_skipped()."""
        if self.state.is_error:
            return
        self._validated[self.state.key] = value

    def set_skipped(self) -> None:
        self.state.status = FieldStatus.SKIPPED

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def is_valid(self) -> bool:
        return self.errors.is_empty()

    def validated_data(self) -> Dict[str, Any]:
        """
        Fields that passed every applied rule.

        Raises:
            ValidatedDataRequestedWhileInvalid: If any error was recorded.
        """
        if not self.is_valid():
            raise ValidatedDataRequestedWhileInvalid(self.errors.to_dict())
        return dict(self._validated)
