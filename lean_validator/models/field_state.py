"""
FieldState — per-selection state of the field under validation.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FieldStatus(str, Enum):
    """Status of the current field selection."""

    CLEAN = "clean"
    OK = "ok"
    ERROR = "error"          # sticky until the next selection
    SKIPPED = "skipped"      # sticky until the next selection


class ErrorKind(str, Enum):
    """What kind of failure was recorded (used for metrics and logs)."""

    FIELD = "field"
    STRUCTURAL = "structural"


@dataclass
class FieldState:
    """Cursor over the raw input: current key, status and default message."""

    key: str = ""
    status: FieldStatus = FieldStatus.CLEAN
    message: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status is FieldStatus.ERROR

    @property
    def is_skipped(self) -> bool:
        return self.status is FieldStatus.SKIPPED

    @property
    def is_settled(self) -> bool:
        """True once ERROR or SKIPPED: further rules are no-ops."""
        return self.status in (FieldStatus.ERROR, FieldStatus.SKIPPED)
