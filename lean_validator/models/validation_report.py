"""
Typed Pydantic models for validator I/O contracts.

- RuleSpec         — one alias entry of a rule-table config
- ValidationReport — outcome of a validation run, as handed to a
                     form-rendering or response layer
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class RuleSpec(BaseModel):
    """
    Alias entry: calling the alias runs *target* with *args* prepended
    to the caller's own arguments.
    """

    target: str = Field(..., min_length=1, description="Name of a built-in rule.")
    args: List[Any] = Field(default_factory=list, description="Leading arguments for the target rule.")

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: str) -> str:
        if not v.replace("_", "").isalnum():
            raise ValueError(f"target must be a rule name, got '{v}'")
        return v


class ValidationReport(BaseModel):
    """
    Result of a validation run.

    ``data`` is the validated output and is only populated when ``valid`` is
    true; ``errors``/``flat``/``messages`` are three views over the same
    collected messages.
    """

    valid: bool
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    flat: Dict[str, str] = Field(default_factory=dict, description="First message per path.")
    messages: List[str] = Field(default_factory=list, description="Every message, insertion order.")
    data: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def check_consistency(self) -> "ValidationReport":
        if self.valid and self.errors:
            raise ValueError("a valid report cannot carry errors")
        if not self.valid and self.data is not None:
            raise ValueError("an invalid report cannot carry validated data")
        return self

    def first(self, path: str) -> Optional[str]:
        return self.flat.get(path)
