# letter_wizard/models/results.py
"""
Validation result models.

Blocking errors and advisory warnings are two separately typed channels so
step gating can react to errors alone.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Rule severity: blocking errors gate navigation, warnings never do."""

    BLOCKING = "blocking"
    WARNING = "warning"


class ValidationError(BaseModel):
    """A blocking validation failure, optionally keyed to a field."""

    model_config = ConfigDict(frozen=True)

    field: str | None = Field(default=None, description="Field the error refers to")
    message: str = Field(description="User-facing message")
    severity: Severity = Field(default=Severity.BLOCKING)


class ValidationWarning(BaseModel):
    """A non-blocking advisory notice (typical-range heuristics)."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="User-facing message")
    field: str | None = Field(default=None, description="Field the notice refers to")


class ValidationResult(BaseModel):
    """Outcome of one full validation pass."""

    model_config = ConfigDict(frozen=True)

    errors: tuple[ValidationError, ...] = Field(default=())
    warnings: tuple[ValidationWarning, ...] = Field(default=())

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_fields(self) -> list[str]:
        """Distinct field names with errors, in error order."""
        seen: list[str] = []
        for error in self.errors:
            if error.field and error.field not in seen:
                seen.append(error.field)
        return seen

    def errors_for(self, field: str) -> list[ValidationError]:
        return [e for e in self.errors if e.field == field]
