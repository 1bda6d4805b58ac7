# letter_wizard/validation/engine.py
"""
Validation rule engine.

A single generic interpreter over the declarative DocumentSchema tables.
Sweeps run in a fixed order and accumulate into one result; nothing
short-circuits, so every violation for the current values is reported at once.

Sweep order:
    1. required fields
    2. formats (email, phone, national ID, numbers, dates, times, options, lengths)
    3. conditional requirements
    4. numeric / business rules
    5. date relationships and spans
    6. cardinality (witnesses, payment methods, granted powers)
"""

import logging
from collections.abc import Callable, Collection, Mapping
from datetime import date
from typing import Any

from letter_wizard.models.fields import DocumentType, FieldDefinition, FieldKind
from letter_wizard.models.results import (
    Severity,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from letter_wizard.models.rules import (
    DocumentSchema,
    FieldComparison,
    NumericBound,
    NumericRule,
    SumBound,
)
from letter_wizard.models.values import (
    is_empty,
    is_time,
    normalize_choice,
    parse_date,
    parse_number,
)
from letter_wizard.schemas.limits import MAX_FIELD_LENGTH
from letter_wizard.schemas.registry import get_schema
from letter_wizard.validation.dates import DateRelationshipValidator
from letter_wizard.validation.formats import FORMAT_MESSAGES, FORMAT_VALIDATORS

logger = logging.getLogger(__name__)


def _format_amount(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


class _Pass:
    """Accumulator for one validation pass."""

    def __init__(self, schema: DocumentSchema, values: Mapping[str, Any]) -> None:
        self.schema = schema
        self.values = values
        self.errors: list[ValidationError] = []
        self.warnings: list[ValidationWarning] = []
        self.flagged: set[str] = set()

    def enabled(self, name: str) -> bool:
        return self.schema.is_enabled(name, self.values)

    def label(self, name: str) -> str:
        definition = self.schema.get_field(name)
        return definition.label if definition else name

    def fail(self, field: str | None, message: str) -> None:
        self.errors.append(ValidationError(field=field, message=message))
        if field:
            self.flagged.add(field)

    def report(self, severity: Severity, field: str | None, message: str) -> None:
        if severity == Severity.BLOCKING:
            self.fail(field, message)
        else:
            self.warnings.append(ValidationWarning(field=field, message=message))

    def number(self, name: str) -> float | None:
        """Parsed value of an enabled, not-yet-flagged numeric field."""
        if name in self.flagged or not self.enabled(name):
            return None
        return parse_number(self.values.get(name))


class ValidationRuleEngine:
    """
    Validates form values for a document type.

    Never raises for bad input: every problem comes back as data in the
    ValidationResult. Identical inputs always produce identical results.
    """

    def __init__(
        self,
        date_validator: DateRelationshipValidator | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._dates = date_validator or DateRelationshipValidator()
        self._clock = clock

    def validate(
        self,
        document_type: "DocumentType | str | None",
        form_state: Mapping[str, Any],
        dirty_fields: Collection[str] | None = None,
        *,
        today: date | None = None,
    ) -> ValidationResult:
        """
        Run all sweeps for a document type.

        Args:
            document_type: Type whose schema applies
            form_state: Current field values
            dirty_fields: Touched fields gating date relationships (None = all)
            today: Reference date for today-based date rules

        Returns:
            ValidationResult with blocking errors and advisory warnings
        """
        schema = get_schema(document_type)
        if schema is None:
            logger.info(f"Validation requested for unknown document type {document_type!r}")
            return ValidationResult(
                errors=(ValidationError(message=f"Unknown document type: {document_type}"),)
            )

        current = _Pass(schema, form_state)
        self._required_sweep(current)
        self._format_sweep(current)
        self._conditional_sweep(current)
        self._numeric_sweep(current)
        self._date_sweep(current, dirty_fields, today or self._clock())
        self._cardinality_sweep(current)

        if current.errors or current.warnings:
            logger.debug(
                f"Validated {schema.document_type.value}: "
                f"{len(current.errors)} errors, {len(current.warnings)} warnings"
            )
        return ValidationResult(errors=tuple(current.errors), warnings=tuple(current.warnings))

    # ------------------------------------------------------------------
    # Sweeps
    # ------------------------------------------------------------------

    def _required_sweep(self, current: _Pass) -> None:
        for definition in current.schema.fields:
            if not definition.required or not current.enabled(definition.name):
                continue
            if is_empty(current.values.get(definition.name)):
                current.fail(definition.name, f"{definition.label} is required")

    def _format_sweep(self, current: _Pass) -> None:
        for definition in current.schema.fields:
            name = definition.name
            if name in current.flagged or not current.enabled(name):
                continue
            raw = current.values.get(name)
            if is_empty(raw):
                continue
            message = self._format_problem(definition, raw)
            if message:
                current.fail(name, message)

    def _format_problem(self, definition: FieldDefinition, raw: Any) -> str | None:
        """First format problem for a non-empty value, or None."""
        label = definition.label
        kind = definition.kind

        if kind == FieldKind.NUMBER:
            value = parse_number(raw)
            if value is None:
                return f"{label} must be a number"
            if definition.min_value is not None and value < definition.min_value:
                return f"{label} must be at least {_format_amount(definition.min_value)}"
            if definition.max_value is not None and value > definition.max_value:
                return f"{label} cannot exceed {_format_amount(definition.max_value)}"
            return None

        if kind == FieldKind.DATE:
            if parse_date(raw) is None:
                return f"{label} must be a valid date (YYYY-MM-DD)"
            return None

        if kind == FieldKind.TIME:
            if not is_time(raw):
                return f"{label} must be a valid time (HH:MM)"
            return None

        if kind == FieldKind.SELECT:
            if definition.options and normalize_choice(raw) not in definition.options:
                return f"{label} must be one of: {', '.join(definition.options)}"
            return None

        text = str(raw).strip()
        field_format = definition.effective_format
        if field_format is not None and not FORMAT_VALIDATORS[field_format](text):
            return FORMAT_MESSAGES[field_format]
        if definition.min_length is not None and len(text) < definition.min_length:
            return f"{label} must be at least {definition.min_length} characters"
        max_length = min(definition.max_length or MAX_FIELD_LENGTH, MAX_FIELD_LENGTH)
        if len(text) > max_length:
            return f"{label} must be at most {max_length:,} characters"
        return None

    def _conditional_sweep(self, current: _Pass) -> None:
        for group in current.schema.conditional_groups:
            if not group.is_active(current.values):
                continue
            trigger_label = current.label(group.trigger_field)
            for name in group.required_fields:
                if name in current.flagged:
                    continue
                if is_empty(current.values.get(name)):
                    current.fail(
                        name,
                        f"{current.label(name)} is required when "
                        f"{trigger_label} is {group.trigger_value}",
                    )

    def _numeric_sweep(self, current: _Pass) -> None:
        for rule in current.schema.numeric_rules:
            if getattr(rule, "applies_when", None) is not None and not rule.applies_when(
                current.values
            ):
                continue
            if self._numeric_violation(rule, current):
                current.report(rule.severity, rule.field, rule.message)

    def _numeric_violation(self, rule: NumericRule, current: _Pass) -> bool:
        if isinstance(rule, NumericBound):
            value = current.number(rule.field)
            if value is None:
                return False
            return (rule.min is not None and value < rule.min) or (
                rule.max is not None and value > rule.max
            )

        if isinstance(rule, FieldComparison):
            left = current.number(rule.field)
            right = current.number(rule.other)
            if left is None or right is None:
                return False
            return not rule.operator.holds(left, right)

        if isinstance(rule, SumBound):
            parts = [current.number(name) for name in rule.fields]
            if any(part is None for part in parts):
                return False
            return sum(parts) > rule.max

        raise ValueError(f"Unsupported numeric rule: {type(rule).__name__}")

    def _date_sweep(
        self, current: _Pass, dirty_fields: Collection[str] | None, today: date
    ) -> None:
        schema = current.schema
        rules = [
            rule
            for rule in schema.date_rules
            if all(current.enabled(name) for name in rule.participants)
        ]
        # One field may break several relations; each is reported
        flagged_earlier = set(current.flagged)
        for error in self._dates.validate(rules, current.values, dirty_fields, today):
            if error.field not in flagged_earlier:
                current.fail(error.field, error.message)

        for span in schema.date_spans:
            if not (current.enabled(span.start) and current.enabled(span.end)):
                continue
            if dirty_fields is not None and not (
                span.start in dirty_fields and span.end in dirty_fields
            ):
                continue
            start = parse_date(current.values.get(span.start))
            end = parse_date(current.values.get(span.end))
            if start is None or end is None or end < start:
                continue
            length = (end - start).days
            if (span.min_days is not None and length < span.min_days) or (
                span.max_days is not None and length > span.max_days
            ):
                current.report(span.severity, span.end, span.message)

    def _cardinality_sweep(self, current: _Pass) -> None:
        for rule in current.schema.cardinality_rules:
            if rule.applies_when is not None and not rule.applies_when(current.values):
                continue
            entries = [name for name in rule.fields if current.enabled(name)]
            missing = [name for name in entries if not rule.counts(current.values.get(name))]
            if len(entries) - len(missing) < rule.minimum:
                current.fail(missing[0] if missing else None, rule.message)
