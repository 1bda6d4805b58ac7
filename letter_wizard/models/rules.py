# letter_wizard/models/rules.py
"""
Declarative rule objects interpreted by the validation engine.

Every rule is immutable data. Conditions are small callable objects over the
current form values so rule tables stay declarative and comparable.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from letter_wizard.models.fields import DocumentType, FieldDefinition
from letter_wizard.models.results import Severity
from letter_wizard.models.values import is_empty, normalize_choice

Condition = Callable[[Mapping[str, Any]], bool]


@dataclass(frozen=True)
class FieldEquals:
    """Condition: field value equals `value` (string comparison, trimmed)."""

    field: str
    value: str = "Yes"

    def __call__(self, values: Mapping[str, Any]) -> bool:
        return normalize_choice(values.get(self.field)) == self.value


@dataclass(frozen=True)
class FieldIn:
    """Condition: field value is one of `values`."""

    field: str
    values: tuple[str, ...]

    def __call__(self, values: Mapping[str, Any]) -> bool:
        return normalize_choice(values.get(self.field)) in self.values


@dataclass(frozen=True)
class FieldFilled:
    """Condition: field has a non-empty value."""

    field: str

    def __call__(self, values: Mapping[str, Any]) -> bool:
        return not is_empty(values.get(self.field))


class DateRelation(str, Enum):
    """Supported date relationships."""

    NOT_AFTER = "not_after"
    NOT_BEFORE = "not_before"
    MUST_BE_AFTER = "must_be_after"
    WITHIN_DAYS = "within_days"
    NOT_IN_FUTURE = "not_in_future"
    NOT_OLDER_THAN_MONTHS = "not_older_than_months"

    @property
    def uses_reference_date(self) -> bool:
        """True for relations that compare against today instead of a field."""
        return self in (DateRelation.NOT_IN_FUTURE, DateRelation.NOT_OLDER_THAN_MONTHS)


@dataclass(frozen=True)
class DateRelationshipRule:
    """
    Ordering constraint between two date fields (or a field and today).

    Attributes:
        subject_field: Date being checked
        related_field: Date compared against (None for today-based relations)
        relation: Relationship kind
        days: Day count for WITHIN_DAYS, month count for NOT_OLDER_THAN_MONTHS
        min_days: Minimum gap for MUST_BE_AFTER
        min_days_field: Form field overriding min_days when filled
        applies_when: Optional condition over current values
        message: User-facing error text
    """

    subject_field: str
    related_field: str | None
    relation: DateRelation
    message: str
    days: int | None = None
    min_days: int | None = None
    min_days_field: str | None = None
    applies_when: Condition | None = None

    @property
    def participants(self) -> tuple[str, ...]:
        if self.related_field is None:
            return (self.subject_field,)
        return (self.subject_field, self.related_field)


@dataclass(frozen=True)
class ConditionalGroup:
    """
    Fields gated by a Yes/No style trigger.

    While the trigger matches, the controlled fields are enabled and the
    `required` subset (all controlled fields by default) must be filled.
    """

    trigger_field: str
    fields: tuple[str, ...]
    na_label: str
    trigger_value: str = "Yes"
    required: tuple[str, ...] | None = None

    def is_active(self, values: Mapping[str, Any]) -> bool:
        return normalize_choice(values.get(self.trigger_field)) == self.trigger_value

    @property
    def required_fields(self) -> tuple[str, ...]:
        return self.fields if self.required is None else self.required


@dataclass(frozen=True)
class NumericBound:
    """Bound on a single numeric field. Warnings model typical-range heuristics."""

    field: str
    message: str
    min: float | None = None
    max: float | None = None
    severity: Severity = Severity.BLOCKING
    applies_when: Condition | None = None


class Comparison(str, Enum):
    LE = "<="
    LT = "<"
    GE = ">="
    GT = ">"

    def holds(self, left: float, right: float) -> bool:
        if self is Comparison.LE:
            return left <= right
        if self is Comparison.LT:
            return left < right
        if self is Comparison.GE:
            return left >= right
        return left > right


@dataclass(frozen=True)
class FieldComparison:
    """Relation between two numeric fields, e.g. basic salary <= total pay."""

    field: str
    other: str
    operator: Comparison
    message: str
    severity: Severity = Severity.BLOCKING
    applies_when: Condition | None = None


@dataclass(frozen=True)
class SumBound:
    """Upper bound on the sum of several numeric fields."""

    fields: tuple[str, ...]
    max: float
    message: str
    severity: Severity = Severity.BLOCKING

    @property
    def field(self) -> str:
        return self.fields[-1]


@dataclass(frozen=True)
class DateSpanBound:
    """Length of a start/end span, usually advisory (e.g. short lease)."""

    start: str
    end: str
    message: str
    min_days: int | None = None
    max_days: int | None = None
    severity: Severity = Severity.WARNING


@dataclass(frozen=True)
class CardinalityRule:
    """
    At least `minimum` of the listed entries must count.

    An entry counts when filled, or when equal to `value` if one is given.
    """

    fields: tuple[str, ...]
    minimum: int
    message: str
    value: str | None = None
    applies_when: Condition | None = None

    def counts(self, raw: Any) -> bool:
        if self.value is None:
            return not is_empty(raw)
        return normalize_choice(raw) == self.value


NumericRule = NumericBound | FieldComparison | SumBound


@dataclass(frozen=True)
class DocumentSchema:
    """Complete declarative description of one document type."""

    document_type: DocumentType
    fields: tuple[FieldDefinition, ...]
    conditional_groups: tuple[ConditionalGroup, ...] = ()
    numeric_rules: tuple[NumericRule, ...] = ()
    date_rules: tuple[DateRelationshipRule, ...] = ()
    date_spans: tuple[DateSpanBound, ...] = ()
    cardinality_rules: tuple[CardinalityRule, ...] = ()
    _by_name: dict[str, FieldDefinition] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(
                f"Duplicate field names in {self.document_type.value}: {sorted(duplicates)}"
            )
        self._by_name.update({f.name: f for f in self.fields})

    def get_field(self, name: str) -> FieldDefinition | None:
        return self._by_name.get(name)

    def group_for(self, field_name: str) -> ConditionalGroup | None:
        """Conditional group controlling `field_name`, if any."""
        for group in self.conditional_groups:
            if field_name in group.fields:
                return group
        return None

    def is_enabled(self, field_name: str, values: Mapping[str, Any]) -> bool:
        group = self.group_for(field_name)
        return group is None or group.is_active(values)
