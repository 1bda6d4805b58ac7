# letter_wizard/models/__init__.py
"""
Data models for letter-wizard.

Field metadata, declarative rules, validation results and artifact storage.
"""

from letter_wizard.models.artifacts import (
    ArtifactRecord,
    ArtifactStatus,
    InMemoryArtifactStore,
    generate_artifact_id,
)
from letter_wizard.models.fields import (
    DOCUMENT_TYPE_LABELS,
    DocumentType,
    FieldDefinition,
    FieldFormat,
    FieldKind,
)
from letter_wizard.models.results import (
    Severity,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from letter_wizard.models.rules import (
    CardinalityRule,
    Comparison,
    ConditionalGroup,
    DateRelation,
    DateRelationshipRule,
    DateSpanBound,
    DocumentSchema,
    FieldComparison,
    FieldEquals,
    FieldFilled,
    FieldIn,
    NumericBound,
    SumBound,
)
from letter_wizard.models.store import ArtifactStore

__all__ = [
    # Fields
    "DocumentType",
    "DOCUMENT_TYPE_LABELS",
    "FieldDefinition",
    "FieldFormat",
    "FieldKind",
    # Rules
    "CardinalityRule",
    "Comparison",
    "ConditionalGroup",
    "DateRelation",
    "DateRelationshipRule",
    "DateSpanBound",
    "DocumentSchema",
    "FieldComparison",
    "FieldEquals",
    "FieldFilled",
    "FieldIn",
    "NumericBound",
    "SumBound",
    # Results
    "Severity",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    # Artifacts
    "ArtifactRecord",
    "ArtifactStatus",
    "ArtifactStore",
    "InMemoryArtifactStore",
    "generate_artifact_id",
]
