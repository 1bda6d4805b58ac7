# letter_wizard/validation/__init__.py
"""Form validation: format predicates, date relationships, the rule engine."""

from .dates import DateRelationshipValidator
from .engine import ValidationRuleEngine
from .formats import (
    FormatCheck,
    validate_digits,
    validate_email,
    validate_national_id,
    validate_phone,
)
from .sanitize import (
    sanitize_artifact_id,
    sanitize_details,
    sanitize_string,
    sanitize_title,
)

__all__ = [
    "DateRelationshipValidator",
    "ValidationRuleEngine",
    "FormatCheck",
    "validate_digits",
    "validate_email",
    "validate_national_id",
    "validate_phone",
    "sanitize_artifact_id",
    "sanitize_details",
    "sanitize_string",
    "sanitize_title",
]
