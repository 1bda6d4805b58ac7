# letter_wizard/models/fields.py
"""
Field metadata for wizard forms.

FieldDefinition is declared once per document type and never mutated.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(str, Enum):
    """Closed set of supported letter/agreement types."""

    EMPLOYMENT_TERMINATION = "employment_termination"
    EMPLOYMENT_CONTRACT = "employment_contract"
    DEMAND_LETTER = "demand_letter"
    SETTLEMENT_AGREEMENT = "settlement_agreement"
    LEASE_AGREEMENT = "lease_agreement"
    LEASE_TERMINATION = "lease_termination"
    NDA = "nda"
    POWER_OF_ATTORNEY = "power_of_attorney"
    WORKPLACE_COMPLAINT = "workplace_complaint"
    GENERAL_LEGAL = "general_legal"

    @property
    def label(self) -> str:
        return DOCUMENT_TYPE_LABELS[self]

    @classmethod
    def parse(cls, value: "str | DocumentType | None") -> "DocumentType | None":
        """Return the matching member, or None for unknown/empty values."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            return None


DOCUMENT_TYPE_LABELS: dict[DocumentType, str] = {
    DocumentType.EMPLOYMENT_TERMINATION: "Employment Termination",
    DocumentType.EMPLOYMENT_CONTRACT: "Employment Contract",
    DocumentType.DEMAND_LETTER: "Demand Letter",
    DocumentType.SETTLEMENT_AGREEMENT: "Settlement Agreement",
    DocumentType.LEASE_AGREEMENT: "Lease Agreement",
    DocumentType.LEASE_TERMINATION: "Lease Termination",
    DocumentType.NDA: "Non-Disclosure Agreement",
    DocumentType.POWER_OF_ATTORNEY: "Power of Attorney",
    DocumentType.WORKPLACE_COMPLAINT: "Workplace Complaint",
    DocumentType.GENERAL_LEGAL: "General Legal Letter",
}


class FieldKind(str, Enum):
    """Input kinds exposed to renderers. Closed enumeration."""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    TEL = "tel"
    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    SELECT = "select"


class FieldFormat(str, Enum):
    """Semantic format tags checked by the format sweep."""

    EMAIL = "email"
    PHONE = "phone"
    NATIONAL_ID = "national_id"
    DIGITS = "digits"


class FieldDefinition(BaseModel):
    """Static metadata describing one form input."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Unique within the document type")
    label: str = Field(description="Human-readable label")
    kind: FieldKind = Field(default=FieldKind.TEXT, description="Input kind")
    required: bool = Field(default=False)
    options: tuple[str, ...] | None = Field(
        default=None, description="Ordered choices for select fields"
    )
    placeholder: str | None = Field(default=None)
    format: FieldFormat | None = Field(
        default=None, description="Explicit format tag (otherwise inferred)"
    )
    min_value: float | None = Field(default=None, description="Hard numeric minimum")
    max_value: float | None = Field(default=None, description="Hard numeric maximum")
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=1)

    @property
    def effective_format(self) -> FieldFormat | None:
        """Format tag from declaration, kind, or field name."""
        if self.format is not None:
            return self.format
        if self.kind == FieldKind.EMAIL:
            return FieldFormat.EMAIL
        if self.kind == FieldKind.TEL:
            return FieldFormat.PHONE
        if "EmiratesId" in self.name or "Passport" in self.name:
            return FieldFormat.NATIONAL_ID
        return None
