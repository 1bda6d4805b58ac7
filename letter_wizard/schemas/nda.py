# letter_wizard/schemas/nda.py
"""Mutual or one-way non-disclosure agreement."""

from letter_wizard.models.fields import DocumentType
from letter_wizard.models.results import Severity
from letter_wizard.models.rules import (
    ConditionalGroup,
    DateRelation,
    DateRelationshipRule,
    DocumentSchema,
    FieldEquals,
    NumericBound,
)
from letter_wizard.schemas.common import (
    address,
    date,
    email,
    emirate,
    name_field,
    number,
    select,
    text,
    textarea,
    yes_no,
)

DISPUTE_FORUMS = ("UAE Courts", "DIFC Courts", "ADGM Courts", "Arbitration (DIAC)")

SCHEMA = DocumentSchema(
    document_type=DocumentType.NDA,
    fields=(
        select("agreementType", "Agreement Type", ("Mutual", "One-way")),
        date("effectiveDate", "Effective Date"),
        date("expiryDate", "Expiry Date"),
        name_field("partyAName", "Disclosing Party"),
        address("partyAAddress", "Disclosing Party Address"),
        email("partyAEmail", "Disclosing Party Email"),
        text("partyARepresentative", "Disclosing Party Signatory", required=False),
        name_field("partyBName", "Receiving Party"),
        address("partyBAddress", "Receiving Party Address"),
        email("partyBEmail", "Receiving Party Email"),
        text("partyBRepresentative", "Receiving Party Signatory", required=False),
        textarea("purpose", "Purpose of Disclosure", min_length=10),
        textarea("confidentialInformation", "Definition of Confidential Information", min_length=10),
        textarea("exclusions", "Exclusions", required=False),
        number("confidentialityPeriodYears", "Confidentiality Period (years)", min_value=1, max_value=20),
        number("returnOfInformationDays", "Return of Information (days)", required=False, max_value=90),
        yes_no("includesNonSolicitation", "Include Non-Solicitation?"),
        number(
            "nonSolicitationDuration", "Non-Solicitation Duration (months)",
            required=False, min_value=1, max_value=36,
        ),
        textarea("nonSolicitationScope", "Non-Solicitation Scope", required=False),
        emirate("governingEmirate", "Governing Law (Emirate)"),
        select("disputeResolution", "Dispute Resolution", DISPUTE_FORUMS),
        textarea("remedies", "Remedies for Breach", required=False),
    ),
    conditional_groups=(
        ConditionalGroup(
            trigger_field="includesNonSolicitation",
            fields=("nonSolicitationDuration", "nonSolicitationScope"),
            na_label="N/A - No non-solicitation clause",
        ),
    ),
    numeric_rules=(
        NumericBound(
            field="confidentialityPeriodYears",
            max=5,
            severity=Severity.WARNING,
            message="Confidentiality obligations beyond five years may be hard to enforce",
        ),
        NumericBound(
            field="nonSolicitationDuration",
            max=12,
            severity=Severity.WARNING,
            applies_when=FieldEquals("includesNonSolicitation"),
            message="Non-solicitation periods over 12 months are often challenged",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="expiryDate",
            related_field="effectiveDate",
            relation=DateRelation.MUST_BE_AFTER,
            message="Expiry date must be after the effective date",
        ),
    ),
)
