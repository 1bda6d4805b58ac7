# letter_wizard/schemas/general_legal.py
"""Free-form legal correspondence."""

from letter_wizard.models.fields import DocumentType
from letter_wizard.models.rules import (
    ConditionalGroup,
    DateRelation,
    DateRelationshipRule,
    DateSpanBound,
    DocumentSchema,
)
from letter_wizard.schemas.common import (
    address,
    date,
    digits,
    email,
    emirate,
    name_field,
    phone,
    select,
    text,
    textarea,
    yes_no,
)

LETTER_PURPOSES = ("Notice", "Request", "Response", "Complaint", "Demand", "Information")

SCHEMA = DocumentSchema(
    document_type=DocumentType.GENERAL_LEGAL,
    fields=(
        date("letterDate", "Letter Date"),
        name_field("senderName", "Sender Name"),
        text("senderTitle", "Sender Title", required=False),
        text("senderOrganization", "Sender Organization", required=False),
        address("senderAddress", "Sender Address"),
        phone("senderPhone", "Sender Phone"),
        email("senderEmail", "Sender Email"),
        name_field("recipientName", "Recipient Name"),
        text("recipientTitle", "Recipient Title", required=False),
        text("recipientOrganization", "Recipient Organization", required=False),
        address("recipientAddress", "Recipient Address"),
        phone("recipientPhone", "Recipient Phone", required=False),
        email("recipientEmail", "Recipient Email", required=False),
        text("subject", "Subject", min_length=5, max_length=200),
        select("letterPurpose", "Purpose", LETTER_PURPOSES),
        digits("referenceNumber", "Reference Number", required=False),
        textarea("background", "Background", min_length=20),
        textarea("mainContent", "Main Content", min_length=20),
        textarea("legalBasis", "Legal Basis", required=False),
        textarea("requestedAction", "Requested Action", required=False),
        yes_no("responseRequired", "Response Required?"),
        date("responseDeadline", "Response Deadline", required=False),
        textarea("attachments", "Enclosures", required=False),
        text("ccRecipients", "CC", required=False),
        emirate(required=False),
    ),
    conditional_groups=(
        ConditionalGroup(
            trigger_field="responseRequired",
            fields=("responseDeadline",),
            na_label="N/A - No response required",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="responseDeadline",
            related_field="letterDate",
            relation=DateRelation.MUST_BE_AFTER,
            message="Response deadline must be after the letter date",
        ),
    ),
    date_spans=(
        DateSpanBound(
            start="letterDate",
            end="responseDeadline",
            min_days=7,
            message="Allow the recipient at least 7 days to respond",
        ),
    ),
)
