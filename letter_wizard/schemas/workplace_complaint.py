# letter_wizard/schemas/workplace_complaint.py
"""Formal workplace grievance addressed to an employer."""

from letter_wizard.models.fields import DocumentType
from letter_wizard.models.rules import (
    ConditionalGroup,
    DateRelation,
    DateRelationshipRule,
    DateSpanBound,
    DocumentSchema,
    FieldEquals,
)
from letter_wizard.schemas.common import (
    date,
    email,
    name_field,
    national_id,
    phone,
    select,
    text,
    textarea,
    time,
    yes_no,
)

RESPONDENT_RELATIONSHIPS = ("Manager", "Colleague", "Subordinate", "Client", "Other")

COMPLAINT_CATEGORIES = (
    "Harassment",
    "Discrimination",
    "Bullying",
    "Unpaid wages",
    "Unsafe working conditions",
    "Retaliation",
    "Other",
)

SCHEMA = DocumentSchema(
    document_type=DocumentType.WORKPLACE_COMPLAINT,
    fields=(
        date("complaintDate", "Complaint Date"),
        # Complainant
        name_field("complainantName", "Your Name"),
        text("complainantPosition", "Your Position"),
        text("complainantDepartment", "Department", required=False),
        text("complainantEmployeeId", "Employee ID", required=False),
        national_id("complainantEmiratesId", "Emirates ID", required=False),
        phone("complainantPhone", "Phone"),
        email("complainantEmail", "Email"),
        # Employer
        name_field("employerName", "Employer"),
        name_field("hrContactName", "HR Contact", required=False),
        email("hrEmail", "HR Email"),
        # Respondent
        name_field("respondentName", "Person Complained About"),
        text("respondentPosition", "Their Position"),
        select("respondentRelationship", "Working Relationship", RESPONDENT_RELATIONSHIPS),
        # Incident
        select("complaintCategory", "Category", COMPLAINT_CATEGORIES),
        date("incidentDate", "Incident Date"),
        time("incidentTime", "Incident Time", required=False),
        text("incidentLocation", "Location"),
        textarea("incidentDescription", "What Happened", min_length=20),
        yes_no("witnessesPresent", "Were There Witnesses?"),
        textarea("witnessDetails", "Witness Names and Contacts", required=False),
        yes_no("evidenceAvailable", "Supporting Evidence Available?"),
        textarea("evidenceDescription", "Description of Evidence", required=False),
        yes_no("previousReports", "Reported Previously?"),
        textarea("previousReportsDetails", "Previous Report Details", required=False),
        date("previousReportDate", "Previous Report Date", required=False),
        # Outcome
        textarea("impactDescription", "Impact on You", required=False),
        textarea("desiredOutcome", "Desired Outcome", min_length=10),
        yes_no("confidentialityRequested", "Request Confidential Handling?"),
    ),
    conditional_groups=(
        ConditionalGroup(
            trigger_field="witnessesPresent",
            fields=("witnessDetails",),
            na_label="N/A - No witnesses",
        ),
        ConditionalGroup(
            trigger_field="evidenceAvailable",
            fields=("evidenceDescription",),
            na_label="N/A - No supporting evidence",
        ),
        ConditionalGroup(
            trigger_field="previousReports",
            fields=("previousReportsDetails", "previousReportDate"),
            na_label="N/A - Not previously reported",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="incidentDate",
            related_field=None,
            relation=DateRelation.NOT_IN_FUTURE,
            message="Incident date cannot be in the future",
        ),
        DateRelationshipRule(
            subject_field="incidentDate",
            related_field="complaintDate",
            relation=DateRelation.NOT_AFTER,
            message="Incident date cannot be after the complaint date",
        ),
        DateRelationshipRule(
            subject_field="previousReportDate",
            related_field="incidentDate",
            relation=DateRelation.NOT_BEFORE,
            applies_when=FieldEquals("previousReports"),
            message="Previous report cannot predate the incident",
        ),
        DateRelationshipRule(
            subject_field="previousReportDate",
            related_field="complaintDate",
            relation=DateRelation.NOT_AFTER,
            applies_when=FieldEquals("previousReports"),
            message="Previous report date cannot be after this complaint",
        ),
    ),
    date_spans=(
        DateSpanBound(
            start="incidentDate",
            end="complaintDate",
            max_days=365,
            message="Labour claims filed more than a year after the incident may be time-barred",
        ),
    ),
)
