# letter_wizard/schemas/lease_termination.py
"""Notice terminating a tenancy."""

from letter_wizard.models.fields import DocumentType
from letter_wizard.models.results import Severity
from letter_wizard.models.rules import (
    DateRelation,
    DateRelationshipRule,
    DocumentSchema,
    NumericBound,
)
from letter_wizard.schemas.common import (
    amount,
    date,
    email,
    emirate,
    name_field,
    number,
    party,
    select,
    text,
    textarea,
    time,
)
from letter_wizard.schemas.limits import (
    MIN_LEASE_TERMINATION_NOTICE_DAYS,
    RENEWAL_CHANGE_NOTICE_DAYS,
)

DELIVERY_METHODS = (
    "Registered mail",
    "Courier",
    "Hand delivery",
    "Email",
    "Notary public",
)

TERMINATION_REASONS = (
    "End of lease term",
    "Breach of contract",
    "Non-payment of rent",
    "Owner's personal use",
    "Property sale",
    "Demolition or renovation",
    "Mutual agreement",
)

SCHEMA = DocumentSchema(
    document_type=DocumentType.LEASE_TERMINATION,
    fields=(
        text("noticeReference", "Notice Reference", required=False),
        date("noticeDate", "Notice Date"),
        select("deliveryMethod", "Delivery Method", DELIVERY_METHODS),
        *party("landlord", "Landlord", with_id=False),
        *party("tenant", "Tenant", with_id=False),
        # Property and lease
        text("propertyAddress", "Property Address", min_length=10),
        text("unitNumber", "Unit Number", required=False),
        text("ejariNumber", "Ejari / Tawtheeq Number", required=False),
        date("originalLeaseDate", "Original Lease Date"),
        date("leaseStartDate", "Current Term Start Date"),
        date("leaseEndDate", "Current Term End Date"),
        # Termination
        select("terminationReason", "Reason for Termination", TERMINATION_REASONS),
        textarea("terminationDescription", "Details", min_length=10),
        number("noticePeriodDays", "Notice Period Given (days)"),
        number("minNoticePeriod", "Minimum Notice Required (days)", required=False),
        date("terminationDate", "Termination Date"),
        # Handover
        number("keysToReturn", "Number of Keys to Return", required=False, max_value=50),
        date("inspectionDate", "Move-out Inspection Date", required=False),
        time("inspectionTime", "Inspection Time", required=False),
        amount("securityDeposit", "Security Deposit Held (AED)", required=False, min_value=0),
        number("depositReturnDays", "Deposit Refund Within (days)", required=False, max_value=90),
        amount("outstandingRent", "Outstanding Rent (AED)", required=False, min_value=0),
        amount("totalAmountDue", "Total Amount Due (AED)", required=False, min_value=0),
        date("paymentDeadline", "Payment Deadline", required=False),
        emirate(),
        name_field("witnessName", "Witness Name", required=False),
        email("dataProtectionEmail", "Data Protection Contact Email", required=False),
    ),
    numeric_rules=(
        NumericBound(
            field="noticePeriodDays",
            min=RENEWAL_CHANGE_NOTICE_DAYS,
            severity=Severity.WARNING,
            message="Eviction at the end of term usually requires at least 90 days notice",
        ),
        NumericBound(
            field="depositReturnDays",
            max=30,
            severity=Severity.WARNING,
            message="Security deposits are usually refunded within 30 days",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="noticeDate",
            related_field=None,
            relation=DateRelation.NOT_IN_FUTURE,
            message="Notice date cannot be in the future",
        ),
        DateRelationshipRule(
            subject_field="leaseStartDate",
            related_field="originalLeaseDate",
            relation=DateRelation.NOT_BEFORE,
            message="Current term cannot start before the original lease date",
        ),
        DateRelationshipRule(
            subject_field="leaseEndDate",
            related_field="leaseStartDate",
            relation=DateRelation.MUST_BE_AFTER,
            message="Lease end date must be after the start date",
        ),
        DateRelationshipRule(
            subject_field="terminationDate",
            related_field="noticeDate",
            relation=DateRelation.MUST_BE_AFTER,
            min_days=MIN_LEASE_TERMINATION_NOTICE_DAYS,
            min_days_field="minNoticePeriod",
            message="Termination date must allow the minimum notice period after the notice date",
        ),
        DateRelationshipRule(
            subject_field="inspectionDate",
            related_field="terminationDate",
            relation=DateRelation.WITHIN_DAYS,
            days=7,
            message="Move-out inspection should be within 7 days of the termination date",
        ),
    ),
)
