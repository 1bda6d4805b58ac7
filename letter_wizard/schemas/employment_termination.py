# letter_wizard/schemas/employment_termination.py
"""Employment termination letter (UAE Federal Decree-Law No. 33 of 2021)."""

from letter_wizard.models.fields import DocumentType
from letter_wizard.models.results import Severity
from letter_wizard.models.rules import (
    Comparison,
    ConditionalGroup,
    DateRelation,
    DateRelationshipRule,
    DateSpanBound,
    DocumentSchema,
    FieldComparison,
    FieldEquals,
    FieldIn,
    NumericBound,
)
from letter_wizard.schemas.common import (
    address,
    amount,
    date,
    email,
    name_field,
    national_id,
    number,
    phone,
    select,
    text,
    textarea,
    yes_no,
)
from letter_wizard.schemas.limits import (
    MAX_BASIC_SALARY,
    MIN_BASIC_SALARY,
    NOTICE_PERIOD_TYPICAL_MAX,
    NOTICE_PERIOD_TYPICAL_MIN,
)

TERMINATION_REASONS = (
    "Redundancy",
    "Performance",
    "Misconduct",
    "Restructuring",
    "End of Contract",
    "Other",
)

# Art. 44 misconduct dismissals carry no notice period
NOTICE_REASONS = tuple(reason for reason in TERMINATION_REASONS if reason != "Misconduct")

SETTLEMENT_METHODS = ("Bank transfer", "Cheque", "Cash")

SCHEMA = DocumentSchema(
    document_type=DocumentType.EMPLOYMENT_TERMINATION,
    fields=(
        # Employer
        name_field("companyName", "Company Name"),
        address("companyAddress", "Company Address"),
        email("hrEmail", "HR Email"),
        phone("hrPhone", "HR Phone"),
        # Employee
        name_field("employeeName", "Employee Name"),
        text("employeeId", "Employee ID"),
        text("position", "Position / Job Title"),
        text("department", "Department", required=False),
        national_id("emiratesIdOrPassport", "Emirates ID or Passport Number"),
        email("employeeEmail", "Employee Email"),
        address("employeeAddress", "Employee Address"),
        phone("employeePhone", "Employee Phone", required=False),
        # Termination
        select("terminationReason", "Reason for Termination", TERMINATION_REASONS),
        textarea("detailedReason", "Detailed Reason", min_length=10),
        date("noticeDate", "Notice Date"),
        date("finalWorkingDay", "Final Working Day"),
        date("terminationDate", "Termination Effective Date"),
        number("noticePeriodRequired", "Contractual Notice Period (days)", max_value=365),
        number("noticePeriodProvided", "Notice Period Provided (days)", max_value=365),
        # Final settlement
        number(
            "basicSalary",
            "Basic Monthly Salary (AED)",
            min_value=MIN_BASIC_SALARY,
            max_value=MAX_BASIC_SALARY,
        ),
        number("accruedLeave", "Accrued Leave Days", required=False, max_value=90),
        number("gratuityYears", "Years of Service", max_value=50),
        amount("gratuityAmount", "End-of-Service Gratuity (AED)", required=False, min_value=0),
        select(
            "repatriationBenefit",
            "Repatriation",
            ("Flight ticket", "Cash equivalent", "Not applicable"),
            required=False,
        ),
        text("settlementTimeline", "Final Settlement Timeline"),
        select("settlementMethod", "Settlement Payment Method", SETTLEMENT_METHODS),
        textarea("bankAccountDetails", "Bank Account Details", required=False),
        # Company property
        yes_no("propertyToReturn", "Company Property to Return?"),
        text("laptopDetails", "Laptop / Equipment", required=False),
        text("accessCards", "Access Cards / Keys", required=False),
        textarea("documentsToReturn", "Documents to Return", required=False),
        date("propertyReturnDeadline", "Property Return Deadline", required=False),
        textarea("consequencesNonReturn", "Consequences of Non-Return", required=False),
        # Post-employment
        yes_no("nonCompeteApplicable", "Non-Compete Applies?"),
        number(
            "nonCompeteDuration", "Non-Compete Duration (months)",
            required=False, min_value=1, max_value=24,
        ),
        textarea("nonCompeteScope", "Non-Compete Scope", required=False),
        yes_no("certificateRequired", "Experience Certificate Requested?"),
        text("certificateIssuanceTimeline", "Certificate Issuance Timeline", required=False),
        email("dataProtectionEmail", "Data Protection Contact Email", required=False),
        textarea("additionalInstructions", "Additional Instructions", required=False),
    ),
    conditional_groups=(
        ConditionalGroup(
            trigger_field="propertyToReturn",
            fields=(
                "laptopDetails",
                "accessCards",
                "documentsToReturn",
                "propertyReturnDeadline",
                "consequencesNonReturn",
            ),
            required=("propertyReturnDeadline", "consequencesNonReturn"),
            na_label="N/A - No company property to return",
        ),
        ConditionalGroup(
            trigger_field="settlementMethod",
            trigger_value="Bank transfer",
            fields=("bankAccountDetails",),
            na_label="N/A - Settlement not paid by bank transfer",
        ),
        ConditionalGroup(
            trigger_field="nonCompeteApplicable",
            fields=("nonCompeteDuration", "nonCompeteScope"),
            na_label="N/A - No non-compete restriction",
        ),
        ConditionalGroup(
            trigger_field="certificateRequired",
            fields=("certificateIssuanceTimeline",),
            na_label="N/A - Experience certificate not requested",
        ),
    ),
    numeric_rules=(
        NumericBound(
            field="noticePeriodProvided",
            min=NOTICE_PERIOD_TYPICAL_MIN,
            max=NOTICE_PERIOD_TYPICAL_MAX,
            severity=Severity.WARNING,
            applies_when=FieldIn("terminationReason", NOTICE_REASONS),
            message="Notice period is usually between 30 and 90 days under UAE Labor Law",
        ),
        FieldComparison(
            field="noticePeriodProvided",
            other="noticePeriodRequired",
            operator=Comparison.GE,
            severity=Severity.WARNING,
            message="Notice provided is shorter than the contractual period; "
            "payment in lieu of notice will be due",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="noticeDate",
            related_field="terminationDate",
            relation=DateRelation.NOT_AFTER,
            message="Notice date cannot be after the termination date",
        ),
        DateRelationshipRule(
            subject_field="finalWorkingDay",
            related_field="terminationDate",
            relation=DateRelation.NOT_AFTER,
            message="Final working day cannot be after the termination date",
        ),
        DateRelationshipRule(
            subject_field="finalWorkingDay",
            related_field="noticeDate",
            relation=DateRelation.NOT_BEFORE,
            message="Final working day cannot be before the notice date",
        ),
        DateRelationshipRule(
            subject_field="propertyReturnDeadline",
            related_field="terminationDate",
            relation=DateRelation.WITHIN_DAYS,
            days=30,
            message="Property return deadline should fall within 30 days of termination",
            applies_when=FieldEquals("propertyToReturn"),
        ),
    ),
    date_spans=(
        DateSpanBound(
            start="noticeDate",
            end="terminationDate",
            min_days=NOTICE_PERIOD_TYPICAL_MIN,
            message="Less than 30 days between notice and termination",
        ),
    ),
)
