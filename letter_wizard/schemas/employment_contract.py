# letter_wizard/schemas/employment_contract.py
"""Employment contract (limited or unlimited term)."""

from letter_wizard.models.fields import DocumentType
from letter_wizard.models.results import Severity
from letter_wizard.models.rules import (
    Comparison,
    ConditionalGroup,
    DateRelation,
    DateRelationshipRule,
    DocumentSchema,
    FieldComparison,
    NumericBound,
    SumBound,
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
    DAYS_PER_WEEK,
    MAX_BASIC_SALARY,
    MAX_DAILY_HOURS,
    MAX_LIMITED_CONTRACT_MONTHS,
    MAX_PROBATION_MONTHS,
    MAX_START_DATE_AGE_MONTHS,
    MIN_ANNUAL_LEAVE_DAYS,
    MIN_BASIC_SALARY,
    MIN_WORKING_AGE_DAYS,
    NOTICE_PERIOD_TYPICAL_MAX,
    NOTICE_PERIOD_TYPICAL_MIN,
    STANDARD_DAILY_HOURS,
)

SCHEMA = DocumentSchema(
    document_type=DocumentType.EMPLOYMENT_CONTRACT,
    fields=(
        # Employer
        name_field("companyName", "Company Name"),
        text("companyLicenseNumber", "Trade License Number"),
        address("companyAddress", "Company Address"),
        email("hrEmail", "HR Email"),
        phone("hrPhone", "HR Phone"),
        # Employee
        name_field("employeeName", "Employee Name"),
        text("employeeNationality", "Nationality"),
        national_id("passportOrEmiratesId", "Passport or Emirates ID"),
        date("dateOfBirth", "Date of Birth"),
        address("employeeAddress", "Employee Address"),
        email("employeeEmail", "Employee Email"),
        phone("employeePhone", "Employee Phone"),
        # Position
        text("jobTitle", "Job Title"),
        text("department", "Department", required=False),
        text("directManager", "Reports To", required=False),
        textarea("jobDescription", "Job Description", min_length=10),
        text("workLocation", "Work Location"),
        select("contractType", "Contract Type", ("Limited", "Unlimited")),
        number(
            "contractDuration", "Contract Duration (months)",
            required=False, min_value=1, max_value=MAX_LIMITED_CONTRACT_MONTHS,
        ),
        date("startDate", "Start Date"),
        number("probationPeriod", "Probation Period (months)", max_value=MAX_PROBATION_MONTHS),
        # Compensation
        number(
            "basicSalary",
            "Basic Monthly Salary (AED)",
            min_value=MIN_BASIC_SALARY,
            max_value=MAX_BASIC_SALARY,
        ),
        amount("housingAllowance", "Housing Allowance (AED)", required=False, min_value=0),
        amount("transportAllowance", "Transport Allowance (AED)", required=False, min_value=0),
        amount("otherAllowances", "Other Allowances (AED)", required=False, min_value=0),
        amount("totalMonthlyCompensation", "Total Monthly Compensation (AED)"),
        select("paymentMethod", "Salary Payment Method", ("Bank transfer (WPS)", "Cheque")),
        # Working time
        number("workingHoursPerDay", "Working Hours per Day", min_value=1, max_value=MAX_DAILY_HOURS),
        number("workingDaysPerWeek", "Working Days per Week", min_value=1, max_value=DAYS_PER_WEEK),
        number("restDaysPerWeek", "Rest Days per Week", max_value=DAYS_PER_WEEK),
        number("annualLeaveEntitlement", "Annual Leave (days)", max_value=365),
        yes_no("healthInsurance", "Health Insurance Provided?"),
        # Restrictions and notice
        yes_no("gardenLeaveApplicable", "Garden Leave Applies?"),
        number("gardenLeaveDuration", "Garden Leave (days)", required=False, max_value=180),
        yes_no("nonCompeteClause", "Include Non-Compete Clause?"),
        number(
            "nonCompeteDuration", "Non-Compete Duration (months)",
            required=False, min_value=1, max_value=24,
        ),
        textarea("nonCompeteScope", "Non-Compete Scope", required=False),
        number("noticePeriodByEmployer", "Notice by Employer (days)", max_value=365),
        number("noticePeriodByEmployee", "Notice by Employee (days)", max_value=365),
        email("dataProtectionEmail", "Data Protection Contact Email", required=False),
        textarea("specialConditions", "Special Conditions", required=False),
    ),
    conditional_groups=(
        ConditionalGroup(
            trigger_field="contractType",
            trigger_value="Limited",
            fields=("contractDuration",),
            na_label="N/A - Unlimited contract",
        ),
        ConditionalGroup(
            trigger_field="gardenLeaveApplicable",
            fields=("gardenLeaveDuration",),
            na_label="N/A - No garden leave",
        ),
        ConditionalGroup(
            trigger_field="nonCompeteClause",
            fields=("nonCompeteDuration", "nonCompeteScope"),
            na_label="N/A - No non-compete clause",
        ),
    ),
    numeric_rules=(
        FieldComparison(
            field="basicSalary",
            other="totalMonthlyCompensation",
            operator=Comparison.LE,
            message="Basic salary cannot exceed total monthly compensation",
        ),
        SumBound(
            fields=("workingDaysPerWeek", "restDaysPerWeek"),
            max=DAYS_PER_WEEK,
            message="Working days and rest days cannot exceed 7 per week",
        ),
        NumericBound(
            field="annualLeaveEntitlement",
            min=MIN_ANNUAL_LEAVE_DAYS,
            message="Annual leave must be at least 30 days under UAE Labor Law",
        ),
        NumericBound(
            field="workingHoursPerDay",
            max=STANDARD_DAILY_HOURS,
            severity=Severity.WARNING,
            message="Working hours above 8 per day count as overtime",
        ),
        NumericBound(
            field="noticePeriodByEmployer",
            min=NOTICE_PERIOD_TYPICAL_MIN,
            max=NOTICE_PERIOD_TYPICAL_MAX,
            severity=Severity.WARNING,
            message="Employer notice period is usually between 30 and 90 days",
        ),
        NumericBound(
            field="noticePeriodByEmployee",
            min=NOTICE_PERIOD_TYPICAL_MIN,
            max=NOTICE_PERIOD_TYPICAL_MAX,
            severity=Severity.WARNING,
            message="Employee notice period is usually between 30 and 90 days",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="dateOfBirth",
            related_field=None,
            relation=DateRelation.NOT_IN_FUTURE,
            message="Date of birth cannot be in the future",
        ),
        DateRelationshipRule(
            subject_field="startDate",
            related_field="dateOfBirth",
            relation=DateRelation.MUST_BE_AFTER,
            min_days=MIN_WORKING_AGE_DAYS,
            message="Employee must be at least 15 years old on the start date",
        ),
        DateRelationshipRule(
            subject_field="startDate",
            related_field=None,
            relation=DateRelation.NOT_OLDER_THAN_MONTHS,
            days=MAX_START_DATE_AGE_MONTHS,
            message="Start date cannot be more than 6 months in the past",
        ),
    ),
)
