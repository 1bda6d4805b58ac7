# letter_wizard/schemas/lease_agreement.py
"""Residential or commercial tenancy contract."""

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
    NumericBound,
)
from letter_wizard.schemas.common import (
    amount,
    date,
    emirate,
    number,
    party,
    select,
    text,
    textarea,
    yes_no,
)
from letter_wizard.schemas.limits import (
    CASH_PAYMENT_CEILING,
    LOW_ANNUAL_RENT,
    MAX_RENT_INCREASE_PERCENT,
    MAX_START_DATE_AGE_MONTHS,
    RENEWAL_CHANGE_NOTICE_DAYS,
)

PROPERTY_TYPES = ("Apartment", "Villa", "Townhouse", "Office", "Retail", "Warehouse")

SCHEMA = DocumentSchema(
    document_type=DocumentType.LEASE_AGREEMENT,
    fields=(
        date("executionDate", "Contract Signing Date"),
        emirate(),
        *party("landlord", "Landlord"),
        *party("tenant", "Tenant"),
        # Property
        text("propertyAddress", "Property Address", min_length=10),
        select("propertyType", "Property Type", PROPERTY_TYPES),
        text("unitNumber", "Unit Number"),
        number("propertyAreaSqm", "Area (sq m)", required=False, min_value=1),
        number("numberOfBedrooms", "Bedrooms", required=False, max_value=20),
        number("parkingSpaces", "Parking Spaces", required=False, max_value=20),
        select("furnished", "Furnishing", ("Furnished", "Semi-furnished", "Unfurnished")),
        yes_no("appliancesIncluded", "Appliances Included?"),
        textarea("appliancesList", "List of Appliances", required=False),
        yes_no("storageUnit", "Storage Unit Included?"),
        text("storageUnitDetails", "Storage Unit Details", required=False),
        select("permittedUse", "Permitted Use", ("Residential", "Commercial")),
        number("numberOfOccupants", "Number of Occupants", required=False, min_value=1),
        text("ejariNumber", "Ejari / Tawtheeq Number", required=False),
        # Term and rent
        date("leaseStartDate", "Lease Start Date"),
        date("leaseEndDate", "Lease End Date"),
        amount("annualRent", "Annual Rent (AED)"),
        number("numberOfCheques", "Number of Rent Payments", min_value=1, max_value=12),
        select("paymentMethod", "Rent Payment Method", ("Cheque", "Bank transfer", "Cash")),
        amount("securityDeposit", "Security Deposit (AED)", min_value=0),
        yes_no("depositSeparateAccount", "Deposit Held in Separate Account?"),
        textarea("depositBankDetails", "Deposit Account Details", required=False),
        # Renewal and penalties
        yes_no("autoRenewal", "Automatic Renewal?"),
        number("renewalNoticePeriod", "Renewal Notice Period (days)", required=False),
        number(
            "renewalRentIncrease", "Maximum Renewal Increase (%)",
            required=False, max_value=100,
        ),
        textarea("renewalTerms", "Renewal Terms", required=False),
        yes_no("latePaymentPenalty", "Late Payment Penalty?"),
        number("latePaymentRate", "Late Payment Penalty (%)", required=False, max_value=100),
        yes_no("petDepositRequired", "Pet Deposit Required?"),
        amount("petDepositAmount", "Pet Deposit (AED)", required=False),
        textarea("maintenanceResponsibilities", "Maintenance Responsibilities", required=False),
        textarea("specialConditions", "Special Conditions", required=False),
    ),
    conditional_groups=(
        ConditionalGroup(
            trigger_field="appliancesIncluded",
            fields=("appliancesList",),
            na_label="N/A - No appliances included",
        ),
        ConditionalGroup(
            trigger_field="storageUnit",
            fields=("storageUnitDetails",),
            na_label="N/A - No storage unit",
        ),
        ConditionalGroup(
            trigger_field="depositSeparateAccount",
            fields=("depositBankDetails",),
            na_label="N/A - Deposit held by landlord",
        ),
        ConditionalGroup(
            trigger_field="autoRenewal",
            fields=("renewalNoticePeriod", "renewalRentIncrease", "renewalTerms"),
            required=("renewalNoticePeriod", "renewalTerms"),
            na_label="N/A - No automatic renewal",
        ),
        ConditionalGroup(
            trigger_field="latePaymentPenalty",
            fields=("latePaymentRate",),
            na_label="N/A - No late payment penalty",
        ),
        ConditionalGroup(
            trigger_field="petDepositRequired",
            fields=("petDepositAmount",),
            na_label="N/A - No pet deposit",
        ),
    ),
    numeric_rules=(
        FieldComparison(
            field="securityDeposit",
            other="annualRent",
            operator=Comparison.LE,
            message="Security deposit cannot exceed the annual rent",
        ),
        NumericBound(
            field="annualRent",
            max=CASH_PAYMENT_CEILING,
            applies_when=FieldEquals("paymentMethod", "Cash"),
            message="Rent above AED 55,000 cannot be paid in cash",
        ),
        NumericBound(
            field="annualRent",
            min=LOW_ANNUAL_RENT,
            severity=Severity.WARNING,
            message="Annual rent looks unusually low; please double-check the amount",
        ),
        NumericBound(
            field="renewalNoticePeriod",
            min=RENEWAL_CHANGE_NOTICE_DAYS,
            severity=Severity.WARNING,
            applies_when=FieldEquals("autoRenewal"),
            message="Changes to lease terms on renewal require 90 days notice",
        ),
        NumericBound(
            field="renewalRentIncrease",
            max=MAX_RENT_INCREASE_PERCENT,
            severity=Severity.WARNING,
            applies_when=FieldEquals("autoRenewal"),
            message="Rent increases are capped by the official rental index",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="leaseEndDate",
            related_field="leaseStartDate",
            relation=DateRelation.MUST_BE_AFTER,
            message="Lease end date must be after the start date",
        ),
        DateRelationshipRule(
            subject_field="executionDate",
            related_field="leaseStartDate",
            relation=DateRelation.NOT_AFTER,
            message="The contract must be signed on or before the lease start date",
        ),
        DateRelationshipRule(
            subject_field="leaseStartDate",
            related_field=None,
            relation=DateRelation.NOT_OLDER_THAN_MONTHS,
            days=MAX_START_DATE_AGE_MONTHS,
            message="Lease start date cannot be more than 6 months in the past",
        ),
    ),
    date_spans=(
        DateSpanBound(
            start="leaseStartDate",
            end="leaseEndDate",
            min_days=365,
            message="Lease term is shorter than 12 months; residential leases are usually annual",
        ),
    ),
)
