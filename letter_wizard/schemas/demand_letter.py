# letter_wizard/schemas/demand_letter.py
"""Demand letter for payment of an outstanding debt."""

from letter_wizard.models.fields import DocumentType
from letter_wizard.models.results import Severity
from letter_wizard.models.rules import (
    CardinalityRule,
    ConditionalGroup,
    DateRelation,
    DateRelationshipRule,
    DocumentSchema,
    FieldEquals,
    NumericBound,
)
from letter_wizard.schemas.common import (
    address,
    amount,
    date,
    digits,
    email,
    emirate,
    name_field,
    number,
    phone,
    select,
    text,
    textarea,
    yes_no,
)
from letter_wizard.schemas.limits import CASH_PAYMENT_CEILING, CURRENCIES

DEBT_TYPES = (
    "Unpaid invoice",
    "Breach of contract",
    "Unpaid loan",
    "Unpaid rent",
    "Other",
)

PAYMENT_METHOD_FIELDS = (
    "bankTransferAllowed",
    "chequeAllowed",
    "cashAllowed",
    "onlinePaymentAllowed",
)

SCHEMA = DocumentSchema(
    document_type=DocumentType.DEMAND_LETTER,
    fields=(
        # Parties
        name_field("senderName", "Sender / Creditor Name"),
        address("senderAddress", "Sender Address"),
        email("senderEmail", "Sender Email"),
        phone("senderPhone", "Sender Phone"),
        name_field("recipientName", "Recipient / Debtor Name"),
        address("recipientAddress", "Recipient Address"),
        email("recipientEmail", "Recipient Email", required=False),
        phone("recipientPhone", "Recipient Phone", required=False),
        # Debt
        digits("referenceNumber", "Reference Number"),
        select("debtType", "Nature of Debt", DEBT_TYPES),
        digits("invoiceNumber", "Invoice Number", required=False),
        date("invoiceDate", "Invoice Date", required=False),
        date("originalDueDate", "Original Due Date", required=False),
        textarea("serviceDescription", "Goods or Services Provided", min_length=10),
        amount("amount", "Amount Due"),
        select("currency", "Currency", CURRENCIES),
        amount("interestRate", "Interest Rate (% per annum)", required=False, min_value=0),
        date("paymentDeadline", "Payment Deadline"),
        number("deadlineCalendarDays", "Days Allowed for Payment", min_value=1, max_value=365),
        # Bank transfer
        yes_no("bankTransferAllowed", "Accept Bank Transfer?"),
        text("bankName", "Bank Name", required=False),
        text("accountName", "Account Name", required=False),
        digits("accountNumber", "Account Number", required=False),
        text("iban", "IBAN", required=False, max_length=34),
        text("swiftCode", "SWIFT Code", required=False, max_length=11),
        text("bankBranch", "Branch", required=False),
        # Cheque
        yes_no("chequeAllowed", "Accept Cheque?"),
        name_field("chequePayeeName", "Cheque Payee", required=False),
        address("chequeDeliveryAddress", "Cheque Delivery Address", required=False),
        # Cash
        yes_no("cashAllowed", "Accept Cash?"),
        address("cashPaymentAddress", "Cash Payment Address", required=False),
        text("businessHours", "Business Hours", required=False),
        name_field("contactPerson", "Contact Person", required=False),
        phone("contactPhone", "Contact Phone", required=False),
        # Online
        yes_no("onlinePaymentAllowed", "Accept Online Payment?"),
        text("paymentPortalURL", "Payment Portal URL", required=False),
        text("referenceCode", "Payment Reference Code", required=False),
        # Escalation
        textarea("previousAttempts", "Previous Collection Attempts", required=False),
        textarea("consequences", "Consequences of Non-Payment", min_length=10),
        emirate(),
    ),
    conditional_groups=(
        ConditionalGroup(
            trigger_field="debtType",
            trigger_value="Unpaid invoice",
            fields=("invoiceNumber", "invoiceDate", "originalDueDate"),
            required=("invoiceNumber", "invoiceDate"),
            na_label="N/A - Debt does not arise from an invoice",
        ),
        ConditionalGroup(
            trigger_field="bankTransferAllowed",
            fields=("bankName", "accountName", "accountNumber", "iban", "swiftCode", "bankBranch"),
            required=("bankName", "accountName", "accountNumber", "iban"),
            na_label="N/A - Bank transfer not accepted",
        ),
        ConditionalGroup(
            trigger_field="chequeAllowed",
            fields=("chequePayeeName", "chequeDeliveryAddress"),
            na_label="N/A - Cheque payment not accepted",
        ),
        ConditionalGroup(
            trigger_field="cashAllowed",
            fields=("cashPaymentAddress", "businessHours", "contactPerson", "contactPhone"),
            required=("cashPaymentAddress", "contactPerson", "contactPhone"),
            na_label="N/A - Cash payment not accepted",
        ),
        ConditionalGroup(
            trigger_field="onlinePaymentAllowed",
            fields=("paymentPortalURL", "referenceCode"),
            required=("paymentPortalURL",),
            na_label="N/A - Online payment not available",
        ),
    ),
    numeric_rules=(
        NumericBound(
            field="amount",
            max=CASH_PAYMENT_CEILING,
            applies_when=FieldEquals("cashAllowed"),
            message="Cash payments above AED 55,000 are not permitted; "
            "offer another payment method",
        ),
        NumericBound(
            field="deadlineCalendarDays",
            min=7,
            max=30,
            severity=Severity.WARNING,
            message="Demand letters usually allow 7 to 30 days for payment",
        ),
        NumericBound(
            field="interestRate",
            max=12,
            severity=Severity.WARNING,
            message="Interest above 12% per annum may be reduced by UAE courts",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="invoiceDate",
            related_field=None,
            relation=DateRelation.NOT_IN_FUTURE,
            message="Invoice date cannot be in the future",
        ),
        DateRelationshipRule(
            subject_field="originalDueDate",
            related_field="invoiceDate",
            relation=DateRelation.MUST_BE_AFTER,
            message="Original due date must be after the invoice date",
        ),
        DateRelationshipRule(
            subject_field="paymentDeadline",
            related_field="invoiceDate",
            relation=DateRelation.MUST_BE_AFTER,
            message="Payment deadline must be after the invoice date",
        ),
    ),
    cardinality_rules=(
        CardinalityRule(
            fields=PAYMENT_METHOD_FIELDS,
            minimum=1,
            value="Yes",
            message="Accept at least one payment method",
        ),
    ),
)
