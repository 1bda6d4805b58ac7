# letter_wizard/schemas/settlement_agreement.py
"""Settlement agreement between two parties, optionally notarized."""

from letter_wizard.models.fields import DocumentType
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
    amount,
    date,
    emirate,
    name_field,
    national_id,
    party,
    select,
    text,
    textarea,
    witness_id_rules,
    yes_no,
)
from letter_wizard.schemas.limits import CASH_PAYMENT_CEILING, CURRENCIES, REQUIRED_WITNESSES

DISPUTE_NATURES = ("Commercial", "Employment", "Tenancy", "Personal injury", "Other")

SCHEMA = DocumentSchema(
    document_type=DocumentType.SETTLEMENT_AGREEMENT,
    fields=(
        date("agreementDate", "Agreement Date"),
        text("agreementLocation", "Place of Signing"),
        *party("partyA", "First Party"),
        *party("partyB", "Second Party"),
        # Dispute
        select("natureOfDispute", "Nature of Dispute", DISPUTE_NATURES),
        textarea("disputeDescription", "Description of Dispute", min_length=10),
        date("disputeOriginDate", "Date Dispute Arose"),
        # Payment
        yes_no("paymentInvolved", "Does the Settlement Involve Payment?"),
        amount("settlementAmount", "Settlement Amount", required=False),
        select("currency", "Currency", CURRENCIES, required=False),
        select(
            "paymentStructure", "Payment Structure", ("Lump sum", "Installments"), required=False
        ),
        textarea("paymentSchedule", "Installment Schedule", required=False),
        select(
            "paymentMethod", "Payment Method", ("Bank transfer", "Cheque", "Cash"), required=False
        ),
        date("paymentDueDate", "Payment Due Date", required=False),
        # Releases
        yes_no("partyAReleasesB", "First Party Releases Second Party?"),
        textarea("partyAReleaseScope", "Scope of First Party Release", required=False),
        yes_no("partyBReleasesA", "Second Party Releases First Party?"),
        textarea("partyBReleaseScope", "Scope of Second Party Release", required=False),
        # Terms
        yes_no("isConfidential", "Confidential Settlement?"),
        textarea("confidentialityScope", "Confidentiality Scope", required=False),
        yes_no("includeNonDisparagement", "Include Non-Disparagement?"),
        textarea("nonDisparagementDetails", "Non-Disparagement Terms", required=False),
        emirate("jurisdictionEmirate", "Governing Jurisdiction"),
        # Execution
        yes_no("requiresNotarization", "Notarize the Agreement?"),
        text("notaryLocation", "Notary Public Location", required=False),
        date("notaryDate", "Notarization Date", required=False),
        name_field("witness1Name", "Witness 1 Name", required=False),
        national_id("witness1EmiratesId", "Witness 1 Emirates ID", required=False),
        name_field("witness2Name", "Witness 2 Name", required=False),
        national_id("witness2EmiratesId", "Witness 2 Emirates ID", required=False),
    ),
    conditional_groups=(
        ConditionalGroup(
            trigger_field="paymentInvolved",
            fields=(
                "settlementAmount",
                "currency",
                "paymentStructure",
                "paymentSchedule",
                "paymentMethod",
                "paymentDueDate",
            ),
            required=(
                "settlementAmount",
                "currency",
                "paymentStructure",
                "paymentMethod",
                "paymentDueDate",
            ),
            na_label="N/A - No payment under this settlement",
        ),
        ConditionalGroup(
            trigger_field="partyAReleasesB",
            fields=("partyAReleaseScope",),
            na_label="N/A - No release by first party",
        ),
        ConditionalGroup(
            trigger_field="partyBReleasesA",
            fields=("partyBReleaseScope",),
            na_label="N/A - No release by second party",
        ),
        ConditionalGroup(
            trigger_field="isConfidential",
            fields=("confidentialityScope",),
            na_label="N/A - Settlement is not confidential",
        ),
        ConditionalGroup(
            trigger_field="includeNonDisparagement",
            fields=("nonDisparagementDetails",),
            na_label="N/A - No non-disparagement clause",
        ),
        ConditionalGroup(
            trigger_field="requiresNotarization",
            fields=("notaryLocation", "notaryDate"),
            na_label="N/A - Not notarized",
        ),
    ),
    numeric_rules=(
        NumericBound(
            field="settlementAmount",
            max=CASH_PAYMENT_CEILING,
            applies_when=FieldEquals("paymentMethod", "Cash"),
            message="Cash settlements above AED 55,000 are not permitted",
        ),
    ),
    date_rules=(
        DateRelationshipRule(
            subject_field="disputeOriginDate",
            related_field=None,
            relation=DateRelation.NOT_IN_FUTURE,
            message="The dispute cannot have arisen in the future",
        ),
        DateRelationshipRule(
            subject_field="disputeOriginDate",
            related_field="agreementDate",
            relation=DateRelation.NOT_AFTER,
            message="The dispute must have arisen on or before the agreement date",
        ),
        DateRelationshipRule(
            subject_field="paymentDueDate",
            related_field="agreementDate",
            relation=DateRelation.NOT_BEFORE,
            message="Payment due date cannot be before the agreement date",
        ),
        DateRelationshipRule(
            subject_field="notaryDate",
            related_field="agreementDate",
            relation=DateRelation.NOT_BEFORE,
            message="Notarization cannot take place before the agreement date",
        ),
    ),
    cardinality_rules=(
        CardinalityRule(
            fields=("witness1Name", "witness2Name"),
            minimum=REQUIRED_WITNESSES,
            applies_when=FieldEquals("requiresNotarization"),
            message="Notarized settlement agreements require two witnesses",
        ),
        *witness_id_rules(),
    ),
)
