# letter_wizard/schemas/power_of_attorney.py
"""Power of attorney granted by a principal to an attorney-in-fact."""

from letter_wizard.models.fields import DocumentType
from letter_wizard.models.rules import (
    CardinalityRule,
    ConditionalGroup,
    DateRelation,
    DateRelationshipRule,
    DocumentSchema,
)
from letter_wizard.schemas.common import (
    amount,
    date,
    emirate,
    name_field,
    national_id,
    party,
    phone,
    select,
    text,
    textarea,
    witness_id_rules,
    yes_no,
)
from letter_wizard.schemas.limits import REQUIRED_WITNESSES

POWER_FIELDS = (
    "financialPowers",
    "propertyPowers",
    "legalPowers",
    "businessPowers",
    "govPowers",
)

_POWER_LABELS = {
    "financialPowers": "Banking and Financial",
    "propertyPowers": "Real Estate",
    "legalPowers": "Legal Proceedings",
    "businessPowers": "Business Operations",
    "govPowers": "Government Transactions",
}


def _power_fields():
    for trigger in POWER_FIELDS:
        label = _POWER_LABELS[trigger]
        yield yes_no(trigger, f"Grant {label} Powers?")
        yield textarea(f"{trigger}Details", f"{label} Powers - Details", required=False)


SCHEMA = DocumentSchema(
    document_type=DocumentType.POWER_OF_ATTORNEY,
    fields=(
        select("poaType", "Type of Power of Attorney", ("General", "Special", "Durable", "Limited")),
        *party("principal", "Principal"),
        text("principalNationality", "Principal Nationality"),
        *party("attorney", "Attorney-in-Fact"),
        text("attorneyRelationship", "Relationship to Principal"),
        textarea("purposeContext", "Purpose of the Power of Attorney", min_length=10),
        *_power_fields(),
        date("effectiveDate", "Effective Date"),
        date("expiryDate", "Expiry Date", required=False),
        textarea("terminationEvent", "Terminating Events", required=False),
        yes_no("compensation", "Is the Attorney Compensated?"),
        amount("compensationAmount", "Compensation (AED)", required=False),
        select(
            "accountingFrequency",
            "Accounting to Principal",
            ("Monthly", "Quarterly", "Annually", "On request"),
            required=False,
        ),
        emirate(),
        name_field("witness1Name", "Witness 1 Name", required=False),
        national_id("witness1EmiratesId", "Witness 1 Emirates ID", required=False),
        phone("witness1Phone", "Witness 1 Phone", required=False),
        name_field("witness2Name", "Witness 2 Name", required=False),
        national_id("witness2EmiratesId", "Witness 2 Emirates ID", required=False),
        phone("witness2Phone", "Witness 2 Phone", required=False),
    ),
    conditional_groups=tuple(
        ConditionalGroup(
            trigger_field=trigger,
            fields=(f"{trigger}Details",),
            na_label=f"N/A - No {_POWER_LABELS[trigger].lower()} powers granted",
        )
        for trigger in POWER_FIELDS
    )
    + (
        ConditionalGroup(
            trigger_field="compensation",
            fields=("compensationAmount",),
            na_label="N/A - Attorney acts without compensation",
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
    cardinality_rules=(
        CardinalityRule(
            fields=POWER_FIELDS,
            minimum=1,
            value="Yes",
            message="Grant at least one category of powers",
        ),
        CardinalityRule(
            fields=("witness1Name", "witness2Name"),
            minimum=REQUIRED_WITNESSES,
            message="A power of attorney must be signed before two witnesses",
        ),
        *witness_id_rules(),
    ),
)
