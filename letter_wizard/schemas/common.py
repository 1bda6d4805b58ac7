# letter_wizard/schemas/common.py
"""Builders for field definitions shared by the per-type schema tables."""

from letter_wizard.models.fields import FieldDefinition, FieldFormat, FieldKind
from letter_wizard.models.rules import CardinalityRule, FieldFilled
from letter_wizard.schemas.limits import EMIRATES, MAX_MONETARY_AMOUNT, YES_NO


def text(name: str, label: str, required: bool = True, **kwargs) -> FieldDefinition:
    return FieldDefinition(name=name, label=label, kind=FieldKind.TEXT, required=required, **kwargs)


def name_field(name: str, label: str, required: bool = True) -> FieldDefinition:
    return text(name, label, required, min_length=2, max_length=100, placeholder="Full name")


def textarea(
    name: str, label: str, required: bool = True, min_length: int | None = None, **kwargs
) -> FieldDefinition:
    return FieldDefinition(
        name=name,
        label=label,
        kind=FieldKind.TEXTAREA,
        required=required,
        min_length=min_length,
        **kwargs,
    )


def address(name: str, label: str, required: bool = True) -> FieldDefinition:
    return textarea(
        name, label, required, min_length=10, max_length=500, placeholder="Full address"
    )


def email(name: str, label: str, required: bool = True) -> FieldDefinition:
    return FieldDefinition(
        name=name,
        label=label,
        kind=FieldKind.EMAIL,
        required=required,
        placeholder="name@example.ae",
    )


def phone(name: str, label: str, required: bool = True) -> FieldDefinition:
    return FieldDefinition(
        name=name,
        label=label,
        kind=FieldKind.TEL,
        required=required,
        placeholder="+971 50 123 4567",
    )


def national_id(name: str, label: str, required: bool = True) -> FieldDefinition:
    return FieldDefinition(
        name=name,
        label=label,
        kind=FieldKind.TEXT,
        required=required,
        format=FieldFormat.NATIONAL_ID,
        max_length=18,
        placeholder="784-XXXX-XXXXXXX-X or passport number",
    )


def digits(name: str, label: str, required: bool = True) -> FieldDefinition:
    return FieldDefinition(
        name=name, label=label, kind=FieldKind.TEXT, required=required, format=FieldFormat.DIGITS
    )


def number(
    name: str,
    label: str,
    required: bool = True,
    min_value: float | None = 0,
    max_value: float | None = None,
    **kwargs,
) -> FieldDefinition:
    return FieldDefinition(
        name=name,
        label=label,
        kind=FieldKind.NUMBER,
        required=required,
        min_value=min_value,
        max_value=max_value,
        **kwargs,
    )


def amount(name: str, label: str, required: bool = True, min_value: float = 0.01) -> FieldDefinition:
    """Monetary amount in AED unless stated otherwise."""
    return number(
        name, label, required, min_value=min_value, max_value=MAX_MONETARY_AMOUNT,
        placeholder="Amount in AED",
    )


def date(name: str, label: str, required: bool = True) -> FieldDefinition:
    return FieldDefinition(
        name=name, label=label, kind=FieldKind.DATE, required=required, placeholder="YYYY-MM-DD"
    )


def time(name: str, label: str, required: bool = True) -> FieldDefinition:
    return FieldDefinition(
        name=name, label=label, kind=FieldKind.TIME, required=required, placeholder="HH:MM"
    )


def select(
    name: str, label: str, options: tuple[str, ...], required: bool = True
) -> FieldDefinition:
    return FieldDefinition(
        name=name, label=label, kind=FieldKind.SELECT, required=required, options=options
    )


def yes_no(name: str, label: str, required: bool = True) -> FieldDefinition:
    return select(name, label, YES_NO, required)


def emirate(name: str = "emirate", label: str = "Emirate", required: bool = True) -> FieldDefinition:
    return select(name, label, EMIRATES, required)


def party(
    prefix: str,
    label: str,
    *,
    with_id: bool = True,
    with_phone: bool = True,
    with_email: bool = True,
    required: bool = True,
) -> list[FieldDefinition]:
    """Standard contact block for one party: name, ID, address, phone, email."""
    fields = [name_field(f"{prefix}Name", f"{label} Name", required)]
    if with_id:
        fields.append(national_id(f"{prefix}EmiratesId", f"{label} Emirates ID", required))
    fields.append(address(f"{prefix}Address", f"{label} Address", required))
    if with_phone:
        fields.append(phone(f"{prefix}Phone", f"{label} Phone", required))
    if with_email:
        fields.append(email(f"{prefix}Email", f"{label} Email", required))
    return fields


def witness_id_rules(count: int = 2) -> tuple[CardinalityRule, ...]:
    """A named witness must also give an Emirates ID."""
    return tuple(
        CardinalityRule(
            fields=(f"witness{n}EmiratesId",),
            minimum=1,
            applies_when=FieldFilled(f"witness{n}Name"),
            message=f"Witness {n} Emirates ID is required when a witness is named",
        )
        for n in range(1, count + 1)
    )
