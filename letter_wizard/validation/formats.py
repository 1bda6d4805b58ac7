# letter_wizard/validation/formats.py
"""
Format predicates for email, UAE phone numbers and Emirates ID / passport.

Pure functions. Each returns a FormatCheck carrying pass/fail and the
expected pattern description (for debugging and error messages). Which fields
get which check, and whether failure blocks, is decided by the engine.
"""

import re
from dataclasses import dataclass

from letter_wizard.models.fields import FieldFormat

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+971\s?\d{1,2}\s?\d{3}\s?\d{4}$")
EMIRATES_ID_PATTERN = re.compile(r"^784-\d{4}-\d{7}-\d$")
PASSPORT_PATTERN = re.compile(r"^[A-Za-z0-9]{6,9}$")
DIGITS_PATTERN = re.compile(r"^\d+$")


@dataclass(frozen=True)
class FormatCheck:
    passed: bool
    pattern: str

    def __bool__(self) -> bool:
        return self.passed


def validate_email(value: str) -> FormatCheck:
    return FormatCheck(
        passed=bool(EMAIL_PATTERN.match(value.strip())),
        pattern="name@domain.tld",
    )


def validate_phone(value: str) -> FormatCheck:
    return FormatCheck(
        passed=bool(PHONE_PATTERN.match(value.strip())),
        pattern="+971 XX XXX XXXX",
    )


def validate_national_id(value: str) -> FormatCheck:
    """Emirates ID (784-XXXX-XXXXXXX-X) or a 6-9 character passport number."""
    cleaned = value.strip()
    return FormatCheck(
        passed=bool(EMIRATES_ID_PATTERN.match(cleaned) or PASSPORT_PATTERN.match(cleaned)),
        pattern="784-XXXX-XXXXXXX-X or 6-9 alphanumeric passport number",
    )


def validate_digits(value: str) -> FormatCheck:
    return FormatCheck(passed=bool(DIGITS_PATTERN.match(value.strip())), pattern="digits only")


FORMAT_VALIDATORS = {
    FieldFormat.EMAIL: validate_email,
    FieldFormat.PHONE: validate_phone,
    FieldFormat.NATIONAL_ID: validate_national_id,
    FieldFormat.DIGITS: validate_digits,
}

FORMAT_MESSAGES = {
    FieldFormat.EMAIL: "Please enter a valid email address",
    FieldFormat.PHONE: "Phone number must be in UAE format: +971 XX XXX XXXX",
    FieldFormat.NATIONAL_ID: "Enter a valid Emirates ID (784-XXXX-XXXXXXX-X) or passport number",
    FieldFormat.DIGITS: "Only digits are allowed",
}
