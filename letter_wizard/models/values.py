# letter_wizard/models/values.py
"""Coercion helpers for raw form values (string | number | None)."""

import math
import re
from datetime import date, datetime
from typing import Any

# Accepted date input formats, tried in order
DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def is_empty(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_number(value: Any) -> float | None:
    """Parse a finite number, tolerating thousands separators. None if not numeric."""
    if is_empty(value) or isinstance(value, bool):
        return None
    text = value if isinstance(value, (int, float)) else str(value).strip().replace(",", "")
    try:
        result = float(text)
    except (ValueError, OverflowError):
        return None
    # nan and inf compare False against every bound
    if not math.isfinite(result):
        return None
    return result


def parse_date(value: Any) -> date | None:
    """Parse ISO or DD/MM/YYYY dates. None if unparseable."""
    if is_empty(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def is_time(value: Any) -> bool:
    """True for 24-hour HH:MM strings."""
    return isinstance(value, str) and bool(_TIME_PATTERN.match(value.strip()))


def normalize_choice(value: Any) -> str:
    """Normalize a select value for comparisons."""
    if value is None:
        return ""
    return str(value).strip()
