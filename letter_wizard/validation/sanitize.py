# letter_wizard/validation/sanitize.py
"""
Input sanitization utilities.

Strips markup from free text before it leaves the process and checks the
identifiers and titles users type at the CLI.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from letter_wizard.schemas.limits import MAX_FIELD_LENGTH

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100

_TAG_PATTERN = re.compile(r"<[^>]*>")
_UNSAFE_CHARS = re.compile(r"[<>'\"]")


def sanitize_string(value: str, max_length: int = MAX_FIELD_LENGTH) -> str:
    """
    Remove HTML tags and quote/angle characters, then trim.

    Args:
        value: Raw user text
        max_length: Maximum length kept (default 5000)

    Returns:
        Cleaned string, truncated to max_length
    """
    cleaned = _UNSAFE_CHARS.sub("", _TAG_PATTERN.sub("", value)).strip()
    if len(cleaned) > max_length:
        logger.warning(f"Value truncated from {len(cleaned)} to {max_length} characters")
        cleaned = cleaned[:max_length]
    return cleaned


def sanitize_details(details: Mapping[str, Any]) -> dict[str, Any]:
    """Sanitize every string value of a form mapping; other values pass through."""
    return {
        key: sanitize_string(value) if isinstance(value, str) else value
        for key, value in details.items()
    }


def sanitize_title(title: str) -> str:
    """
    Sanitize and validate a user-chosen artifact title.

    Raises:
        ValueError: If the title is empty after cleaning or too long
    """
    cleaned = sanitize_string(title)
    if not cleaned:
        raise ValueError("Title cannot be empty")
    if len(cleaned) > MAX_TITLE_LENGTH:
        raise ValueError(f"Title must be at most {MAX_TITLE_LENGTH} characters")
    return cleaned


def sanitize_artifact_id(artifact_id: str) -> str:
    """
    Validate an artifact ID: alphanumeric with hyphens, 8-64 characters.

    Raises:
        ValueError: If the ID format is invalid
    """
    if not re.match(r"^[a-zA-Z0-9-]{8,64}$", artifact_id):
        raise ValueError(
            f"Invalid artifact ID '{artifact_id}': must be 8-64 alphanumeric characters or hyphens"
        )
    return artifact_id
