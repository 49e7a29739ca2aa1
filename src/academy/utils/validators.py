"""Input validation helpers shared by the core and the CLI.

Error kinds used across the system:
- FORMAT: non-numeric input where a number was required
- RANGE: numeric input outside the valid range
- DUPLICATE: name/username already used in the relevant scope
- NOT_FOUND: lookup by identifier with no match
- AUTH_FAILURE: credential mismatch
- NO_ELIGIBLE_SUBJECTS: exam session with nothing to take

Functions:
- parse_int(raw) -> int: Parse an integer or raise FormatError
- parse_choice(raw, count) -> ChoiceResult: Parse a 1-based menu choice
- is_affirmative(text) -> bool: Retake confirmation check
- validate_email(email) -> bool: Loose email format check
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Kinds of recoverable failures reported to the user."""

    FORMAT = "format"
    RANGE = "range"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    AUTH_FAILURE = "auth_failure"
    NO_ELIGIBLE_SUBJECTS = "no_eligible_subjects"


class FormatError(ValueError):
    """Raised when a number was required but the input is not numeric."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"'{raw}' is not a number")


@dataclass
class ChoiceResult:
    """Outcome of parsing a 1-based selection."""

    success: bool
    index: int | None = None  # zero-based
    error: ErrorKind | None = None
    message: str = ""


# Email validation pattern
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")

AFFIRMATIVE_ANSWERS = {"yes", "y"}


def parse_int(raw: str) -> int:
    """Parse a line of input as an integer.

    Args:
        raw: Line read from the input source

    Returns:
        The parsed integer

    Raises:
        FormatError: If the line is not an integer
    """
    try:
        return int(raw.strip())
    except ValueError:
        raise FormatError(raw) from None


def parse_choice(raw: str, count: int) -> ChoiceResult:
    """Parse a 1-based choice among ``count`` entries.

    Args:
        raw: Line read from the input source
        count: Number of entries shown to the user

    Returns:
        ChoiceResult with the zero-based index, or the error kind
    """
    try:
        number = parse_int(raw)
    except FormatError:
        return ChoiceResult(
            success=False,
            error=ErrorKind.FORMAT,
            message="Invalid input. Please enter a number.",
        )

    if not 1 <= number <= count:
        return ChoiceResult(
            success=False,
            error=ErrorKind.RANGE,
            message=f"Please choose a number between 1 and {count}.",
        )

    return ChoiceResult(success=True, index=number - 1)


def is_affirmative(text: str) -> bool:
    """True only for an explicit yes (case-insensitive, trimmed)."""
    return text.strip().lower() in AFFIRMATIVE_ANSWERS


def validate_email(email: str) -> bool:
    """Validate email format. Empty string is valid (optional field).

    Args:
        email: Email address to validate

    Returns:
        True if valid email or empty string, False otherwise
    """
    if not email:
        return True
    return bool(EMAIL_PATTERN.match(email))


def same_name(left: str, right: str) -> bool:
    """Case-insensitive name comparison used for duplicate checks."""
    return left.strip().casefold() == right.strip().casefold()
