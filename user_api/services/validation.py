"""
Field validation for user records.

Rules are checked in a fixed order and the first violation is reported.
"""

import re
from typing import Tuple

from user_api.core.exceptions import ValidationError
from user_api.schemas.user import UserCreate

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

# Optional country code, digit groups with separators, optional extension.
# Digit runs are possessive so a long non-matching number fails in linear time.
PHONE_PATTERN = re.compile(
    r"(?:(?:\(?(?:00|\+)([1-4]\d\d|[1-9]\d?)\)?)?[-. \\/]?)?"
    r"((?:\(?\d++\)?[-. \\/]?)*)"
    r"(?:[-. \\/]?(?:#|ext\.?|extension|x)[-. \\/]?(\d+))?",
    re.ASCII,
)

# (field, minimum, maximum, reason)
LENGTH_RULES = {
    "first_name": (2, 255, "Length of FirstName is not between 2-255 characters"),
    "last_name": (2, 255, "Length of LastName is not between 2-255 characters"),
    "password": (8, 255, "Length of Password is not between 8-255 characters"),
    "email": (5, 255, "Length of the email is not between 5-255 characters"),
    "telephone": (5, 50, "Length of the telephone number is not between 5-50 characters"),
}


def _length_ok(user: UserCreate, field: str) -> Tuple[bool, str]:
    minimum, maximum, reason = LENGTH_RULES[field]
    if minimum <= len(getattr(user, field)) <= maximum:
        return True, ""
    return False, reason


# PUBLIC_INTERFACE
def is_valid_email(email: str) -> bool:
    """Check an address against the email pattern."""
    return EMAIL_PATTERN.fullmatch(email) is not None


# PUBLIC_INTERFACE
def is_valid_telephone(telephone: str) -> bool:
    """Check a number against the telephone pattern."""
    return PHONE_PATTERN.fullmatch(telephone) is not None


# PUBLIC_INTERFACE
def validate_user(user: UserCreate) -> Tuple[bool, str]:
    """
    Check a candidate user record before it is persisted.

    Order: first name length, last name length, password length, email length,
    email format, telephone length, telephone format.

    Args:
        user: Candidate record with a plaintext password

    Returns:
        Tuple[bool, str]: Validity flag and the reason of the first failed rule
    """
    for field in ("first_name", "last_name", "password", "email"):
        ok, reason = _length_ok(user, field)
        if not ok:
            return False, reason
    if not is_valid_email(user.email):
        return False, "Email is not a valid address"
    ok, reason = _length_ok(user, "telephone")
    if not ok:
        return False, reason
    if not is_valid_telephone(user.telephone):
        return False, "Telephone number is not a valid number"
    return True, ""


# PUBLIC_INTERFACE
def ensure_valid(user: UserCreate) -> None:
    """
    Raise if the record fails validation.

    Raises:
        ValidationError: With the reason of the first failed rule
    """
    valid, reason = validate_user(user)
    if not valid:
        raise ValidationError(reason)
