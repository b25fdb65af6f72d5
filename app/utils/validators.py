import re
from typing import Any, Mapping

from app.core.exceptions import ValidationError

CONTACT_FIELDS = ("name", "email", "subject", "message")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MISSING_FIELDS_MESSAGE = "All fields are required"
INVALID_EMAIL_MESSAGE = "Please provide a valid email address"


def is_valid_email(email: str) -> bool:
    """Syntactic local@domain check only; no DNS or mailbox lookup."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_contact_fields(payload: Any) -> dict:
    """
    Check a raw contact payload and return the four fields as a dict.

    Raises ValidationError when a field is missing, empty or not a string,
    or when the email is not shaped like local@domain.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    fields = {}
    for field in CONTACT_FIELDS:
        value = payload.get(field)
        if not isinstance(value, str) or not value:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        fields[field] = value

    if not is_valid_email(fields["email"]):
        raise ValidationError(INVALID_EMAIL_MESSAGE)

    return fields
