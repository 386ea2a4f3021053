"""
Input validators: framework-agnostic, pure functions.
"""

from __future__ import annotations

from typing import Optional

import validators as _validators

from errors import ValidationError


def validate_email(email: Optional[str]) -> bool:
    """Return True if *email* looks like a deliverable address."""
    if not email:
        return False
    return bool(_validators.email(email))


def require_fields(message: str, **fields: Optional[str]) -> None:
    """Raise ValidationError(*message*) if any of *fields* is missing or blank.

    The first missing field name is attached to the error so the boundary can
    highlight it.
    """
    for name, value in fields.items():
        if value is None or not str(value).strip():
            raise ValidationError(message, field=name)


def require_valid_email(email: str) -> None:
    """Raise ValidationError if *email* is not a valid address."""
    if not validate_email(email):
        raise ValidationError("Invalid email format!", field="email")
