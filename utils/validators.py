"""
Input validators for registration.
"""

from __future__ import annotations

import re

from auth.errors import InvalidInputError

MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(email: str) -> None:
    if not email or len(email) > 255 or not _EMAIL_RE.match(email):
        raise InvalidInputError("Email address is not valid", field="email")


def validate_registration(email: str, name: str, password: str) -> None:
    """Raise ``InvalidInputError`` naming the first field that fails."""
    validate_email(email)
    if not name or not name.strip():
        raise InvalidInputError("Name must not be empty", field="name")
    if len(name) > 128:
        raise InvalidInputError("Name is too long", field="name")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            field="password",
        )
