"""Validation rules shared by the account commands."""

import re

from application.settings import app_settings

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def validate_new_account(name: str, email: str, password: str, password_min_length: int | None = None) -> str | None:
    """Return a validation message for the account fields, or None if they are acceptable."""
    min_length = password_min_length if password_min_length is not None else app_settings.password_min_length
    if not name.strip():
        return "Name is required"
    if not EMAIL_PATTERN.match(email):
        return "A valid email is required"
    if len(password or "") < min_length:
        return f"Password must be at least {min_length} characters"
    return None
