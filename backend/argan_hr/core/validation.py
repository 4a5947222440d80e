"""Input Validation — email format, password strength and required-field checks.

Invariants:
    - Emails are compared lowercase and stripped everywhere (normalize_email)
    - Password strength: >= 8 chars, at least one uppercase, one lowercase, one digit
    - Field checks return error dicts {field, message}; callers raise FieldValidationError once

Design Decisions:
    - Collect-then-raise: forms show every problem in one round trip
"""

import re
from typing import Any

from argan_hr.core.errors import FieldValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email.strip()) is not None


def password_strength_errors(password: str) -> list[str]:
    """Human-readable reasons the password is too weak (empty when strong)."""
    problems = []
    if len(password) < MIN_PASSWORD_LENGTH:
        problems.append(f"at least {MIN_PASSWORD_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        problems.append("an uppercase letter")
    if not re.search(r"[a-z]", password):
        problems.append("a lowercase letter")
    if not re.search(r"\d", password):
        problems.append("a number")
    return problems


def check_required(values: dict[str, Any], fields: list[str]) -> list[dict[str, str]]:
    errors = []
    for name in fields:
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append({"field": name, "message": f"{name.replace('_', ' ').capitalize()} is required"})
    return errors


def check_email(field: str, value: str | None) -> list[dict[str, str]]:
    if value and not is_valid_email(value):
        return [{"field": field, "message": "Invalid email format"}]
    return []


def check_password(field: str, value: str | None) -> list[dict[str, str]]:
    if value is None:
        return []
    problems = password_strength_errors(value)
    if problems:
        return [{"field": field, "message": "Password must contain " + ", ".join(problems)}]
    return []


def raise_if_errors(errors: list[dict[str, str]]) -> None:
    if errors:
        raise FieldValidationError(errors)
