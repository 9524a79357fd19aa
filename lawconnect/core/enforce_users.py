"""User Enforcement — registration rules.

Invariants:
    - All functions are PURE
    - Self-registration yields client or lawyer accounts only; admins are bootstrapped
    - Email uniqueness is case-insensitive (emails are normalized to lowercase before the check)
"""

from lawconnect.core.domain_types import Role
from lawconnect.core.errors import DuplicateEmailError, ValidationFailedError


def check_registrable_role(role: str) -> ValidationFailedError | None:
    if role == Role.ADMIN:
        return ValidationFailedError("Admin accounts cannot be self-registered", "role")
    return None


def check_no_duplicate_email(existing_user: object | None) -> DuplicateEmailError | None:
    if existing_user is not None:
        return DuplicateEmailError()
    return None


def validate_registration(
    role: str, existing_user: object | None,
) -> ValidationFailedError | DuplicateEmailError | None:
    return check_registrable_role(role) or check_no_duplicate_email(existing_user)


def normalize_email(email: str) -> str:
    return email.strip().lower()
