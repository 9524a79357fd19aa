"""User Enforcement — registration role and email uniqueness."""

from lawconnect.core.enforce_users import normalize_email, validate_registration
from lawconnect.core.errors import DuplicateEmailError, ValidationFailedError


def test_client_and_lawyer_register():
    assert validate_registration("client", None) is None
    assert validate_registration("lawyer", None) is None


def test_admin_cannot_self_register():
    error = validate_registration("admin", None)
    assert isinstance(error, ValidationFailedError)
    assert error.field == "role"
    assert error.http_status == 400


def test_existing_email_is_duplicate():
    error = validate_registration("client", existing_user=object())
    assert isinstance(error, DuplicateEmailError)
    assert error.http_status == 409


def test_normalize_email():
    assert normalize_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"
