"""User Schemas — registration constraints."""

import pytest
from pydantic import ValidationError

from lawconnect.schemas.user import UserRegister


def test_role_defaults_to_client():
    user = UserRegister(name="Jane", email="jane@example.com", password="secret123")
    assert user.role.value == "client"


@pytest.mark.parametrize("override", [
    {"name": "  "},
    {"name": "x" * 101},
    {"email": "not-an-email"},
    {"password": "123"},
    {"role": "paralegal"},
])
def test_invalid_registration(override):
    data = {"name": "Jane", "email": "jane@example.com", "password": "secret123"}
    with pytest.raises(ValidationError):
        UserRegister(**{**data, **override})
