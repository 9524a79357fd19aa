"""Case Enforcement — creation role, ownership, status and acceptance rules."""

from uuid import uuid4

from lawconnect.core.domain_types import Actor, Role
from lawconnect.core.enforce_cases import (
    check_can_create_case,
    check_can_modify_case,
    check_status_change,
    validate_bid_acceptance,
    validate_case_update,
)
from lawconnect.core.errors import ForbiddenError, ValidationFailedError


def _actor(role):
    return Actor(id=uuid4(), role=role)


def test_client_can_create_case():
    assert check_can_create_case(_actor(Role.CLIENT)) is None


def test_lawyer_cannot_create_case():
    error = check_can_create_case(_actor(Role.LAWYER))
    assert isinstance(error, ForbiddenError)
    assert error.http_status == 403


def test_admin_cannot_create_case():
    assert isinstance(check_can_create_case(_actor(Role.ADMIN)), ForbiddenError)


def test_owner_can_modify_case():
    owner = _actor(Role.CLIENT)
    assert check_can_modify_case(owner, owner.id) is None


def test_admin_can_modify_any_case():
    assert check_can_modify_case(_actor(Role.ADMIN), uuid4()) is None


def test_other_client_cannot_modify_case():
    assert isinstance(check_can_modify_case(_actor(Role.CLIENT), uuid4()), ForbiddenError)


def test_completing_without_accepted_bid_fails():
    error = check_status_change("completed", None)
    assert isinstance(error, ValidationFailedError)
    assert error.field == "status"


def test_completing_with_accepted_bid_passes():
    assert check_status_change("completed", uuid4()) is None


def test_other_status_changes_pass():
    assert check_status_change("cancelled", None) is None
    assert check_status_change(None, None) is None


def test_update_permission_checked_before_status():
    error = validate_case_update(_actor(Role.CLIENT), uuid4(), "completed", None)
    assert isinstance(error, ForbiddenError)


def test_acceptance_requires_open_case():
    owner = _actor(Role.CLIENT)
    error = validate_bid_acceptance(owner, owner.id, "in-progress", "pending")
    assert isinstance(error, ValidationFailedError)


def test_acceptance_requires_pending_bid():
    owner = _actor(Role.CLIENT)
    error = validate_bid_acceptance(owner, owner.id, "open", "withdrawn")
    assert isinstance(error, ValidationFailedError)
    assert error.field == "bid_id"


def test_acceptance_by_owner_of_pending_bid_passes():
    owner = _actor(Role.CLIENT)
    assert validate_bid_acceptance(owner, owner.id, "open", "pending") is None


def test_reopened_case_with_accepted_bid_refuses_another():
    owner = _actor(Role.CLIENT)
    error = validate_bid_acceptance(owner, owner.id, "open", "pending", uuid4())
    assert isinstance(error, ValidationFailedError)
    assert error.field == "bid_id"
