"""Access Scope — role-based read filters.

Tests:
    - Admin is never restricted
    - Client sees own cases, lawyer sees open cases
    - Lawyer sees own bids only
    - Scope overrides caller filters on conflicting keys
    - Contradicting filters are detected before querying
"""

from uuid import uuid4

from lawconnect.core.access_scope import excluded_by_scope, scope_filters, scoped
from lawconnect.core.domain_types import Actor, EntityKind, Role


def _actor(role):
    return Actor(id=uuid4(), role=role)


def test_admin_has_no_scope_for_any_kind():
    admin = _actor(Role.ADMIN)
    for kind in EntityKind:
        assert scope_filters(admin, kind) == {}


def test_client_sees_only_own_cases():
    client = _actor(Role.CLIENT)
    assert scope_filters(client, EntityKind.CASE_POST) == {"client_id": client.id}


def test_lawyer_sees_only_open_cases():
    lawyer = _actor(Role.LAWYER)
    assert scope_filters(lawyer, EntityKind.CASE_POST) == {"status": "open"}


def test_lawyer_sees_only_own_bids():
    lawyer = _actor(Role.LAWYER)
    assert scope_filters(lawyer, EntityKind.BID) == {"lawyer_id": lawyer.id}


def test_client_bid_scope_is_open():
    # Clients reach bids only through a case already resolved under CASE_POST scope
    assert scope_filters(_actor(Role.CLIENT), EntityKind.BID) == {}


def test_reviews_and_profiles_are_unscoped():
    for role in Role:
        assert scope_filters(_actor(role), EntityKind.REVIEW) == {}
        assert scope_filters(_actor(role), EntityKind.LAWYER_PROFILE) == {}


def test_scoped_merges_caller_filters():
    client = _actor(Role.CLIENT)
    merged = scoped(client, EntityKind.CASE_POST, {"category": "Tax"})
    assert merged == {"category": "Tax", "client_id": client.id}


def test_scope_wins_over_conflicting_caller_filter():
    lawyer = _actor(Role.LAWYER)
    merged = scoped(lawyer, EntityKind.CASE_POST, {"status": "completed"})
    assert merged["status"] == "open"


def test_scoped_does_not_mutate_input():
    filters = {"category": "Tax"}
    scoped(_actor(Role.CLIENT), EntityKind.CASE_POST, filters)
    assert filters == {"category": "Tax"}


def test_contradicting_filter_is_excluded():
    lawyer = _actor(Role.LAWYER)
    assert excluded_by_scope(lawyer, EntityKind.CASE_POST, {"status": "completed"})
    assert not excluded_by_scope(lawyer, EntityKind.CASE_POST, {"status": "open"})
    assert not excluded_by_scope(_actor(Role.ADMIN), EntityKind.CASE_POST, {"status": "completed"})
