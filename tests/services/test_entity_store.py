"""Entity Store — SQLAlchemy implementation of the store contract.

Invariants:
    - Equality filters only; None compiles to IS NULL
    - Unknown columns raise ValueError before any query
    - Unique index violations surface as DatabaseError after rollback
    - Case relationships stay unloaded unless loader options ask for them
"""

from uuid import uuid4

import pytest
from sqlalchemy import inspect
from sqlalchemy.orm import selectinload

from lawconnect.core.errors import DatabaseError, ResourceNotFoundError
from lawconnect.infrastructure.entity_store import SqlEntityStore
from lawconnect.models.case_post import CasePost
from lawconnect.models.user import User


def _user(email: str, role: str = "client") -> User:
    return User(name="Test", email=email, password_hash="x$y", role=role)


async def test_insert_and_find_by_id(test_db):
    store = SqlEntityStore(test_db, User)
    user_id = await store.insert(_user("a@example.com"))
    found = await store.find_by_id(user_id)
    assert found.email == "a@example.com"
    assert await store.find_by_id(uuid4()) is None


async def test_get_or_404_names_the_model(test_db):
    with pytest.raises(ResourceNotFoundError) as exc:
        await SqlEntityStore(test_db, User).get_or_404(uuid4())
    assert exc.value.message == "User not found"


async def test_find_many_equality_ordering_pagination(test_db):
    store = SqlEntityStore(test_db, User)
    for name, role in (("c", "client"), ("a", "lawyer"), ("b", "lawyer")):
        user = _user(f"{name}@example.com", role)
        user.name = name
        await store.insert(user)

    lawyers = await store.find_many({"role": "lawyer"}, order_by="name")
    assert [u.name for u in lawyers] == ["a", "b"]

    page = await store.find_many(order_by="name", descending=True, limit=1, offset=1)
    assert [u.name for u in page] == ["b"]


async def test_none_filter_matches_null(test_db, make_user):
    owner = await make_user("client")
    store = SqlEntityStore(test_db, CasePost)
    await store.insert(CasePost(
        title="t", description="d", category="Tax", budget=1, client_id=owner.id,
    ))
    assert len(await store.find_many({"accepted_bid_id": None})) == 1
    assert await store.find_many({"accepted_bid_id": uuid4()}) == []


async def test_unknown_column_rejected(test_db):
    with pytest.raises(ValueError):
        await SqlEntityStore(test_db, User).find_many({"nickname": "x"})


async def test_update_and_delete(test_db):
    store = SqlEntityStore(test_db, User)
    user_id = await store.insert(_user("u@example.com"))
    updated = await store.update(user_id, {"name": "Renamed"})
    assert updated.name == "Renamed"
    await store.delete(user_id)
    assert await store.find_by_id(user_id) is None


async def test_unique_violation_is_database_error(test_db):
    store = SqlEntityStore(test_db, User)
    await store.insert(_user("dup@example.com"))
    with pytest.raises(DatabaseError):
        await store.insert(_user("dup@example.com"))
    # Session is usable after the rollback
    assert len(await store.find_many()) == 1


async def test_case_relationships_load_only_on_request(test_db, test_session_factory, make_user):
    owner = await make_user("client")
    case_id = await SqlEntityStore(test_db, CasePost).insert(CasePost(
        title="t", description="d", category="Tax", budget=1, client_id=owner.id,
    ))

    async with test_session_factory() as session:
        plain = await SqlEntityStore(session, CasePost).find_by_id(case_id)
        assert {"bids", "reviews"} <= inspect(plain).unloaded

    async with test_session_factory() as session:
        loaded = await SqlEntityStore(session, CasePost).get_or_404(
            case_id, options=(selectinload(CasePost.bids), selectinload(CasePost.reviews)),
        )
        assert not {"bids", "reviews"} & inspect(loaded).unloaded
        assert loaded.bids == []
