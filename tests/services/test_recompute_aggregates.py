"""Aggregate Recompute — best-effort refresh after committed writes.

Invariants:
    - A recompute failure is logged as AGGREGATE_RECOMPUTE_FAILED
    - The triggering write still succeeds and stays committed
    - Missing targets are a no-op
"""

import logging
from uuid import uuid4

import lawconnect.services.recompute_aggregates as recompute_module
from lawconnect.models.bid import Bid
from lawconnect.models.case_post import CasePost
from lawconnect.services.recompute_aggregates import (
    recompute_case_bid_stats,
    recompute_lawyer_ratings,
)
from tests.services.marketplace import (
    auth, bid_body, complete_engagement, post_case, review_body,
)


def _boom(*args, **kwargs):
    raise RuntimeError("stats backend unavailable")


async def test_bid_recompute_failure_is_logged_and_bid_persists(
    client, client_user, lawyer_user, monkeypatch, caplog,
):
    case = await post_case(client, client_user)
    monkeypatch.setattr(recompute_module, "compute_bid_stats", _boom)
    caplog.set_level(logging.ERROR, logger="lawconnect.services.recompute_aggregates")

    res = await client.post(
        f"/api/v1/cases/{case['id']}/bids", json=bid_body(450), headers=auth(lawyer_user),
    )
    assert res.status_code == 201
    assert res.json()["amount"] == 450

    failures = [r for r in caplog.records if getattr(r, "error_code", None) == "AGGREGATE_RECOMPUTE_FAILED"]
    assert len(failures) == 1
    assert failures[0].aggregate == "case_bid_stats"
    assert failures[0].resource_id == case["id"]

    mine = (await client.get("/api/v1/bids/mine", headers=auth(lawyer_user))).json()
    assert len(mine) == 1
    stale = (await client.get(f"/api/v1/cases/{case['id']}", headers=auth(client_user))).json()
    assert stale["bid_count"] == 0


async def test_review_recompute_failure_does_not_fail_review(
    client, client_user, lawyer_user, monkeypatch, caplog,
):
    await client.post("/api/v1/lawyers/profile", json={}, headers=auth(lawyer_user))
    case, _ = await complete_engagement(client, client_user, lawyer_user)
    monkeypatch.setattr(recompute_module, "compute_rating_stats", _boom)
    caplog.set_level(logging.ERROR, logger="lawconnect.services.recompute_aggregates")

    res = await client.post(
        "/api/v1/reviews", json=review_body(lawyer_user, case["id"]), headers=auth(client_user),
    )
    assert res.status_code == 201
    assert any(
        getattr(r, "aggregate", None) == "lawyer_ratings" for r in caplog.records
    )


async def test_next_successful_recompute_converges(
    client, client_user, lawyer_user, other_lawyer, monkeypatch,
):
    case = await post_case(client, client_user)
    monkeypatch.setattr(recompute_module, "compute_bid_stats", _boom)
    await client.post(
        f"/api/v1/cases/{case['id']}/bids", json=bid_body(100), headers=auth(lawyer_user),
    )
    monkeypatch.undo()

    await client.post(
        f"/api/v1/cases/{case['id']}/bids", json=bid_body(300), headers=auth(other_lawyer),
    )
    body = (await client.get(f"/api/v1/cases/{case['id']}", headers=auth(client_user))).json()
    assert body["bid_count"] == 2
    assert body["average_bid"] == 200


async def test_recompute_is_full_rescan(test_db, make_user):
    owner = await make_user("client")
    lawyer = await make_user("lawyer")
    case = CasePost(
        title="t", description="d", category="Tax", budget=10, client_id=owner.id,
        bid_count=42, average_bid=9999,
    )
    test_db.add(case)
    await test_db.commit()
    test_db.add(Bid(
        amount=120, message="m", lawyer_id=lawyer.id, case_post_id=case.id,
        estimated_time_value=1, estimated_time_unit="days",
    ))
    await test_db.commit()

    assert await recompute_case_bid_stats(test_db, case.id) is True
    await test_db.refresh(case)
    assert case.bid_count == 1
    assert case.average_bid == 120


async def test_missing_targets_are_noops(test_db):
    assert await recompute_case_bid_stats(test_db, uuid4()) is True
    assert await recompute_lawyer_ratings(test_db, uuid4()) is True
