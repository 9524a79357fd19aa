"""Review Routes — completed-engagement gate, rating statistics, anonymity.

Invariants:
    - No completed case won by the lawyer → NO_COMPLETED_ENGAGEMENT (403)
    - Once the case is completed with the lawyer's accepted bid, the same review succeeds
    - ratings_average/ratings_quantity follow every insert, rating change and delete
"""

from tests.services.marketplace import (
    auth, complete_engagement, place_bid, post_case, review_body,
)


async def _profile(client, reader, lawyer):
    res = await client.get(f"/api/v1/lawyers/{lawyer.id}/profile", headers=auth(reader))
    return res.json()


async def test_review_requires_completed_engagement(client, client_user, lawyer_user):
    case = await post_case(client, client_user)
    bid = await place_bid(client, lawyer_user, case["id"])

    res = await client.post(
        "/api/v1/reviews", json=review_body(lawyer_user, case["id"]), headers=auth(client_user),
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "NO_COMPLETED_ENGAGEMENT"

    await client.post(
        f"/api/v1/cases/{case['id']}/accept-bid",
        json={"bid_id": bid["id"]}, headers=auth(client_user),
    )
    res = await client.post(
        "/api/v1/reviews", json=review_body(lawyer_user, case["id"]), headers=auth(client_user),
    )
    assert res.status_code == 403  # accepted but not completed yet

    await client.patch(
        f"/api/v1/cases/{case['id']}", json={"status": "completed"}, headers=auth(client_user),
    )
    res = await client.post(
        "/api/v1/reviews", json=review_body(lawyer_user, case["id"]), headers=auth(client_user),
    )
    assert res.status_code == 201
    assert res.json()["user_id"] == str(client_user.id)


async def test_cannot_review_a_lawyer_who_lost_the_case(
    client, client_user, lawyer_user, other_lawyer,
):
    case, _ = await complete_engagement(client, client_user, lawyer_user)
    res = await client.post(
        "/api/v1/reviews", json=review_body(other_lawyer, case["id"]), headers=auth(client_user),
    )
    assert res.status_code == 403


async def test_lawyer_cannot_review(client, client_user, lawyer_user, other_lawyer):
    case, _ = await complete_engagement(client, client_user, lawyer_user)
    res = await client.post(
        "/api/v1/reviews", json=review_body(lawyer_user, case["id"]), headers=auth(other_lawyer),
    )
    assert res.json()["error"]["code"] == "ONLY_CLIENTS_CAN_REVIEW"


async def test_duplicate_review_is_409(client, client_user, lawyer_user):
    case, _ = await complete_engagement(client, client_user, lawyer_user)
    body = review_body(lawyer_user, case["id"])
    await client.post("/api/v1/reviews", json=body, headers=auth(client_user))
    res = await client.post("/api/v1/reviews", json=body, headers=auth(client_user))
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_REVIEW"


async def test_rating_out_of_range_is_400(client, client_user, lawyer_user):
    case, _ = await complete_engagement(client, client_user, lawyer_user)
    res = await client.post(
        "/api/v1/reviews", json=review_body(lawyer_user, case["id"], rating=6),
        headers=auth(client_user),
    )
    assert res.status_code == 400


async def test_ratings_average_of_two_reviews(client, make_user, lawyer_user):
    await client.post("/api/v1/lawyers/profile", json={}, headers=auth(lawyer_user))
    for rating in (4, 5):
        owner = await make_user("client")
        case, _ = await complete_engagement(client, owner, lawyer_user)
        res = await client.post(
            "/api/v1/reviews", json=review_body(lawyer_user, case["id"], rating=rating),
            headers=auth(owner),
        )
        assert res.status_code == 201

    profile = await _profile(client, lawyer_user, lawyer_user)
    assert profile["ratings_quantity"] == 2
    assert profile["ratings_average"] == 4.5
    assert profile["completed_cases"] == 2


async def test_rating_edit_and_delete_recompute(client, client_user, lawyer_user):
    await client.post("/api/v1/lawyers/profile", json={}, headers=auth(lawyer_user))
    case, _ = await complete_engagement(client, client_user, lawyer_user)
    review = (await client.post(
        "/api/v1/reviews", json=review_body(lawyer_user, case["id"], rating=5),
        headers=auth(client_user),
    )).json()

    res = await client.patch(
        f"/api/v1/reviews/{review['id']}", json={"rating": 2}, headers=auth(client_user),
    )
    assert res.status_code == 200
    assert (await _profile(client, client_user, lawyer_user))["ratings_average"] == 2

    res = await client.delete(f"/api/v1/reviews/{review['id']}", headers=auth(client_user))
    assert res.status_code == 204
    profile = await _profile(client, client_user, lawyer_user)
    assert profile["ratings_quantity"] == 0
    assert profile["ratings_average"] == 0


async def test_only_author_edits_admin_deletes(
    client, client_user, other_client, lawyer_user, admin_user,
):
    case, _ = await complete_engagement(client, client_user, lawyer_user)
    review = (await client.post(
        "/api/v1/reviews", json=review_body(lawyer_user, case["id"]), headers=auth(client_user),
    )).json()

    res = await client.patch(
        f"/api/v1/reviews/{review['id']}", json={"title": "x"}, headers=auth(other_client),
    )
    assert res.status_code == 403
    res = await client.patch(
        f"/api/v1/reviews/{review['id']}", json={"title": "x"}, headers=auth(admin_user),
    )
    assert res.status_code == 403
    res = await client.delete(f"/api/v1/reviews/{review['id']}", headers=auth(admin_user))
    assert res.status_code == 204


async def test_anonymous_review_hides_reviewer(client, client_user, lawyer_user, admin_user):
    case, _ = await complete_engagement(client, client_user, lawyer_user)
    review = (await client.post(
        "/api/v1/reviews",
        json=review_body(lawyer_user, case["id"], is_anonymous=True),
        headers=auth(client_user),
    )).json()

    listed = (await client.get(
        f"/api/v1/lawyers/{lawyer_user.id}/reviews", headers=auth(lawyer_user),
    )).json()
    assert listed[0]["user_id"] is None
    assert listed[0]["is_anonymous"] is True

    as_author = (await client.get(
        f"/api/v1/reviews/{review['id']}", headers=auth(client_user),
    )).json()
    assert as_author["user_id"] == str(client_user.id)

    as_admin = (await client.get(
        f"/api/v1/reviews/{review['id']}", headers=auth(admin_user),
    )).json()
    assert as_admin["user_id"] == str(client_user.id)
