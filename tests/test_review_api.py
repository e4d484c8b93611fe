"""
텍스트 리뷰 API 테스트 (/api/review)
"""

from datetime import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_maker
from app.models import TypedReview

pytestmark = pytest.mark.anyio

MISSING_FIELDS_MESSAGE = (
    "Missing fields: productId, shop, ratingDescription, loggedIn and clientId are required."
)


def review_payload(**overrides):
    payload = {
        "productId": "1",
        "shop": "s",
        "ratingDescription": "Great",
        "loggedIn": "a@b.com",
        "clientId": "c1",
    }
    payload.update(overrides)
    return payload


async def count_reviews() -> int:
    async with async_session_maker() as session:
        result = await session.execute(select(func.count(TypedReview.id)))
        return result.scalar_one()


async def test_create_and_read_round_trip(client):
    r = await client.post("/api/review", json=review_payload())
    assert r.status_code == 201
    body = r.json()
    assert body["ok"] is True
    review = body["review"]
    assert review["id"]
    assert review["productId"] == "1"
    assert review["shop"] == "s"
    assert review["ratingDescription"] == "Great"
    assert review["loggedIn"] == "a@b.com"
    assert review["clientId"] == "c1"
    assert isinstance(datetime.fromisoformat(review["createdAt"]), datetime)

    r = await client.get("/api/review", params={"productId": "1", "shop": "s"})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "reviews": [review]}


async def test_read_has_cors_headers(client):
    r = await client.get("/api/review", params={"productId": "1", "shop": "s"})
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"
    assert r.headers["access-control-allow-methods"] == "GET,OPTIONS"
    assert r.headers["access-control-allow-headers"] == "Content-Type"


async def test_same_client_may_post_many_reviews(client):
    for text in ("First", "Second", "Third"):
        r = await client.post("/api/review", json=review_payload(ratingDescription=text))
        assert r.status_code == 201

    r = await client.get("/api/review", params={"productId": "1", "shop": "s"})
    reviews = r.json()["reviews"]
    assert [rv["ratingDescription"] for rv in reviews] == ["Third", "Second", "First"]


async def test_read_filters_by_client(client):
    await client.post("/api/review", json=review_payload(clientId="c1"))
    await client.post("/api/review", json=review_payload(clientId="c2", loggedIn="x@y.com"))

    r = await client.get("/api/review", params={"productId": "1", "shop": "s", "client": "c2"})
    reviews = r.json()["reviews"]
    assert len(reviews) == 1
    assert reviews[0]["loggedIn"] == "x@y.com"


async def test_read_empty_product(client):
    r = await client.get("/api/review", params={"productId": "404", "shop": "s"})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "reviews": []}


async def test_read_requires_product_and_shop(client):
    r = await client.get("/api/review", params={"shop": "s"})
    assert r.status_code == 400
    assert r.json()["ok"] is False
    assert "productId and shop are required" in r.json()["message"]


@pytest.mark.parametrize(
    "missing", ["productId", "shop", "ratingDescription", "loggedIn", "clientId"]
)
async def test_missing_field_rejected(client, missing):
    payload = review_payload()
    del payload[missing]
    r = await client.post("/api/review", json=payload)
    assert r.status_code == 400
    assert r.json() == {"ok": False, "message": MISSING_FIELDS_MESSAGE}
    assert await count_reviews() == 0


async def test_empty_description_rejected(client):
    r = await client.post("/api/review", json=review_payload(ratingDescription=""))
    assert r.status_code == 400
    assert r.json()["message"] == MISSING_FIELDS_MESSAGE


async def test_form_encoded_body_rejected_before_parsing(client):
    r = await client.post("/api/review", data=review_payload())
    assert r.status_code == 400
    assert r.json() == {
        "ok": False,
        "message": "Invalid Content-Type. Expected application/json.",
    }
    assert await count_reviews() == 0


async def test_missing_content_type_rejected(client):
    r = await client.post("/api/review", content=b'{"productId": "1"}')
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid Content-Type. Expected application/json."


async def test_malformed_json_rejected(client):
    r = await client.post(
        "/api/review",
        content=b'{"productId": ',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["ok"] is False


async def test_json_array_body_rejected(client):
    r = await client.post("/api/review", json=[review_payload()])
    assert r.status_code == 400


async def test_storage_failure_on_read_is_opaque(client, monkeypatch):
    async def broken_execute(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(AsyncSession, "execute", broken_execute)

    r = await client.get("/api/review", params={"productId": "1", "shop": "s"})
    assert r.status_code == 500
    assert r.json() == {
        "ok": False,
        "message": "An error occurred while fetching the typed reviews.",
    }


async def test_storage_failure_on_write_is_opaque(client, monkeypatch):
    async def broken_commit(self):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(AsyncSession, "commit", broken_commit)

    r = await client.post("/api/review", json=review_payload())
    assert r.status_code == 500
    assert r.json() == {
        "ok": False,
        "message": "An error occurred while creating the typed review.",
    }
