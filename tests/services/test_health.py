"""Health & Readiness Probes.

Invariants:
    - Liveness never touches the database
    - Readiness requires a reachable database with every marketplace table
"""

import lawconnect.infrastructure.database as db_module
from lawconnect.infrastructure.database import DatabaseSessionManager


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["service"] == "lawconnect-api"


async def test_readiness_with_migrated_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    body = res.json()
    assert body["checks"] == {"database": "healthy", "schema": "healthy"}
    assert body["database"]["dialect"] == "sqlite"


async def test_readiness_reports_missing_tables(client, monkeypatch):
    empty = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(db_module, "db_manager", empty)
    res = await client.get("/api/v1/health/ready")
    await empty.dispose()
    assert res.status_code == 503
    body = res.json()
    assert body["reason"] == "schema_incomplete"
    assert {"users", "cases", "bids", "reviews", "lawyer_profiles"} <= set(body["missing_tables"])


async def test_readiness_without_manager(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_not_initialized"
