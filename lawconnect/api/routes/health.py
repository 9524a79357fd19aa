"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 when the database is unreachable OR any
      marketplace table is missing (migrations not applied)

Design Decisions:
    - db_manager read from the module at call time: it is assigned during lifespan startup
    - Expected tables come from Base.metadata, so a new model is checked without edits here
    - Ready responses carry dialect and round-trip latency for deploy diagnostics
"""

import logging
import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import lawconnect.models  # noqa: F401
from lawconnect.db.base import Base
from lawconnect.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _not_ready(reason: str, **detail) -> JSONResponse:
    logger.warning(f"Readiness check failed: {reason}", extra={"path": "/api/v1/health/ready"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason, **detail},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "lawconnect-api", "version": "1.0.0"}


@router.get("/ready")
async def readiness_check():
    """Database round-trip, then presence of every mapped table."""
    manager = database.db_manager
    if manager is None:
        return _not_ready("database_not_initialized")

    started = time.perf_counter()
    if not await manager.health_check():
        return _not_ready("database_unavailable")
    latency_ms = round((time.perf_counter() - started) * 1000, 2)

    missing = sorted(set(Base.metadata.tables) - await manager.table_names())
    if missing:
        return _not_ready("schema_incomplete", missing_tables=missing)

    return {
        "status": "ready",
        "checks": {"database": "healthy", "schema": "healthy"},
        "database": {"dialect": manager.engine.dialect.name, "latency_ms": latency_ms},
    }
