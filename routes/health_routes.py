"""
Health check endpoint.

GET /health - checks MongoDB and Redis connectivity.
Rules:
- MongoDB failure → "unhealthy" (503) - accounts cannot be looked up.
- Redis failure → "unhealthy" (503) - OTP state is unavailable.
- Redis not configured → "degraded" (200) - OTP state is process-local.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from redis.exceptions import RedisError

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    checks: dict[str, str] = {}
    overall = "healthy"

    try:
        await request.app.state.db.client.admin.command("ping")
        checks["mongodb"] = "ok"
    except PyMongoError:
        checks["mongodb"] = "error"
        overall = "unhealthy"

    redis = request.app.state.redis
    if redis is None:
        checks["redis"] = "not_configured"
        if overall == "healthy":
            overall = "degraded"
    else:
        try:
            await redis.ping()
            checks["redis"] = "ok"
        except RedisError:
            checks["redis"] = "error"
            overall = "unhealthy"

    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(
        status_code=status_code,
        content={"status": overall, "checks": checks},
    )
