"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import redis.asyncio as aioredis
import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo import AsyncMongoClient

from config import AppSettings
from errors import register_error_handlers
from infrastructure.cache.memory_store import InMemoryTTLStore
from infrastructure.cache.protocol import TTLStore
from infrastructure.cache.redis_client import create_redis_client
from infrastructure.cache.ttl_store import RedisTTLStore
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.http_client import HttpClient
from repositories.user_repository import UserRepository
from routes.auth_routes import router as auth_router
from routes.health_routes import router as health_router
from services.otp import OtpPolicy
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


async def open_ttl_store(
    redis_uri: Optional[str],
) -> tuple[Optional[aioredis.Redis], TTLStore]:
    """Pick the OTP state store.

    Without a Redis URI the store is process-local. A configured Redis that
    cannot be reached aborts startup: a per-process fallback would split
    locks and counters across instances.
    """
    if not redis_uri:
        log.warning("otp_store_in_memory", reason="redis_not_configured")
        return None, InMemoryTTLStore()

    redis_client = await create_redis_client(redis_uri)
    if redis_client is None:
        log.error("otp_store_unavailable", reason="redis_unreachable")
        raise RuntimeError("REDIS_URI is configured but Redis is unreachable")
    return redis_client, RedisTTLStore(redis_client)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(settings.db.mongodb_uri)
        app.state.settings = settings
        app.state.db = mongo_client[settings.db.db_name]
        app.state.users = UserRepository(app.state.db["users"])
        await app.state.users.ensure_indexes()

        redis_client, app.state.ttl_store = await open_ttl_store(settings.redis.redis_uri)
        app.state.redis = redis_client

        http_client = HttpClient(timeout=settings.email.email_timeout_seconds)
        app.state.notifier = ZeptoMailProvider(
            settings.email, http_client, app_url=settings.app_url
        )
        app.state.otp_policy = OtpPolicy.from_settings(settings.otp)

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        await http_client.aclose()
        await mongo_client.close()
        if redis_client is not None:
            await redis_client.aclose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["authorization", "content-type"],
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)

    return app
