"""
VidTube — Main FastAPI Application

Video sharing backend: channels, videos, comments, likes, subscriptions,
tweets and playlists.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from vidtube.core.config import get_settings
from vidtube.core.database import Database
from vidtube.core.errors import register_exception_handlers

settings = get_settings()

# ── Logging ──────────────────────────────────────────────────────────────

logging.basicConfig(level=logging.getLevelName(settings.log_level), format="%(message)s")

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level)
    ),
)

logger = structlog.get_logger()


# ── Lifespan ─────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown hooks."""
    logger.info("Starting VidTube", version=settings.app_version)

    database = Database(
        settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )
    await database.connect()
    await database.create_all()
    app.state.database = database

    from vidtube.services.media.duration_probe import FfprobeDurationProbe
    from vidtube.services.media.media_host import MinioMediaHost
    app.state.media_host = MinioMediaHost()
    app.state.duration_probe = FfprobeDurationProbe()

    logger.info("VidTube ready", bucket=settings.minio_bucket, api_prefix=settings.api_prefix)

    yield

    await database.close()
    logger.info("Shutting down VidTube")


# ── App ──────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Video sharing backend",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Prometheus metrics
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

register_exception_handlers(app)

# ── Routes ───────────────────────────────────────────────────────────────

from vidtube.api.routes import channels, comments, health, likes, playlists, subscriptions, tweets, videos

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(videos.router, prefix=settings.api_prefix)
app.include_router(comments.router, prefix=settings.api_prefix)
app.include_router(likes.router, prefix=settings.api_prefix)
app.include_router(subscriptions.router, prefix=settings.api_prefix)
app.include_router(tweets.router, prefix=settings.api_prefix)
app.include_router(playlists.router, prefix=settings.api_prefix)
app.include_router(channels.router, prefix=settings.api_prefix)
app.include_router(channels.dashboard_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "api": settings.api_prefix,
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "version": settings.app_version}
