"""
VidTube Database Layer — async SQLAlchemy engine wrapper.

The ``Database`` object is constructed once at process start, opened in the
application lifespan and closed at shutdown. Each request borrows one
``AsyncSession`` from it through :func:`get_db`.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the async engine and the session factory."""

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
    ):
        self.url = url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.url).get_backend_name() == "sqlite"

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    async def connect(self):
        """Create the engine and the session factory."""
        if self._engine is not None:
            return
        kwargs: Dict[str, Any] = {"echo": self._echo}
        if not self.is_sqlite:
            kwargs["pool_pre_ping"] = True
            if self._pool_size is not None:
                kwargs["pool_size"] = self._pool_size
            if self._max_overflow is not None:
                kwargs["max_overflow"] = self._max_overflow

        self._engine = create_async_engine(self.url, **kwargs)
        if self.is_sqlite:
            _enable_sqlite_transactions(self._engine)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)
        logger.info("Database engine created", extra={"backend": make_url(self.url).get_backend_name()})

    async def close(self):
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    async def create_all(self):
        """Create every table declared on ``Base``."""
        from vidtube.models import models  # noqa: F401  (registers tables)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._session_factory is None:
            await self.connect()
        async with self._session_factory() as session:
            yield session

    async def health_check(self) -> Dict[str, str]:
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return {"status": "healthy", "database": "connected"}
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return {"status": "degraded", "database": str(e)}


def _enable_sqlite_transactions(engine: AsyncEngine):
    """
    Let SQLAlchemy drive BEGIN/SAVEPOINT on SQLite.

    The sqlite3 driver otherwise opens transactions lazily, which breaks
    ``begin_nested()``.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
