"""Database — async engine, request sessions and readiness checks for the content store.

Invariants:
    - A failing request rolls its session back before the error leaves session()
    - Unique-constraint violations (user emails, skill names) surface as ConflictError (409)
    - Every other SQLAlchemy failure surfaces as DatabaseError (503), never a driver error
    - SQLite URLs get no pool sizing arguments (tests and local runs)

Design Decisions:
    - expire_on_commit=False: routes serialize documents after commit
    - db_manager is created by init_db() in the lifespan, never at import time
"""

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from portfolio.core.errors import ConflictError, DatabaseError, PortfolioError

logger = logging.getLogger(__name__)


def engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_recycle": 1800,
    }


def translate_error(exc: SQLAlchemyError) -> PortfolioError:
    """Map a SQLAlchemy failure onto the API error it should produce."""
    if isinstance(exc, IntegrityError):
        return ConflictError("Content conflicts with an existing record")
    if isinstance(exc, OperationalError):
        return DatabaseError("database unreachable", "execute")
    return DatabaseError(exc.__class__.__name__, "query")


@dataclass(frozen=True)
class DatabaseHealth:
    ok: bool
    latency_ms: float
    error: str | None = None


class DatabaseSessionManager:
    def __init__(
        self, database_url: str, pool_size: int = 10, max_overflow: int = 5,
    ):
        self.engine = create_async_engine(
            database_url, **engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = translate_error(e)
            logger.error(
                f"Content store error: {e.__class__.__name__}: {e}",
                extra={"error_code": error.code, "status_code": error.http_status},
            )
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> DatabaseHealth:
        """Round-trip a trivial query; used by the readiness probe."""
        started = time.perf_counter()
        try:
            async with self._session_factory() as db:
                await db.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Readiness check failed: {e}")
            return DatabaseHealth(
                ok=False,
                latency_ms=round((time.perf_counter() - started) * 1000, 2),
                error=e.__class__.__name__,
            )
        return DatabaseHealth(
            ok=True, latency_ms=round((time.perf_counter() - started) * 1000, 2),
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session dependency."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
