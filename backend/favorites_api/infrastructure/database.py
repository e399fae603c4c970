"""Database Session Manager - async connection pool, per-request sessions, error mapping.

Invariants:
    - Exactly one DatabaseSessionManager per process, built in the lifespan hook
      and stored on app.state (never a module global)
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions, and connect-time socket, timeout and asyncpg
      errors, mapped to StorageFailureError with the raw driver text

Design Decisions:
    - asyncpg driver: cancelling the request task cancels the in-flight statement
    - pool_pre_ping for stale connection detection
    - expire_on_commit=False: rows stay readable after commit in async context
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import asyncpg
from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from favorites_api.core.domain_types import StorageOperation
from favorites_api.core.errors import StorageFailureError

logger = logging.getLogger(__name__)


def _driver_message(exc: SQLAlchemyError) -> str:
    """Underlying DBAPI message when present, else SQLAlchemy's own text."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@asynccontextmanager
async def storage_errors(
    session: AsyncSession, operation: StorageOperation,
) -> AsyncGenerator[None, None]:
    """Roll back and raise StorageFailureError for any SQLAlchemy failure."""
    try:
        yield
    except IntegrityError as e:
        await session.rollback()
        logger.error(
            f"DB integrity error: {e}", extra={"operation": operation.value},
        )
        raise StorageFailureError(_driver_message(e), operation.value) from e
    except OperationalError as e:
        await session.rollback()
        logger.error(
            f"DB operational error: {e}", extra={"operation": operation.value},
        )
        raise StorageFailureError(_driver_message(e), operation.value) from e
    except DBAPIError as e:
        await session.rollback()
        logger.error(
            f"DB driver error: {e}", extra={"operation": operation.value},
        )
        raise StorageFailureError(_driver_message(e), operation.value) from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(
            f"SQLAlchemy error: {e}", extra={"operation": operation.value},
        )
        raise StorageFailureError(_driver_message(e), operation.value) from e
    except (OSError, asyncio.TimeoutError, asyncpg.PostgresError) as e:
        # connect-time failures reach us unwrapped by SQLAlchemy
        await session.rollback()
        logger.error(
            f"DB connection error: {e!r}", extra={"operation": operation.value},
        )
        raise StorageFailureError(str(e) or repr(e), operation.value) from e


class DatabaseSessionManager:
    """Owns the async engine and hands out one session per request."""

    def __init__(
        self, database_url: str, pool_size: int = 10, max_overflow: int = 5,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def verify_connection(self) -> None:
        """Run SELECT 1; raise StorageFailureError if the database is unreachable."""
        async with self.session() as db:
            async with storage_errors(db, StorageOperation.PING):
                await db.execute(text("SELECT 1"))

    async def check_connectivity(self) -> str | None:
        """Readiness check: None when SELECT 1 succeeds, else the failure text. Never raises."""
        try:
            await self.verify_connection()
            return None
        except StorageFailureError as e:
            logger.error(f"DB health check failed: {e.detail}")
            return e.detail
        except Exception as e:
            logger.error(f"DB health check failed: {e!r}")
            return str(e) or repr(e)

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_db_manager(request: Request) -> DatabaseSessionManager | None:
    """The manager built at startup, or None if lifespan never ran."""
    return getattr(request.app.state, "db_manager", None)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    db_manager = get_db_manager(request)
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
