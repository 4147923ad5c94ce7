"""Database Session Manager - async engine, request-scoped sessions, health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions escaping a session are mapped to DatabaseError
    - The volatile backend (in-memory SQLite) lives on one shared connection,
      so every session sees the same data for the life of the process
    - At most one session is open on the volatile backend at a time: closing
      or rolling back a session resets the shared connection for everyone

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - StaticPool for :memory: URLs; pooled engine with pre-ping otherwise
    - asyncio.Lock held for the whole session on the volatile backend;
      concurrent requests queue instead of sharing a transaction
"""

import asyncio
import logging
from contextlib import asynccontextmanager, nullcontext
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from phonebook.core.errors import DatabaseError
from phonebook.db.base import Base

logger = logging.getLogger(__name__)


def is_in_memory_url(database_url: str) -> bool:
    return database_url.startswith("sqlite") and ":memory:" in database_url


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.in_memory = is_in_memory_url(database_url)
        if self.in_memory:
            self.engine = create_async_engine(database_url, poolclass=StaticPool)
        elif database_url.startswith("sqlite"):
            self.engine = create_async_engine(database_url, pool_pre_ping=True)
        else:
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
        self._memory_lock = asyncio.Lock() if self.in_memory else None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception.

        On the volatile backend the session holds _memory_lock until closed.
        """
        async with self._memory_lock or nullcontext():
            async with self._scoped_session() as session:
                yield session

    @asynccontextmanager
    async def _scoped_session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create all tables. Used for the volatile backend, which has no migrations."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for the readiness endpoint)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager
