"""
Database Infrastructure
=======================

Manages the database engine, its lifecycle, and the Persistence Adapter the
ticket and comment services run their statements through.

Uses SQLAlchemy 2.0 async engines: aiosqlite for SQLite (default) and
asyncpg for PostgreSQL.
"""

from typing import Any, List, Mapping, Optional

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from helpdesk.config import Settings
from helpdesk.core import IPersistenceAdapter, RunResult, Row, StoreFailureException
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    SQLAlchemy 2.0 style using DeclarativeBase.
    All models inherit from this class.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database(IPersistenceAdapter):
    """
    Persistence Adapter over an async SQLAlchemy engine.

    Constructed explicitly and handed to the services; ``init()`` and
    ``close()`` bracket its lifetime.

    Usage:
        database = Database("sqlite+aiosqlite:///./helpdesk.db")
        database.init()
        await database.create_tables()
        rows = await database.query("SELECT * FROM tickets WHERE status = :status",
                                    {"status": "open"})
        await database.close()
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ):
        self.url = url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._engine: Optional[AsyncEngine] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        """
        Get the database engine.

        Raises:
            RuntimeError: If engine has not been initialized
        """
        if self._engine is None:
            raise RuntimeError("Database engine not initialized. Call init() first.")
        return self._engine

    def init(self) -> AsyncEngine:
        """
        Initialize the database engine.

        Should be called during application startup.
        """
        if self._engine is not None:
            return self._engine

        if self.is_sqlite:
            self._engine = create_async_engine(self.url, echo=self._echo)
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            # Fix asyncpg SSL: replace sslmode with ssl for asyncpg compatibility
            self._engine = create_async_engine(
                self.url.replace("sslmode=", "ssl="),
                echo=self._echo,
                pool_size=self._pool_size,
                max_overflow=self._max_overflow,
                pool_pre_ping=True,  # Verify connections before using
            )

        logger.info("Database engine initialized", extra={"dialect": self._engine.dialect.name})
        return self._engine

    async def close(self) -> None:
        """
        Dispose of the engine and its connections.

        Should be called during application shutdown.
        """
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database connection closed")

    async def create_tables(self) -> None:
        """Create all tables known to the ORM metadata (idempotent)."""
        # Register the models on Base.metadata
        from helpdesk.tickets.infrastructure import models as ticket_models  # noqa: F401
        from helpdesk.comments.infrastructure import models as comment_models  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise self._store_failure("create_tables", e) from e

    async def ping(self) -> bool:
        """Return True when the store answers a trivial query."""
        try:
            await self.get("SELECT 1 AS ok")
        except StoreFailureException:
            return False
        return True

    # ========== IPersistenceAdapter ==========
    # Driver errors that are not DBAPI errors (bind overflow, adapter
    # attribute errors) are reported as store failures as well.

    async def query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        engine = self.engine
        try:
            async with engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                return [dict(row) for row in result.mappings().all()]
        except Exception as e:
            raise self._store_failure(sql, e) from e

    async def run(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> RunResult:
        engine = self.engine
        try:
            async with engine.begin() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                # asyncpg cursors have no lastrowid after plain DML
                last_id = result.lastrowid if self.is_sqlite else None
                return RunResult(id=last_id, changes=result.rowcount)
        except Exception as e:
            raise self._store_failure(sql, e) from e

    async def get(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Optional[Row]:
        engine = self.engine
        try:
            async with engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                row = result.mappings().first()
                return dict(row) if row is not None else None
        except Exception as e:
            raise self._store_failure(sql, e) from e

    def _store_failure(self, statement: str, error: Exception) -> StoreFailureException:
        logger.error(
            "Store statement failed",
            extra={
                "statement": " ".join(statement.split()),
                "error_type": type(error).__name__,
                "error_message": str(error),
            }
        )
        return StoreFailureException(
            "Database operation failed",
            {"error_type": type(error).__name__}
        )


__all__ = ["Base", "Database"]
