from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextvars import ContextVar
import logging
import os
import signal
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import Executable

from core.config import settings
from core.exceptions import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()

if not settings.database:
    raise RuntimeError("Database configuration not initialized")

# Capture non-None database config for type checkers
DB_CFG = settings.database
assert DB_CFG is not None

# Errors the driver may raise before SQLAlchemy gets a chance to wrap them
CONNECTION_ERRORS: tuple[type[BaseException], ...] = (SQLAlchemyError, OSError, TimeoutError)

# Set while execute/run_sync hold a connection; faults there surface as StorageError
_statement_running: ContextVar[bool] = ContextVar("statement_running", default=False)

# Lazy engine to avoid creating pools at import time.
# Public alias for tests: unit tests monkeypatch `db.database.engine`.
engine: AsyncEngine | None = None
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if engine is not None:
        return engine
    if _engine is None:
        _engine = create_async_engine(
            DB_CFG.url,
            echo=DB_CFG.echo,
            pool_size=DB_CFG.pool_max,
            max_overflow=0,
            pool_timeout=DB_CFG.connect_timeout,
            pool_recycle=int(DB_CFG.idle_timeout),
            pool_pre_ping=DB_CFG.pool_pre_ping,
            connect_args={"timeout": DB_CFG.connect_timeout},
        )
        event.listen(_engine.sync_engine.pool, "connect", _on_connect)
        event.listen(_engine.sync_engine.pool, "invalidate", _on_invalidate)
        logger.debug("AsyncEngine created (pool_max=%s)", DB_CFG.pool_max)
    return _engine


def _on_connect(dbapi_connection, connection_record) -> None:
    logger.debug("Connected to database")


def _on_invalidate(dbapi_connection, connection_record, exception) -> None:
    if exception is None:
        return
    if _statement_running.get():
        logger.warning("Pooled connection invalidated during a statement: %s", exception)
        return
    handle_pool_fault(exception)


def handle_pool_fault(exc: BaseException) -> None:
    """Treat a connection fault outside any running statement as fatal to the whole process."""
    logger.critical("Unexpected error on pooled database connection: %s", exc)
    if DB_CFG.exit_on_pool_fault:
        os.kill(os.getpid(), signal.SIGTERM)


async def execute(
    statement: Executable | str,
    params: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """Run one parameterized statement on a pooled connection.

    The connection is held only for this call and the work is committed
    before it goes back to the pool.

    Args:
        statement: SQLAlchemy Core statement or raw SQL with ``:name`` binds.
        params: Bind values; a sequence of mappings runs the statement once per item.

    Returns:
        list[dict]: Result rows, empty when the statement returns none.

    Raises:
        StorageError: On connection loss, timeout, constraint violation or bad SQL.
    """
    stmt = text(statement) if isinstance(statement, str) else statement
    token = _statement_running.set(True)
    try:
        async with get_engine().begin() as conn:
            result = await conn.execute(stmt, params)
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]
    except CONNECTION_ERRORS as e:
        raise StorageError(message="Database failure") from e
    finally:
        _statement_running.reset(token)


async def run_sync(fn, *args: Any, **kwargs: Any) -> Any:
    """Run a synchronous Connection callable (e.g. ``metadata.create_all``) in one transaction."""
    token = _statement_running.set(True)
    try:
        async with get_engine().begin() as conn:
            return await conn.run_sync(fn, *args, **kwargs)
    except CONNECTION_ERRORS as e:
        raise StorageError(message="Database failure") from e
    finally:
        _statement_running.reset(token)


async def check_db_connection() -> bool:
    try:
        await execute("SELECT 1")
        logger.debug("Database connection is healthy")
        return True
    except StorageError as e:
        logger.error("Database connection check failed: %s", e.__cause__ or e)
        return False


async def close_db_connections() -> None:
    global engine, _engine
    try:
        if engine is not None:
            await engine.dispose()
            logger.info("Database connections (public engine) closed")
        if _engine is not None:
            await _engine.dispose()
            logger.info("Database connections closed")
    except Exception as e:
        logger.error("Error closing database connections: %s", e)
    finally:
        engine = None
        _engine = None
