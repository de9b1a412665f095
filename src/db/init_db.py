from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import logging

from sqlalchemy import func, insert, select

from db import database
from db.models.post import posts_table, utcnow
from db.seed import SEED_POSTS

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[object]]


@dataclass(frozen=True)
class InitResult:
    """Outcome of startup initialization."""

    ok: bool
    attempts: int
    error: BaseException | None = None


async def _initialize_once() -> int:
    """Verify connectivity, create the schema and seed an empty table.

    Returns the number of seed posts inserted (0 when posts already exist).
    """
    await database.execute("SELECT 1")
    logger.info("Database connection established")

    await database.run_sync(database.Base.metadata.create_all, tables=[posts_table], checkfirst=True)
    logger.info("Database schema initialized")

    rows = await database.execute(select(func.count().label("count")).select_from(posts_table))
    count = int(rows[0]["count"])
    if count > 0:
        logger.info("Found %s existing posts in database", count)
        return 0

    logger.info("No posts found, inserting sample data...")
    now = utcnow()
    await database.execute(
        insert(posts_table),
        [{**post, "created_at": now, "updated_at": now} for post in SEED_POSTS],
    )
    logger.info("Sample data inserted successfully")
    return len(SEED_POSTS)


async def initialize_database(
    max_attempts: int = 5,
    retry_delay: float = 3.0,
    sleep: Sleep = asyncio.sleep,
) -> InitResult:
    """Run schema/seed initialization with a bounded, fixed-delay retry.

    Safe to call repeatedly: the table is created only when missing and seed
    data is inserted only when the table is empty.
    """
    last_error: BaseException | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            logger.info("Attempting to initialize database (attempt %s/%s)", attempt, max_attempts)
            await _initialize_once()
            logger.info("Database initialization completed successfully")
            return InitResult(ok=True, attempts=attempt)
        except Exception as e:
            last_error = e
            retries_left = max_attempts - attempt
            logger.error(
                "Database initialization failed (%s retries left): %s",
                retries_left,
                e.__cause__ or e,
            )
            if retries_left:
                logger.info("Retrying database initialization in %s seconds...", retry_delay)
                await sleep(retry_delay)

    logger.critical("Database initialization failed after %s attempts", max_attempts)
    return InitResult(ok=False, attempts=max_attempts, error=last_error)
