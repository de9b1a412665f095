import logging
from typing import Any

from sqlalchemy import delete, func, insert, select, update

from db import database
from db.models.post import posts_table, utcnow
from db.repositories.decorators import handle_db_errors

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS: frozenset[str] = frozenset({"title", "content", "excerpt", "tags"})

PostRow = dict[str, Any]


@handle_db_errors(log_prefix="fetching paginated posts")
async def get_posts_paginated(*, offset: int, limit: int) -> list[PostRow]:
    stmt = (
        select(posts_table)
        .order_by(posts_table.c.created_at.desc(), posts_table.c.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return await database.execute(stmt)


@handle_db_errors(log_prefix="counting posts")
async def count_posts() -> int:
    rows = await database.execute(select(func.count().label("count")).select_from(posts_table))
    return int(rows[0]["count"])


@handle_db_errors(log_prefix="fetching post")
async def get_post_by_id(post_id: int) -> PostRow | None:
    rows = await database.execute(select(posts_table).where(posts_table.c.id == post_id))
    if not rows:
        logger.info("Post with id %s not found", post_id)
        return None
    return rows[0]


@handle_db_errors(log_prefix="creating post")
async def create_post(
    *,
    title: str,
    content: str,
    excerpt: str | None = None,
    tags: str | None = None,
) -> PostRow:
    now = utcnow()
    stmt = (
        insert(posts_table)
        .values(title=title, content=content, excerpt=excerpt, tags=tags, created_at=now, updated_at=now)
        .returning(*posts_table.c)
    )
    rows = await database.execute(stmt)
    post = rows[0]
    logger.info("Created new post with id %s", post["id"])
    return post


@handle_db_errors(log_prefix="updating post")
async def update_post(post_id: int, changes: dict[str, Any]) -> PostRow | None:
    """Apply only the provided fields; ``updated_at`` is refreshed even when ``changes`` is empty."""
    disallowed = set(changes) - UPDATABLE_FIELDS
    if disallowed:
        raise ValueError(f"Fields cannot be updated: {', '.join(sorted(disallowed))}")

    stmt = (
        update(posts_table)
        .where(posts_table.c.id == post_id)
        .values(**changes, updated_at=utcnow())
        .returning(*posts_table.c)
    )
    rows = await database.execute(stmt)
    if not rows:
        logger.info("Skip update: post %s not found", post_id)
        return None
    logger.info("Updated post %s (%s)", post_id, ", ".join(sorted(changes)) or "timestamp only")
    return rows[0]


@handle_db_errors(log_prefix="deleting post")
async def delete_post_by_id(post_id: int) -> bool:
    rows = await database.execute(
        delete(posts_table).where(posts_table.c.id == post_id).returning(posts_table.c.id)
    )
    if not rows:
        logger.info("Skip delete: post %s not found", post_id)
        return False
    logger.info("Deleted post with id %s", post_id)
    return True
