import importlib
import math
import re

from core.exceptions import InternalError, NotFoundError, StorageError
import schemas.posts
from schemas.responses import MessageResponse, PaginationMeta, PostListResponse

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_param(raw: str | int | None, default: int) -> int:
    """Coerce a query value the way the blog client has always sent it.

    Leading digits are used ("3abc" -> 3); absent, non-numeric and zero values
    fall back to ``default``.
    """
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw or default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    return int(match.group(1)) or default


def normalize_pagination(page: str | int | None, limit: str | int | None) -> tuple[int, int]:
    """Coerce raw page/limit and clamp values that would produce a negative offset or limit."""
    page_num = max(parse_int_param(page, DEFAULT_PAGE), 1)
    limit_num = parse_int_param(limit, DEFAULT_LIMIT)
    if limit_num < 1:
        limit_num = DEFAULT_LIMIT
    return page_num, min(limit_num, MAX_LIMIT)


def _repo():
    return importlib.import_module("db.repositories.post_repository")


async def get_all_posts(page: str | int | None = None, limit: str | int | None = None) -> PostListResponse:
    page_num, limit_num = normalize_pagination(page, limit)
    offset = (page_num - 1) * limit_num

    repo = _repo()
    try:
        rows = await repo.get_posts_paginated(offset=offset, limit=limit_num)
        total = await repo.count_posts()
    except StorageError as e:
        raise InternalError("Failed to fetch posts") from e

    total_pages = math.ceil(total / limit_num)
    pagination = PaginationMeta(
        current_page=page_num,
        total_pages=total_pages,
        total_posts=total,
        has_next=page_num < total_pages,
        has_prev=page_num > 1,
    )
    return PostListResponse(
        posts=[schemas.posts.PostOut.model_validate(row) for row in rows],
        pagination=pagination,
    )


async def get_post_by_id(post_id: int) -> schemas.posts.PostOut:
    try:
        post = await _repo().get_post_by_id(post_id)
    except StorageError as e:
        raise InternalError("Failed to fetch post") from e
    if not post:
        raise NotFoundError("Post not found")
    return schemas.posts.PostOut.model_validate(post)


async def create_post(post_data: schemas.posts.PostCreate) -> schemas.posts.PostOut:
    try:
        post = await _repo().create_post(
            title=post_data.title,
            content=post_data.content,
            excerpt=post_data.excerpt or None,
            tags=post_data.tags,
        )
    except StorageError as e:
        raise InternalError("Failed to create post") from e
    return schemas.posts.PostOut.model_validate(post)


async def update_post(post_id: int, post_data: schemas.posts.PostUpdate) -> schemas.posts.PostOut:
    try:
        post = await _repo().update_post(post_id, post_data.changes())
    except StorageError as e:
        raise InternalError("Failed to update post") from e
    if not post:
        raise NotFoundError("Post not found")
    return schemas.posts.PostOut.model_validate(post)


async def delete_post(post_id: int) -> MessageResponse:
    try:
        deleted = await _repo().delete_post_by_id(post_id)
    except StorageError as e:
        raise InternalError("Failed to delete post") from e
    if not deleted:
        raise NotFoundError("Post not found")
    return MessageResponse(message="Post deleted successfully")
