import logging

import pytest

from core.exceptions import InternalError, NotFoundError, StorageError
import db.repositories.post_repository as post_repository
from db.repositories.decorators import handle_db_errors
from schemas.posts import PostCreate, PostUpdate
from services import post_service


async def _raise_storage_error(*args, **kwargs):
    raise StorageError("Database failure")


async def _return_none(*args, **kwargs):
    return None


async def _return_false(*args, **kwargs):
    return False


@pytest.mark.unit
async def test_get_all_posts_storage_error_is_internal(monkeypatch):
    monkeypatch.setattr(post_repository, "get_posts_paginated", _raise_storage_error)

    with pytest.raises(InternalError) as exc_info:
        await post_service.get_all_posts(page="1", limit="10")

    assert str(exc_info.value) == "Failed to fetch posts"
    assert isinstance(exc_info.value.__cause__, StorageError)


@pytest.mark.unit
async def test_get_post_by_id_not_found(monkeypatch):
    monkeypatch.setattr(post_repository, "get_post_by_id", _return_none)

    with pytest.raises(NotFoundError):
        await post_service.get_post_by_id(1)


@pytest.mark.unit
async def test_get_post_by_id_storage_error(monkeypatch):
    monkeypatch.setattr(post_repository, "get_post_by_id", _raise_storage_error)

    with pytest.raises(InternalError):
        await post_service.get_post_by_id(1)


@pytest.mark.unit
async def test_create_post_storage_error(monkeypatch):
    monkeypatch.setattr(post_repository, "create_post", _raise_storage_error)

    with pytest.raises(InternalError) as exc_info:
        await post_service.create_post(PostCreate(title="T", content="C"))

    assert str(exc_info.value) == "Failed to create post"


@pytest.mark.unit
async def test_update_post_not_found(monkeypatch):
    monkeypatch.setattr(post_repository, "update_post", _return_none)

    with pytest.raises(NotFoundError):
        await post_service.update_post(1, PostUpdate(title="New"))


@pytest.mark.unit
async def test_update_post_passes_only_provided_fields(monkeypatch):
    seen = {}

    async def fake_update(post_id, changes):
        seen.update(post_id=post_id, changes=changes)
        return None

    monkeypatch.setattr(post_repository, "update_post", fake_update)

    with pytest.raises(NotFoundError):
        await post_service.update_post(5, PostUpdate.model_validate({"content": "New body"}))

    assert seen == {"post_id": 5, "changes": {"content": "New body"}}


@pytest.mark.unit
async def test_delete_post_not_found(monkeypatch):
    monkeypatch.setattr(post_repository, "delete_post_by_id", _return_false)

    with pytest.raises(NotFoundError):
        await post_service.delete_post(1)


@pytest.mark.unit
async def test_delete_post_storage_error(monkeypatch):
    monkeypatch.setattr(post_repository, "delete_post_by_id", _raise_storage_error)

    with pytest.raises(InternalError) as exc_info:
        await post_service.delete_post(1)

    assert str(exc_info.value) == "Failed to delete post"


@pytest.mark.unit
async def test_handle_db_errors_logs_entity_and_reraises(caplog):
    @handle_db_errors(log_prefix="fetching post")
    async def failing(post_id):
        raise StorageError("Database failure")

    with caplog.at_level(logging.ERROR, logger="db.repositories.decorators"):
        with pytest.raises(StorageError):
            await failing(42)

    assert "Database error while fetching post 42" in caplog.text


@pytest.mark.unit
async def test_update_post_rejects_unknown_fields(db):
    with pytest.raises(ValueError):
        await post_repository.update_post(1, {"id": 2})
