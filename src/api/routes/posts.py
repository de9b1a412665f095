from typing import Annotated

from fastapi import APIRouter, Body, Query, status

import schemas.posts as posts
from schemas.responses import ErrorResponse, MessageResponse, PostListResponse
from services import post_service

router = APIRouter(prefix="/posts", tags=["Posts"])

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=PostListResponse,
    summary="List posts",
    description="Get a page of posts, newest first. Non-numeric page/limit values fall back to defaults.",
)
async def list_posts(
    page: Annotated[str | None, Query(description="Page number starting from 1")] = None,
    limit: Annotated[str | None, Query(description="Page size, at most 100")] = None,
) -> PostListResponse:
    return await post_service.get_all_posts(page=page, limit=limit)


@router.get(
    "/{post_id}",
    response_model=posts.PostOut,
    summary="Get post by ID",
    responses=NOT_FOUND,
)
async def get_post(post_id: int) -> posts.PostOut:
    return await post_service.get_post_by_id(post_id)


@router.post(
    "",
    response_model=posts.PostOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
    description="Create a post. Title and excerpt are trimmed and HTML-escaped before storage.",
    responses=BAD_REQUEST,
)
async def create_post(post_data: Annotated[posts.PostCreate, Body(...)]) -> posts.PostOut:
    return await post_service.create_post(post_data)


@router.put(
    "/{post_id}",
    response_model=posts.PostOut,
    summary="Update post",
    description="Partially update a post. Fields left out of the body keep their current value.",
    responses={**NOT_FOUND, **BAD_REQUEST},
)
async def update_post(post_id: int, post_data: Annotated[posts.PostUpdate, Body(...)]) -> posts.PostOut:
    return await post_service.update_post(post_id, post_data)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete post",
    responses=NOT_FOUND,
)
async def delete_post(post_id: int) -> MessageResponse:
    return await post_service.delete_post(post_id)
