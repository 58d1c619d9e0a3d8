"""
Blog API: Post Route Handlers
================================

What:  CRUD endpoints under /api/v1/posts.
How:   Extracts body, path id or query term, delegates to PostService and
       returns the serialized result with the right status code.

Routes:
    GET    /api/v1/posts          → 200 [Post]   (optional ?term=)
    POST   /api/v1/posts          → 201 Post
    GET    /api/v1/posts/{id}     → 200 Post
    PUT    /api/v1/posts/{id}     → 200 Post
    DELETE /api/v1/posts/{id}     → 204 (empty body)

A missing body is treated like `{}`, so it fails with the usual
required-fields message instead of a request validation error.

Handlers never build error bodies. ValidationError, NotFoundError and
DatabaseError propagate to the handlers registered in `middleware.errors`.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db_session
from blog_api.schemas.post import ErrorResponse, PostPayload, PostResponse
from blog_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/posts", tags=["Posts"])

_NOT_FOUND = {404: {"description": "Post not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Missing or empty fields", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[PostResponse],
    summary="List posts, newest first",
)
async def list_posts(
    term: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring matched against title, content and category",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await post_service.list_posts(db=db, term=term)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
    summary="Create a post",
)
async def create_post(
    payload: Optional[PostPayload] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create_post(db=db, payload=payload or PostPayload())


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses=_NOT_FOUND,
    summary="Get a single post by ID",
)
async def get_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    """
    `post_id` is taken as a plain string: a malformed id has to surface as
    404 from the service, not as FastAPI's 422 path validation error.
    """
    return await post_service.get_post(db=db, post_id=post_id)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Replace a post's title, content, category and tags",
)
async def update_post(
    post_id: str,
    payload: Optional[PostPayload] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.update_post(db=db, post_id=post_id, payload=payload or PostPayload())


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await post_service.delete_post(db=db, post_id=post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
