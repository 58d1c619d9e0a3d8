"""
Blog API: Post Service (Repository Layer)
============================================

What:  Create, list, fetch, update and delete posts.
Why:   Keeps validation and id handling out of the route handlers.
How:   Each method takes the request's AsyncSession, talks to the `posts`
       table through SQLAlchemy and returns Pydantic response models.
Who:   Called by the route handlers in `routes/posts.py`.

Error Handling Strategy:
    - Missing/empty title, content or category → ValidationError (400)
    - Unknown id, or an id that is not a UUID  → NotFoundError (404)
    - SQLAlchemyError from the driver/ORM      → DatabaseError (500)
    Nothing else is caught here; the global handlers format the response.

Design Decision:
    PostService is stateless. Every write commits before the method
    returns, so a 201/200/204 is only ever sent for a change that is
    already durable. A failed commit surfaces as DatabaseError (500).
    `get_db_session` only rolls back and closes.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import desc, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import DatabaseError, NotFoundError, ValidationError
from blog_api.models.post import Post, utcnow
from blog_api.schemas.post import PostPayload, PostResponse

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please provide title, content, and category"
POST_NOT_FOUND_MESSAGE = "Post not found"

# Backslash is the LIKE escape character for search terms
_LIKE_ESCAPE = "\\"


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a literal substring."""
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they were stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        category=post.category,
        tags=list(post.tags or []),
        created_at=_as_utc(post.created_at),
        updated_at=_as_utc(post.updated_at),
    )


class PostService:
    """
    Business logic layer for post operations.

    Responsibilities:
        - create_post(): validate and persist a new post
        - list_posts(): newest-first listing with optional substring search
        - get_post(): single post retrieval with not-found handling
        - update_post(): wholesale replacement of the editable fields
        - delete_post(): permanent removal
    """

    @staticmethod
    def validate_payload(payload: PostPayload) -> Dict[str, Any]:
        """
        Check required fields and normalize the payload.

        Title and category are trimmed before the emptiness check, so a
        whitespace-only value counts as missing. Content is kept verbatim.
        Tags default to an empty list.

        Returns:
            Dict with title, content, category and tags ready for the model.

        Raises:
            ValidationError: any required field missing or empty (→ 400)
        """
        title = payload.title.strip() if payload.title is not None else ""
        category = payload.category.strip() if payload.category is not None else ""
        content = payload.content or ""

        missing = [
            name
            for name, value in (("title", title), ("content", content), ("category", category))
            if not value
        ]
        if missing:
            raise ValidationError(message=REQUIRED_FIELDS_MESSAGE, fields=missing)

        return {
            "title": title,
            "content": content,
            "category": category,
            "tags": list(payload.tags or []),
        }

    async def _load(self, db: AsyncSession, post_id: str) -> Post:
        """
        Fetch the ORM row for `post_id` or raise NotFoundError.

        A string that is not a UUID can never match a row, so it is
        reported as not found without querying.
        """
        try:
            key = uuid.UUID(str(post_id))
        except ValueError:
            raise NotFoundError(message=POST_NOT_FOUND_MESSAGE, resource_id=str(post_id))

        try:
            result = await db.execute(select(Post).where(Post.id == key))
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": str(post_id), "error_type": type(e).__name__},
            )

        if post is None:
            raise NotFoundError(message=POST_NOT_FOUND_MESSAGE, resource_id=str(post_id))
        return post

    async def create_post(self, db: AsyncSession, payload: PostPayload) -> PostResponse:
        """
        Validate and persist a new post.

        Returns:
            PostResponse including the generated id and timestamps

        Raises:
            ValidationError: title, content or category missing/empty
            DatabaseError: insert failed
        """
        fields = self.validate_payload(payload)
        post = Post(**fields)

        try:
            db.add(post)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the post. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Post created: %s", post.id)
        return _to_response(post)

    async def list_posts(self, db: AsyncSession, term: Optional[str] = None) -> List[PostResponse]:
        """
        List posts newest first, optionally filtered by a search term.

        Matching is a case-insensitive literal substring test against
        title, content and category (any one is enough). An empty term
        behaves like no term.

        Query plan:
            SELECT * FROM posts
            [WHERE title ILIKE :p OR content ILIKE :p OR category ILIKE :p]
            ORDER BY created_at DESC
        """
        query = select(Post)
        if term:
            pattern = f"%{_escape_like(term)}%"
            query = query.where(
                or_(
                    Post.title.ilike(pattern, escape=_LIKE_ESCAPE),
                    Post.content.ilike(pattern, escape=_LIKE_ESCAPE),
                    Post.category.ilike(pattern, escape=_LIKE_ESCAPE),
                )
            )
        query = query.order_by(desc(Post.created_at))

        try:
            result = await db.execute(query)
            posts = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [_to_response(post) for post in posts]

    async def get_post(self, db: AsyncSession, post_id: str) -> PostResponse:
        """Retrieve a single post; unknown or malformed ids raise NotFoundError."""
        post = await self._load(db, post_id)
        return _to_response(post)

    async def update_post(
        self,
        db: AsyncSession,
        post_id: str,
        payload: PostPayload,
    ) -> PostResponse:
        """
        Replace title, content, category and tags of an existing post.

        The payload is validated before the lookup, so an invalid body on
        an unknown id reports 400, not 404. `id` and `created_at` never
        change; `updated_at` advances.

        Raises:
            ValidationError: title, content or category missing/empty
            NotFoundError: no post with this id (or malformed id)
            DatabaseError: update failed
        """
        fields = self.validate_payload(payload)
        post = await self._load(db, post_id)

        post.title = fields["title"]
        post.content = fields["content"]
        post.category = fields["category"]
        post.tags = fields["tags"]
        post.updated_at = utcnow()

        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the post. Please try again.",
                context={"post_id": str(post_id), "error_type": type(e).__name__},
            )

        logger.info("Post updated: %s", post.id)
        return _to_response(post)

    async def delete_post(self, db: AsyncSession, post_id: str) -> None:
        """Permanently delete a post; unknown or malformed ids raise NotFoundError."""
        post = await self._load(db, post_id)

        try:
            await db.delete(post)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the post. Please try again.",
                context={"post_id": str(post_id), "error_type": type(e).__name__},
            )

        logger.info("Post deleted: %s", post_id)


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
