"""
Blog API: Post SQLAlchemy Model
==================================

What:  ORM model representing the `posts` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; `connect_db()` creates the
       table from this metadata at startup.
Who:   Used by PostService for CRUD operations.

Table Design:
    - UUID primary key generated in Python: the id is known right after flush
      and malformed ids can be rejected before any query runs
    - title / category: stored already trimmed
    - tags: JSON array, so the ordered list round-trips as-is on both
      PostgreSQL and SQLite
    - created_at / updated_at: UTC, timezone-aware

    Index on created_at:
        Serves the only listing order the API offers (newest first).
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """
    A blog post.

    Lifecycle:
        1. Created by POST /api/v1/posts (id and timestamps assigned here)
        2. Replaced wholesale by PUT /api/v1/posts/{id} (updated_at advances)
        3. Removed permanently by DELETE /api/v1/posts/{id}
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    category: Mapped[str] = mapped_column(String, nullable=False)

    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        Index("idx_posts_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
