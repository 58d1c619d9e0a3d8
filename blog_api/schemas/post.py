"""
Blog API: Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract of the post endpoints.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI parses request bodies into `PostPayload` and serializes
       `PostResponse` objects (by alias, so timestamps go out as camelCase).

Design Decision:
    Schemas are separate from the SQLAlchemy model so that only the public
    fields ever reach a client. ORM state and storage details stay behind.

    `PostPayload` accepts missing fields on purpose: required-field checks
    belong to PostService, which reports them as a 400 ValidationError
    rather than FastAPI's default 422.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostPayload(BaseModel):
    """
    Body of POST /api/v1/posts and PUT /api/v1/posts/{id}.

    Example:
        {"title": "Hello", "content": "First post", "category": "News", "tags": ["intro"]}
    """
    title: Optional[str] = Field(default=None, description="Post title (required, trimmed)")
    content: Optional[str] = Field(default=None, description="Post body (required)")
    category: Optional[str] = Field(default=None, description="Category (required, trimmed)")
    tags: Optional[List[str]] = Field(default=None, description="Optional list of tags")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """
    What:  Public representation of a post.
    Who:   Returned by every post endpoint except DELETE.

    Serialized shape:
        {id, title, content, category, tags, createdAt, updatedAt}
    """
    id: uuid.UUID = Field(description="Unique post identifier (UUID)")
    title: str
    content: str
    category: str
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC)")
    updated_at: datetime = Field(alias="updatedAt", description="Last modification time (UTC)")

    model_config = {"from_attributes": True, "populate_by_name": True}


class ErrorResponse(BaseModel):
    """
    Error body returned for every failed request.

    `stack` carries the server-side traceback outside production and is
    null in production.
    """
    message: str = Field(description="Human-readable error description")
    stack: Optional[str] = Field(default=None, description="Traceback (null in production)")


class WelcomeResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
