"""
Blog API: Application Package Initializer
============================================

What: Marks the `blog_api` directory as a Python package.
Why:  Enables module imports like `from blog_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, id handling
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes set status codes and delegate to services. Services raise
    application exceptions that the handlers in `middleware.errors`
    turn into JSON error bodies.
"""

__version__ = "1.0.0"
