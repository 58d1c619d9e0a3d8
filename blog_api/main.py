"""
Blog API: FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handlers and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn blog_api.main:app, or python -m blog_api).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌────────┐ ┌──────────┐     │
    │  │ Req ID │→│ Logging │→│  CORS  │→│  Errors  │     │
    │  └────────┘ └─────────┘ └────────┘ └──────────┘     │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────┐ ┌────────┐ ┌──────────────┐   │
    │  │ /api/v1/posts    │ │ GET /  │ │ GET /health  │   │
    │  └──────────────────┘ └────────┘ └──────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ other→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, connect to the database and create tables.
              A connection failure aborts startup; the server never listens.
    Shutdown: dispose the database engine.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api import __version__
from blog_api.config import settings
from blog_api.database import connect_db, dispose_engine
from blog_api.middleware.errors import UnexpectedErrorMiddleware, register_exception_handlers
from blog_api.middleware.logging import RequestLoggingMiddleware
from blog_api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from blog_api.routes import health, posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then the database. Shutdown: dispose the engine.

    A database failure at startup is fatal. The error is logged and
    re-raised, so uvicorn reports "Application startup failed" and exits
    instead of serving requests it cannot fulfil.
    """
    setup_logging()
    logger.info("Blog API starting up (environment=%s)...", settings.environment)

    try:
        await connect_db()
    except Exception as e:
        logger.critical("Error connecting to the database: %s", str(e))
        await dispose_engine()
        raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Blog API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Why factory (not module-level app):
        Tests can build fresh instances; importing the module has no side
        effects beyond building one app.
    """
    app = FastAPI(
        title="Blog API",
        description="CRUD backend for blog posts with case-insensitive search.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → UnexpectedError → routes

    app.add_middleware(UnexpectedErrorMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,  # no cookies or auth headers in this API
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    if settings.access_log:
        app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(posts.router)
    app.include_router(health.router)

    return app


# uvicorn expects `blog_api.main:app` to be importable
app = create_app()
