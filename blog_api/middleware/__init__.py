# Middleware package init
"""
Blog API: Middleware Package
===============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and the X-Request-ID header
    2. Logging: access log line with status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)

Error handling is not a Starlette middleware: `errors.py` registers
exception handlers on the app, which FastAPI runs for anything a route,
dependency or the router itself raises.
"""
