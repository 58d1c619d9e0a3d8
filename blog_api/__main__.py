"""
Blog API: Process Entrypoint
===============================

Usage:
    python -m blog_api
    blog-api            (console script installed with the package)

Runs uvicorn with host, port and log level from settings. If the database
is unreachable the application lifespan fails and uvicorn exits with a
non-zero status before binding the port.
"""

import uvicorn

from blog_api.config import settings


def main() -> None:
    uvicorn.run(
        "blog_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
