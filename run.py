"""Entry point for the Product Reviews API.

Launches the FastAPI application under Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration (shop API version, review file location, log level,
bind address) is read from environment variables; see
``product_reviews_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from product_reviews_api.app.core.config import settings
from product_reviews_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted.

    Host and port come from ``HOST`` and ``PORT``; defaults are
    ``0.0.0.0`` and ``8000``.  A single worker process is used because
    the review store serializes writers within one process.
    """
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
