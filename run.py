"""Entry point for the exercise tracker API.

This script serves the FastAPI application with uvicorn.  Host, port,
database location and log level come from environment variables (see
``exercise_tracker_api.app.core.config``), for example::

    DATABASE_URL=/var/lib/exercise/tracker.db PORT=8080 python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from exercise_tracker_api.app.core.config import settings
from exercise_tracker_api.app.main import app


async def main() -> None:
    """Start the API server and run until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Keep uvicorn records flowing through the handlers of setup_logging.
        log_config=None,
    )
    server = Server(config)
    logging.getLogger(__name__).info("Listening on %s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
