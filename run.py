"""Entry point for the user directory API.

Starts the FastAPI application under uvicorn.  Bind address, data file
and log level come from environment variables (``HOST``, ``PORT``,
``DATA_FILE``, ``LOG_LEVEL``); see ``user_directory_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from user_directory_api.app.core.config import settings
from user_directory_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    # log_config=None keeps uvicorn on the handlers set up by create_app.
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_config=None)
    server = Server(config)
    logging.getLogger(__name__).info("Server running on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
