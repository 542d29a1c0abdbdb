"""Entry point for the Employee Directory API.

Starts the FastAPI application with uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``5000``); see ``employee_directory_api.app.core.config`` for the
remaining settings.  Variables may be placed in the environment before
launch, e.g. under Docker.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from employee_directory_api.app.core.config import Settings
from employee_directory_api.app.main import create_app


async def main() -> None:
    """Build the application from the environment and serve it."""
    settings = Settings()
    app = create_app(settings)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Server running on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
