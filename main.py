"""
Main application entry point.

Connects to the database (with a bounded number of retries), migrates the
schema, wires the user service into the application and serves it until
interrupted. On shutdown no new connections are accepted and in-flight
requests get a grace period to finish.
"""

import logging
from typing import Optional

import uvicorn

from user_api import create_app
from user_api.core.config import Settings, get_settings
from user_api.core.database import init_database
from user_api.services.user import UserService

logger = logging.getLogger("user_api")


def build_server(settings: Settings) -> uvicorn.Server:
    """Wire the database, service and application into a server."""
    session_factory = init_database(settings)
    app = create_app(UserService(session_factory))
    config = uvicorn.Config(
        app,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        timeout_keep_alive=settings.IDLE_TIMEOUT,
        timeout_graceful_shutdown=settings.shutdown_grace_period,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return uvicorn.Server(config)


def run(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logger.info("App setup")
    server = build_server(settings)
    server.run()
    logger.info("Server stopped")


if __name__ == "__main__":
    run()
