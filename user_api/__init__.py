"""
Main application package initialization.
This package contains the FastAPI application factory and all its components.
"""

import logging

from fastapi import FastAPI

from user_api.routes import status, user
from user_api.routes.responses import register_exception_handlers
from user_api.services.user import UserService

logger = logging.getLogger(__name__)


def create_app(user_service: UserService) -> FastAPI:
    """
    Build the application around an already constructed user service.

    Args:
        user_service: Service the handlers delegate to

    Returns:
        FastAPI: Application with routes and exception handlers installed
    """
    app = FastAPI(
        title="User API",
        description="A CRUD API for users backed by a relational database",
        version="0.1.0"
    )
    app.state.user_service = user_service

    logger.info("Building routes")
    app.include_router(status.router)
    app.include_router(user.router)
    register_exception_handlers(app)
    return app
