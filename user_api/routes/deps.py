"""FastAPI dependency implementations."""

from fastapi import Request

from user_api.services.user import UserService


def get_user_service(request: Request) -> UserService:
    """Get the user service the application was created with."""
    return request.app.state.user_service
