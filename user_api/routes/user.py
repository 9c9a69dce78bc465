"""
User API endpoints.

Every service error is reported as 400 Bad Request with the reason in the
Error field of the response envelope.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status

from user_api.core.exceptions import UserServiceError
from user_api.routes.deps import get_user_service
from user_api.schemas.base import ResponseMessage
from user_api.schemas.user import UserCreate, UserUpdate, UserResponse
from user_api.services.user import UserService

MAX_USER_ID = 2**63 - 1

router = APIRouter(prefix="/api/user", tags=["users"])


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def parse_user_id(raw: str) -> int:
    """Convert a path segment to an unsigned user ID."""
    if not (raw.isascii() and raw.isdigit()) or int(raw) > MAX_USER_ID:
        raise _bad_request(f"Invalid user ID given: {raw}")
    return int(raw)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service)
) -> UserResponse:
    """Get user by ID."""
    uid = parse_user_id(user_id)
    try:
        return service.get_user(uid)
    except UserServiceError:
        raise _bad_request(f"Error getting user with ID: {uid}")


@router.get("", response_model=Union[UserResponse, List[UserResponse]])
def get_users(
    username: Optional[str] = Query(None),
    service: UserService = Depends(get_user_service)
) -> Union[UserResponse, List[UserResponse]]:
    """Get all users, or the single user matching the username query."""
    if username is not None:
        if not username:
            raise _bad_request("Invalid, or no username given")
        try:
            return service.get_user_by_username(username)
        except UserServiceError:
            raise _bad_request(f"Error getting user with username: {username}")

    try:
        return service.get_all_users()
    except UserServiceError:
        raise _bad_request("Unable to retrieve users")


@router.post("", response_model=UserResponse)
def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service)
) -> UserResponse:
    """Create new user. The stored and returned password is a hash."""
    try:
        return service.create_user(user_data)
    except UserServiceError as e:
        raise _bad_request(f"Unable to create new user: {e}")


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    service: UserService = Depends(get_user_service)
) -> UserResponse:
    """Update the supplied fields of a user."""
    uid = parse_user_id(user_id)
    try:
        return service.update_user(uid, user_data)
    except UserServiceError:
        raise _bad_request(f"Unable to update user with ID: {uid}")


@router.delete("/{user_id}", response_model=ResponseMessage)
def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service)
) -> ResponseMessage:
    """Soft delete user."""
    uid = parse_user_id(user_id)
    try:
        service.delete_user(uid)
    except UserServiceError:
        raise _bad_request(f"Unable to delete user with ID: {uid}")
    return ResponseMessage(Message=f"Success deleting user: {uid}")
