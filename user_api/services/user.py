"""
User service for handling user-related operations.

The service owns all access to the user table. Each operation opens its own
session from the injected session factory and runs a single atomic store call.
"""

import logging
from typing import Callable, List

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from user_api.core.database import transaction
from user_api.core.exceptions import NotFoundError, StoreError, ValidationError
from user_api.core.security import get_password_hash
from user_api.models.base import utc_now
from user_api.models.user import User
from user_api.schemas.user import UserCreate, UserUpdate
from user_api.services.validation import ensure_valid

# Configure logging
logger = logging.getLogger(__name__)


class UserService:
    """CRUD operations for users, excluding soft-deleted rows from every read."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @staticmethod
    def _active(db: Session):
        return db.query(User).filter(User.deleted_at.is_(None))

    # PUBLIC_INTERFACE
    def get_user(self, user_id: int) -> User:
        """
        Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User: The matching user

        Raises:
            NotFoundError: If no non-deleted user has this ID
            StoreError: If the lookup fails
        """
        try:
            with self._session_factory() as db:
                db_user = self._active(db).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            error = StoreError(f"get user {user_id}", e)
            logger.error(f"Database error while getting user {user_id}: {error}")
            raise error from e

        if db_user is None:
            logger.warning(f"User not found: {user_id}")
            raise NotFoundError(f"User {user_id} not found")
        return db_user

    # PUBLIC_INTERFACE
    def get_user_by_username(self, username: str) -> User:
        """
        Get user by username.

        Args:
            username: Exact username

        Returns:
            User: The matching user

        Raises:
            NotFoundError: If no non-deleted user has this username
            StoreError: If the lookup fails
        """
        try:
            with self._session_factory() as db:
                db_user = self._active(db).filter(User.username == username).first()
        except SQLAlchemyError as e:
            error = StoreError(f"get user by username {username}", e)
            logger.error(f"Database error while getting user by username {username}: {error}")
            raise error from e

        if db_user is None:
            logger.warning(f"User not found by username: {username}")
            raise NotFoundError(f"User with username {username} not found")
        return db_user

    # PUBLIC_INTERFACE
    def get_all_users(self) -> List[User]:
        """
        Get every non-deleted user, in ID order. Not paginated.

        Returns:
            List[User]: List of user objects

        Raises:
            StoreError: If the query fails
        """
        try:
            with self._session_factory() as db:
                return self._active(db).order_by(User.id).all()
        except SQLAlchemyError as e:
            error = StoreError("get all users", e)
            logger.error(f"Database error while getting users list: {error}")
            raise error from e

    # PUBLIC_INTERFACE
    def create_user(self, user_data: UserCreate) -> User:
        """
        Validate, hash the password and store a new user.

        Args:
            user_data: User data with a plaintext password

        Returns:
            User: Created user with its ID and timestamps

        Raises:
            ValidationError: If a field rule is violated; nothing is written
            HashingFailed: If the password cannot be hashed; nothing is written
            StoreError: If the insert fails, e.g. duplicate username or email
        """
        try:
            ensure_valid(user_data)
        except ValidationError as e:
            logger.warning(f"Rejected user {user_data.username}: {e}")
            raise

        db_user = User(
            username=user_data.username,
            password=get_password_hash(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            email=user_data.email,
            telephone=user_data.telephone,
        )
        try:
            with self._session_factory() as db:
                with transaction(db):
                    db.add(db_user)
                db.refresh(db_user)
        except SQLAlchemyError as e:
            error = StoreError(f"create user {user_data.username}", e)
            logger.error(f"Database error while creating user {user_data.username}: {error}")
            raise error from e

        logger.info(f"Created user {db_user.id}")
        return db_user

    # PUBLIC_INTERFACE
    def update_user(self, user_id: int, user_data: UserUpdate) -> User:
        """
        Merge the supplied fields into an existing user.

        Omitted or empty fields keep their stored values. A new password is
        hashed before it is stored. Field rules are not re-checked.

        Args:
            user_id: User ID
            user_data: Partial user data

        Returns:
            User: Updated user object

        Raises:
            NotFoundError: If no non-deleted user has this ID
            HashingFailed: If a new password cannot be hashed
            StoreError: If the update fails
        """
        update_data = user_data.changes()
        if "password" in update_data:
            update_data["password"] = get_password_hash(update_data["password"])

        try:
            with self._session_factory() as db:
                with transaction(db):
                    db_user = self._active(db).filter(User.id == user_id).first()
                    if db_user is None:
                        logger.warning(f"User not found for update: {user_id}")
                        raise NotFoundError(f"User {user_id} not found")
                    for field, value in update_data.items():
                        setattr(db_user, field, value)
                db.refresh(db_user)
        except SQLAlchemyError as e:
            error = StoreError(f"update user {user_id}", e)
            logger.error(f"Database error while updating user {user_id}: {error}")
            raise error from e

        logger.info(f"Updated user {user_id}: {sorted(update_data)}")
        return db_user

    # PUBLIC_INTERFACE
    def delete_user(self, user_id: int) -> None:
        """
        Soft delete user by ID. Deleting a missing or deleted user is not an error.

        Args:
            user_id: User ID

        Raises:
            StoreError: If the update fails
        """
        try:
            with self._session_factory() as db:
                with transaction(db):
                    matched = self._active(db).filter(User.id == user_id).update(
                        {User.deleted_at: utc_now()},
                        synchronize_session=False
                    )
        except SQLAlchemyError as e:
            error = StoreError(f"delete user {user_id}", e)
            logger.error(f"Database error while deleting user {user_id}: {error}")
            raise error from e

        logger.info(f"Deleted user {user_id} ({matched} row(s) marked)")
