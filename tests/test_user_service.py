"""
Tests for the user service against an in-memory SQLite database.
"""

import pytest
from unittest.mock import MagicMock, patch
from sqlalchemy.exc import OperationalError

from user_api.core.exceptions import (
    HashingFailed, NotFoundError, StoreError, ValidationError
)
from user_api.core.security import verify_password
from user_api.models.user import User
from user_api.schemas.user import UserCreate, UserUpdate
from user_api.services.user import UserService

# Test data
TEST_USER_DATA = {
    "username": "testuser",
    "password": "testpass123",
    "first_name": "Test",
    "last_name": "User",
    "email": "test@example.com",
    "telephone": "555-123-4567"
}


def make_user_data(**overrides) -> UserCreate:
    return UserCreate(**{**TEST_USER_DATA, **overrides})


@pytest.fixture
def existing_user(user_service) -> User:
    return user_service.create_user(make_user_data())


@pytest.fixture
def failing_service():
    """Service whose sessions fail on every query or commit."""
    error = OperationalError("SELECT 1", {}, Exception("database is gone"))
    session = MagicMock()
    session.__enter__.return_value = session
    session.__exit__.return_value = None
    session.query.side_effect = error
    session.commit.side_effect = error
    return UserService(lambda: session)


class TestCreateUser:
    """Test cases for user creation."""

    def test_create_user_success(self, user_service):
        db_user = user_service.create_user(make_user_data())
        assert db_user.id is not None
        assert db_user.username == TEST_USER_DATA["username"]
        assert db_user.created_at is not None
        assert db_user.updated_at is not None
        assert db_user.deleted_at is None

    def test_password_is_stored_hashed(self, user_service, session_factory):
        db_user = user_service.create_user(make_user_data())
        assert db_user.password != TEST_USER_DATA["password"]
        assert verify_password(TEST_USER_DATA["password"], db_user.password)

        with session_factory() as db:
            stored = db.query(User).filter(User.id == db_user.id).one()
        assert stored.password == db_user.password

    def test_invalid_user_is_not_persisted(self, user_service):
        with pytest.raises(ValidationError) as exc_info:
            user_service.create_user(make_user_data(email="test@"))
        assert exc_info.value.reason == "Email is not a valid address"
        assert user_service.get_all_users() == []

    def test_validation_runs_on_plaintext_password(self, user_service):
        with pytest.raises(ValidationError) as exc_info:
            user_service.create_user(make_user_data(password="short"))
        assert "Password" in exc_info.value.reason

    def test_hashing_failure_aborts_before_store(self, user_service):
        with patch("user_api.services.user.get_password_hash",
                   side_effect=HashingFailed(ValueError("boom"))):
            with pytest.raises(HashingFailed):
                user_service.create_user(make_user_data())
        assert user_service.get_all_users() == []

    def test_duplicate_username_is_store_error(self, user_service, existing_user):
        with pytest.raises(StoreError) as exc_info:
            user_service.create_user(make_user_data(email="other@example.com"))
        assert exc_info.value.operation == f"create user {TEST_USER_DATA['username']}"
        assert len(user_service.get_all_users()) == 1

    def test_duplicate_email_is_store_error(self, user_service, existing_user):
        with pytest.raises(StoreError):
            user_service.create_user(make_user_data(username="otheruser"))

    def test_store_error_message_is_driver_reason_only(self, user_service, existing_user):
        with pytest.raises(StoreError) as exc_info:
            user_service.create_user(make_user_data())
        message = str(exc_info.value)
        assert "UNIQUE constraint failed" in message
        assert "[SQL" not in message
        assert "$argon2" not in message

    def test_round_trip(self, user_service):
        created = user_service.create_user(make_user_data())
        fetched = user_service.get_user(created.id)
        for field in ("username", "first_name", "last_name", "email", "telephone"):
            assert getattr(fetched, field) == TEST_USER_DATA[field]
        assert fetched.password == created.password


class TestGetUser:
    """Test cases for user lookups."""

    def test_get_user(self, user_service, existing_user):
        assert user_service.get_user(existing_user.id).email == TEST_USER_DATA["email"]

    def test_get_missing_user(self, user_service):
        with pytest.raises(NotFoundError):
            user_service.get_user(99999)

    def test_get_user_by_username(self, user_service, existing_user):
        user_service.create_user(make_user_data(username="second", email="second@example.com"))
        found = user_service.get_user_by_username("second")
        assert found.email == "second@example.com"
        assert user_service.get_user_by_username("testuser").id == existing_user.id

    def test_get_user_by_missing_username(self, user_service, existing_user):
        with pytest.raises(NotFoundError):
            user_service.get_user_by_username("nobody")

    def test_get_all_users(self, user_service):
        assert user_service.get_all_users() == []
        for i in range(3):
            user_service.create_user(
                make_user_data(username=f"user{i}", email=f"user{i}@example.com")
            )
        users = user_service.get_all_users()
        assert [u.username for u in users] == ["user0", "user1", "user2"]

    def test_store_failure_is_wrapped(self, failing_service):
        with pytest.raises(StoreError) as exc_info:
            failing_service.get_user(1)
        assert exc_info.value.operation == "get user 1"
        assert isinstance(exc_info.value.cause, OperationalError)

        with pytest.raises(StoreError):
            failing_service.get_user_by_username("testuser")
        with pytest.raises(StoreError):
            failing_service.get_all_users()


class TestUpdateUser:
    """Test cases for partial updates."""

    def test_partial_update(self, user_service, existing_user):
        updated = user_service.update_user(existing_user.id, UserUpdate(telephone="6666666666"))
        assert updated.telephone == "6666666666"
        assert updated.email == TEST_USER_DATA["email"]
        assert updated.first_name == TEST_USER_DATA["first_name"]
        assert user_service.get_user(existing_user.id).telephone == "6666666666"

    def test_empty_fields_keep_old_values(self, user_service, existing_user):
        updated = user_service.update_user(
            existing_user.id, UserUpdate(first_name="", last_name="Renamed", email=None)
        )
        assert updated.first_name == TEST_USER_DATA["first_name"]
        assert updated.last_name == "Renamed"
        assert updated.email == TEST_USER_DATA["email"]

    def test_new_password_is_hashed(self, user_service, existing_user):
        updated = user_service.update_user(existing_user.id, UserUpdate(password="newpass123"))
        assert updated.password != "newpass123"
        assert verify_password("newpass123", updated.password)

    def test_update_does_not_revalidate(self, user_service, existing_user):
        updated = user_service.update_user(existing_user.id, UserUpdate(telephone="abc"))
        assert updated.telephone == "abc"

    def test_update_missing_user(self, user_service):
        with pytest.raises(NotFoundError):
            user_service.update_user(99999, UserUpdate(telephone="6666666666"))

    def test_update_to_taken_username(self, user_service, existing_user):
        other = user_service.create_user(
            make_user_data(username="other", email="other@example.com")
        )
        with pytest.raises(StoreError):
            user_service.update_user(other.id, UserUpdate(username=TEST_USER_DATA["username"]))
        assert user_service.get_user(other.id).username == "other"


class TestDeleteUser:
    """Test cases for soft deletion."""

    def test_delete_is_idempotent(self, user_service, existing_user):
        user_service.delete_user(existing_user.id)
        user_service.delete_user(existing_user.id)
        with pytest.raises(NotFoundError):
            user_service.get_user(existing_user.id)

    def test_delete_missing_user_succeeds(self, user_service):
        user_service.delete_user(99999)

    def test_deleted_user_is_hidden_but_kept(self, user_service, session_factory, existing_user):
        user_service.delete_user(existing_user.id)

        assert user_service.get_all_users() == []
        with pytest.raises(NotFoundError):
            user_service.get_user_by_username(TEST_USER_DATA["username"])
        with pytest.raises(NotFoundError):
            user_service.update_user(existing_user.id, UserUpdate(last_name="Gone"))

        with session_factory() as db:
            row = db.query(User).filter(User.id == existing_user.id).one()
        assert row.deleted_at is not None

    def test_deleted_username_stays_reserved(self, user_service, existing_user):
        user_service.delete_user(existing_user.id)
        with pytest.raises(StoreError):
            user_service.create_user(make_user_data())

    def test_delete_store_failure(self, failing_service):
        with pytest.raises(StoreError) as exc_info:
            failing_service.delete_user(1)
        assert exc_info.value.operation == "delete user 1"
