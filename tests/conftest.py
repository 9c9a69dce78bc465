"""
Pytest configuration and fixtures.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from typing import Generator

from user_api import create_app
from user_api.core.database import Base, get_session_factory, migrate
from user_api.services.user import UserService

# Valid request body, keyed the way clients send it
VALID_USER_JSON = {
    "FirstName": "TestyUser",
    "LastName": "UserTesty",
    "Username": "testyguy",
    "Password": "testyguy",
    "Email": "testyguy@example.com",
    "Telephone": "5555555555"
}


def create_test_engine():
    """
    Create an in-memory SQLite engine shared by every connection of one test.
    """
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},  # Required for SQLite
        poolclass=StaticPool
    )


@pytest.fixture(scope="function")
def db_engine() -> Generator:
    """
    Fresh migrated database for each test.
    """
    engine = create_test_engine()
    migrate(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return get_session_factory(db_engine)


@pytest.fixture(scope="function")
def user_service(session_factory) -> UserService:
    return UserService(session_factory)


@pytest.fixture(scope="function")
def client(user_service) -> Generator:
    """
    Create test client around an application wired to the test database.
    """
    app = create_app(user_service)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_json() -> dict:
    """A fresh copy of a valid request body."""
    return dict(VALID_USER_JSON)
