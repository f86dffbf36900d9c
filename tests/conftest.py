"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_file_storage
from src.database import Base, get_db
from src.main import app
from src.services.file import FileStorage


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/kanboard", "/kanboard_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def storage(tmp_path):
    """Attachment storage in a temporary directory."""
    return FileStorage(tmp_path / "files")


@pytest.fixture(scope="function")
def client(db, storage):
    """Create a test client with database and storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, username: str) -> AuthHeaders:
    """Register a user and return its auth headers."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": username, "password": "testpass123", "name": username.title()},
    )
    assert response.status_code == 201
    data = response.json()
    # Requests in tests authenticate with the header, not the session cookie
    client.cookies.clear()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"}, user_id=data["user"]["id"]
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "testuser")


@pytest.fixture
def other_headers(client):
    """Auth headers of a second user who owns nothing."""
    return register(client, "intruder")


@pytest.fixture
def project(client, auth_headers):
    """A project owned by the test user, with the default board columns."""
    response = client.post(
        "/api/v1/projects",
        headers=auth_headers,
        json={"name": "Test Project", "description": "Project used by tests"},
    )
    assert response.status_code == 201
    return response.json()
