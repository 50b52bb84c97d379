"""Pytest configuration and fixtures."""

import os

# Keep the app from creating its own dev database during tests
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from garagelog import models  # noqa: F401
from garagelog.database import Base, enable_sqlite_pragmas, get_db
from garagelog.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and username."""

    def __init__(self, *args, user_id: int | None = None, username: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite otherwise
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/garagelog", "/garagelog_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
enable_sqlite_pragmas(engine)
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


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def sign_up_and_login(client, username: str, password: str = "testpass123") -> AuthHeaders:
    """Register a user, log in and return bearer headers for them."""
    response = client.post("/users", json={"username": username, "password": password})
    assert response.status_code == 201
    user_id = response.json()["id"]

    response = client.post("/auth", json={"username": username, "password": password})
    assert response.status_code == 200
    token = response.json()["access_token"]

    # Login sets the session cookie; tests authenticate with headers explicitly
    client.cookies.clear()
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, username=username)


@pytest.fixture
def admin_headers(client):
    """The first user registered, who becomes admin."""
    return sign_up_and_login(client, "admin")


@pytest.fixture
def auth_headers(client, admin_headers):
    """A regular (non-admin) user."""
    return sign_up_and_login(client, "mechanic")


@pytest.fixture
def other_headers(client, admin_headers):
    """A second regular user."""
    return sign_up_and_login(client, "neighbor")
