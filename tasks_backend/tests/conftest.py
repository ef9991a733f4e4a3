import pytest
from fastapi.testclient import TestClient

from tasks_backend.api.main import create_app
from tasks_backend.config import Settings
from tasks_backend.security import make_pwd_context
from tasks_database.db import Database

API = "/api"


@pytest.fixture
def settings():
    """Settings for an isolated in-memory database and a throwaway signing key."""
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret",
        api_prefix=API,
        bcrypt_rounds=4,
    )


@pytest.fixture
def database(settings):
    """Fresh in-memory SQLite storage handle with all tables created."""
    db = Database(settings.database_url)
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def db_session(database):
    """Provide a SQLAlchemy session for service-level tests."""
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def pwd_context(settings):
    return make_pwd_context(settings.bcrypt_rounds)


@pytest.fixture
def client(settings, database):
    """Fixture for FastAPI TestClient wired to the test storage handle."""
    app = create_app(settings, database)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user_data():
    """Returns default user data for registration."""
    return {
        "username": "alice",
        "email": "alice@example.com",
        "password": "alicepassword123",
    }


@pytest.fixture
def second_user_data():
    """Returns a second user's data."""
    return {
        "username": "bob",
        "email": "bob@example.com",
        "password": "bobpassword456",
    }


def register_and_auth(client, username, email, password):
    """Helper for registering then logging in to get a bearer token."""
    r1 = client.post(f"{API}/auth/register", json={
        "username": username, "email": email, "password": password
    })
    assert r1.status_code == 201

    r2 = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert r2.status_code == 200
    return r2.json()["token"]


@pytest.fixture
def auth_header(client, user_data):
    """Returns {'Authorization': 'Bearer <token>'} for default user."""
    token = register_and_auth(client, user_data["username"], user_data["email"], user_data["password"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def second_auth_header(client, second_user_data):
    """Returns auth header for second user."""
    token = register_and_auth(
        client, second_user_data["username"], second_user_data["email"], second_user_data["password"]
    )
    return {"Authorization": f"Bearer {token}"}
