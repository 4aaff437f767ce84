import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("JWT_SECRET", "test-secret")

import fittrack.main as main  # noqa: E402  (import after env vars are set)
from fittrack.config import settings  # noqa: E402
from fittrack.database import Base, SessionLocal, engine  # noqa: E402
from fittrack.services import usda  # noqa: E402

AUTH_COOKIE = settings.AUTH_COOKIE_NAME


@pytest.fixture()
def client():
    """Provide a TestClient over a freshly created schema."""
    Base.metadata.drop_all(bind=engine)
    usda.clear_cache()
    with TestClient(main.app) as test_client:
        yield test_client
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session(client):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def login(client):
    """Log in and return the session token; the client jar now holds it too."""

    def _login(email="ann@x.com", password="secret123"):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.cookies[AUTH_COOKIE]

    return _login


@pytest.fixture()
def signup(client, login):
    """Register a user, log in, and return (user_id, token)."""

    def _signup(name="Ann", email="ann@x.com", password="secret123"):
        registered = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert registered.status_code == 201, registered.text
        token = login(email, password)
        return registered.json()["data"]["id"], token

    return _signup
