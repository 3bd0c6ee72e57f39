import os

# Settings are read once at import time; point them at an in-memory DB first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-for-unit-tests"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CORS_ALLOWED_ORIGINS"] = "*"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from mycontacts.core.security import PasswordHasher, TokenService
from mycontacts.database import engine
from mycontacts.main import app

TEST_SECRET = os.environ["JWT_SECRET"]


@pytest.fixture(autouse=True)
def reset_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def hasher():
    # Low rounds for fast tests
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenService(secret=TEST_SECRET, algorithm="HS256", expires_minutes=60)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    """Factory: register + login a user over HTTP and return bearer headers."""

    def _make(email: str = "alice@example.com", password: str = "pw123456") -> dict[str, str]:
        r = client.post("/auth/register", json={"email": email, "password": password})
        assert r.status_code == 201, r.text
        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _make
