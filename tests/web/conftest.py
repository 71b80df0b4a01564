"""Shared fixtures for web API tests."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from web.user_store import init_db


@pytest.fixture
def jwt_secret():
    return "test-jwt-secret"


def _make_auth_token(jwt_secret, user_id, email="u@test.com", name="U"):
    return jwt.encode(
        {"sub": user_id, "email": email, "name": name},
        jwt_secret,
        algorithm="HS256",
    )


@pytest.fixture
def auth_token(jwt_secret):
    return _make_auth_token(jwt_secret, "user-123", "test@example.com", "Test")


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def auth_token_b(jwt_secret):
    """Second user token for isolation tests."""
    return _make_auth_token(jwt_secret, "user-456", "b@test.com", "UserB")


@pytest.fixture
def auth_headers_b(auth_token_b):
    return {"Authorization": f"Bearer {auth_token_b}"}


@pytest.fixture
def users_db(tmp_path):
    """Fresh database for each test."""
    db_path = tmp_path / "moodlog.db"
    init_db(db_path)
    return db_path


@pytest.fixture
def client(jwt_secret, users_db):
    """Test client pointed at a temp database, with external services unconfigured."""
    env = {"JWT_SECRET": jwt_secret}

    from web.app import app
    from web.deps import get_config, get_db_path

    config = get_config().model_copy(deep=True)
    config.external.sentiment_api_key = None
    config.external.quotes_api_key = None

    patches = [
        patch.dict(os.environ, env),
        patch("web.deps.get_config", return_value=config),
    ]
    for p in patches:
        p.start()
    app.dependency_overrides[get_db_path] = lambda: users_db

    yield TestClient(app)

    app.dependency_overrides.clear()
    for p in reversed(patches):
        p.stop()
