from datetime import timedelta

import pytest

from fintrack import create_app
from fintrack.config import Config


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256"
    JWT_SECRET_KEY = "test-jwt-secret-key-that-is-long-enough-for-hs256"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    JWT_COOKIE_CSRF_PROTECT = False
    STORAGE_BACKEND = "memory"
    LOG_LEVEL = "WARNING"


class SqlTestConfig(TestConfig):
    STORAGE_BACKEND = "sql"
    SQLALCHEMY_DATABASE_URI = "sqlite://"


@pytest.fixture
def app():
    return create_app(TestConfig)


@pytest.fixture
def sql_app():
    app = create_app(SqlTestConfig)
    yield app
    from fintrack.models import db

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, username="alice", password="s3cret", email=None):
    return client.post(
        "/api/register",
        json={
            "username": username,
            "name": username.title(),
            "email": email or f"{username}@example.com",
            "password": password,
        },
    )


def login(client, username="alice", password="s3cret"):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture
def make_user(app):
    """Returns a factory producing logged-in test clients."""

    def _make(username="alice"):
        c = app.test_client()
        assert register(c, username).status_code == 201
        assert login(c, username).status_code == 200
        return c

    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")
