"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402


class ApiTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-secret"
    JWT_HEADER_TYPE = ""
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    CORS_ORIGINS = "*"
    USERS_INCLUDE_PASSWORD_HASH = True


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(ApiTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def register(client: FlaskClient):
    """Register a user through the API and return the created row."""

    def _register(name: str, email: str, password: str) -> dict:
        response = client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201
        return response.get_json()

    return _register


@pytest.fixture()
def login(client: FlaskClient):
    """Log in through the API and return an ``Authorization`` header dict."""

    def _login(email: str, password: str) -> dict[str, str]:
        response = client.post("/api/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": response.get_json()["token"]}

    return _login
