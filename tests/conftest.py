import pytest
from flask import Flask
from flask.testing import FlaskClient

from scenario_engine.app import create_app
from scenario_engine.config import Settings


@pytest.fixture()
def app() -> Flask:
    settings = Settings(CORS_ORIGINS=["http://localhost:5173"], LOG_LEVEL="WARNING")
    return create_app(settings)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
