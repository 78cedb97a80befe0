import pytest
from fastapi.testclient import TestClient
from loguru import logger

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

TOKEN = "12345"


@pytest.fixture
def settings():
    return Settings(auth_token=TOKEN, id_strategy="length", seed_products=True, _env_file=None)


@pytest.fixture
def store():
    return ProductStore.seeded()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def log_messages():
    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(sink_id)
