"""
Shared fixtures: an in-memory identity store and an app wired to it.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from database.memory import InMemoryIdentityStore
from main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        database_url="",
        templates_dir=str(tmp_path / "templates"),
        public_dir=str(tmp_path / "public"),
    )


@pytest.fixture
def store() -> InMemoryIdentityStore:
    store = InMemoryIdentityStore()
    store.add(id=282, user_id="jane.doe", email="a@b.com", password="correct", name="Jane Doe")
    store.add(id=7, user_id="bob", email="bob@example.com", password="hunter2", name="Bob")
    return store


@pytest.fixture
def client(settings, store) -> TestClient:
    return TestClient(create_app(settings=settings, store=store))
