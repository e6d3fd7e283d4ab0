"""
tests/conftest.py: Shared pytest fixtures
"""
import os
from collections import defaultdict
from types import SimpleNamespace

import pytest

# Set test environment before importing app
os.environ.setdefault("MONGO_LOGIN", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DATABASE", "leafWeb_test")
os.environ.setdefault("MONGO_COLLECTION", "admin_instances")
# bcrypt's minimum cost keeps the suite fast
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("PHONE_HASH_ROUNDS", "4")

from bson import ObjectId
from fastapi.testclient import TestClient

from app.config import settings
from app.core.rate_limiter import application_limiter, limiter
from app.database import get_gateway
from app.main import create_app


class FakeGateway:
    """In-memory stand-in for MongoGateway: same four operations plus close()."""

    def __init__(self):
        self.collections = defaultdict(list)
        self.acknowledge = True
        self.closed = False

    @staticmethod
    def _matches(document: dict, filter: dict) -> bool:
        return all(document.get(key) == value for key, value in filter.items())

    def find_one(self, collection, filter):
        for document in self.collections[collection]:
            if self._matches(document, filter):
                return document
        return None

    def insert_one(self, collection, document):
        stored = dict(document)
        stored.setdefault("_id", ObjectId())
        if self.acknowledge:
            self.collections[collection].append(stored)
        return SimpleNamespace(acknowledged=self.acknowledge, inserted_id=stored["_id"])

    def count_documents(self, collection, filter=None):
        return sum(1 for d in self.collections[collection] if self._matches(d, filter or {}))

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Counters are process-wide; every test starts with clean windows."""
    application_limiter.reset()  # storage is shared by all purpose limiters
    limiter.reset()
    yield
    application_limiter.reset()
    limiter.reset()


@pytest.fixture(autouse=True)
def no_login_floor(monkeypatch):
    monkeypatch.setattr(settings, "login_min_response_seconds", 0.0)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def application(gateway):
    """App wired to the in-memory gateway."""
    api = create_app()

    def _override_gateway():
        try:
            yield gateway
        finally:
            gateway.close()

    api.dependency_overrides[get_gateway] = _override_gateway
    return api


@pytest.fixture
def client(application) -> TestClient:
    return TestClient(application)


@pytest.fixture
def unwired_client() -> TestClient:
    """App using the real MongoGateway; only useful for paths that fail before I/O."""
    return TestClient(create_app())
