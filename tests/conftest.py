"""
Shared fixtures.

The API tests run against an in-memory stand-in for the two MongoDB
collections, injected through ``app.dependency_overrides`` so no
database is needed. The lifespan is never entered, so no connection
is attempted.
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from api.main import create_app
from config.settings import Settings
from models.database import get_store


class InMemoryCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return list(self._docs if length is None else self._docs[:length])


class InMemoryCollection:
    """The handful of collection calls the service makes, kept in insertion order."""

    def __init__(self):
        self.docs: List[Dict[str, Any]] = []

    @staticmethod
    def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
        return all(doc.get(key) == value for key, value in query.items())

    async def insert_one(self, doc: Dict[str, Any]):
        stored = dict(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def find_one(self, query: Dict[str, Any]):
        for doc in self.docs:
            if self._matches(doc, query):
                return dict(doc)
        return None

    def find(self, query: Dict[str, Any]) -> InMemoryCursor:
        return InMemoryCursor([dict(d) for d in self.docs if self._matches(d, query)])


class BrokenCollection:
    """Every call fails the way an unreachable server would."""

    async def insert_one(self, doc):
        raise ConnectionError("store unreachable")

    async def find_one(self, query):
        raise ConnectionError("store unreachable")

    def find(self, query):
        raise ConnectionError("store unreachable")


class InMemoryStore:
    def __init__(self):
        self.users = InMemoryCollection()
        self.exercises = InMemoryCollection()


class BrokenStore:
    def __init__(self):
        self.users = BrokenCollection()
        self.exercises = BrokenCollection()


def build_client(store, **overrides) -> TestClient:
    app = create_app(Settings(**overrides))
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def client(store) -> TestClient:
    return build_client(store)


@pytest.fixture
def strict_client(store) -> TestClient:
    return build_client(store, strict_not_found=True)


@pytest.fixture
def broken_client() -> TestClient:
    return build_client(BrokenStore())


@pytest.fixture
def user(client) -> Dict[str, Any]:
    response = client.post("/api/users", json={"username": "alice"})
    assert response.status_code == 200
    return response.json()
