import pytest
from fastapi.testclient import TestClient

from app.container import get_store
from tests.fakes import InMemoryDocumentStore


@pytest.fixture
def store():
    s = InMemoryDocumentStore()
    s.create_collection("product")
    return s


@pytest.fixture
def make_client():
    from main import app

    def _make(store):
        app.dependency_overrides[get_store] = lambda: store
        app.state.store_factory = lambda: store
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
    app.state.store_factory = get_store
