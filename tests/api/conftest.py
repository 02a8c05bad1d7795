import pytest
from fastapi.testclient import TestClient

from email_proof.main import create_app
from email_proof.presentation.dependencies import build_proof_store, get_proof_store
from tests.fakes import FakeBackingCache, FakeClock


@pytest.fixture()
def app_and_deps():
    app = create_app()
    cache = FakeBackingCache(FakeClock())

    def _get_proof_store():
        return build_proof_store(cache)

    app.dependency_overrides[get_proof_store] = _get_proof_store

    try:
        yield app, cache
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)
