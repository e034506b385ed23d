# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from halal_deal.adapters.memory_repo import InMemoryAnalyticsStore
from halal_deal.api import http
from halal_deal.api.http import app  # ensures imports resolve; run tests from repo root


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def analytics(monkeypatch):
    """Fresh in-memory counter wired into the API for one test."""
    store = InMemoryAnalyticsStore()
    monkeypatch.setattr(http, "_analytics", store)
    return store
