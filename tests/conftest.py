"""
Shared fixtures: an app client backed by a freshly seeded store, and a
standalone store for service-level tests.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from comics import repository
from comics.repository import SEED_COMICS, CatalogStore
from main import app


@pytest.fixture(autouse=True)
def _default_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SEED_COMICS", "LOG_LEVEL", "PORT", "HOST", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        repository.reset_store()
        yield test_client


@pytest.fixture
def store() -> CatalogStore:
    return CatalogStore(SEED_COMICS)
