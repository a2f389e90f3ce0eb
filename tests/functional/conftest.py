"""Functional test fixtures.

Every test starts from an empty asset store, no upload sessions and an
empty event buffer. The HTTP client is built from an explicit config so
local config files and environment variables cannot leak in.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.config import AppConfig, LoggingConfig, RetrievalConfig, ServerConfig
from app.logic import events, inmemory_state
from app.logic.asset_store import AssetStore
from app.logic.retrieval import RetrievalCoordinator
from app.logic.staged_uploads import StagedUploads
from app.main import create_app


@pytest.fixture(autouse=True)
def clean_state():
    inmemory_state.reset_state()
    inmemory_state.configure("/index.html")
    events.EVENT_BUFFER.clear()
    yield
    inmemory_state.reset_state()
    events.EVENT_BUFFER.clear()


@pytest.fixture
def store() -> AssetStore:
    return AssetStore()


@pytest.fixture
def uploads() -> StagedUploads:
    return StagedUploads()


@pytest.fixture
def coordinator(store: AssetStore) -> RetrievalCoordinator:
    return RetrievalCoordinator(store)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        retrieval=RetrievalConfig(default_document="/index.html"),
        server=ServerConfig(enable_test_support=True),
        logging=LoggingConfig(level="INFO"),
    )


@pytest.fixture
def client(app_config: AppConfig) -> TestClient:
    return TestClient(create_app(app_config))
