"""Process-wide in-memory state holders.

Single source of truth for the asset store and staged uploads shared by
all routes. Routes reach them through the ``get_*`` accessors so tests can
swap or reset state explicitly.
"""

from __future__ import annotations

from app.logic.asset_store import AssetStore
from app.logic.request_router import RequestRouter
from app.logic.retrieval import DEFAULT_DOCUMENT, RetrievalCoordinator
from app.logic.staged_uploads import StagedUploads

ASSET_STORE = AssetStore()
STAGED_UPLOADS = StagedUploads()

_coordinator = RetrievalCoordinator(ASSET_STORE, DEFAULT_DOCUMENT)
_router = RequestRouter(ASSET_STORE, STAGED_UPLOADS)


def configure(default_document: str) -> None:
    """Point retrieval at ``default_document`` for fallback lookups."""
    _coordinator.default_document = default_document


def get_store() -> AssetStore:
    return ASSET_STORE


def get_uploads() -> StagedUploads:
    return STAGED_UPLOADS


def get_coordinator() -> RetrievalCoordinator:
    return _coordinator


def get_router() -> RequestRouter:
    return _router


def reset_state() -> None:
    """Clear committed assets and all upload sessions."""
    ASSET_STORE.clear()
    STAGED_UPLOADS.clear()


__all__ = [
    "ASSET_STORE",
    "STAGED_UPLOADS",
    "configure",
    "get_store",
    "get_uploads",
    "get_coordinator",
    "get_router",
    "reset_state",
]
