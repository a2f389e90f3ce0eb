"""FastAPI application package for the chunked asset store.

Exposes the application factory. Run with
``uvicorn app.main:create_app --factory``. Store, upload and retrieval
logic lives in `app/logic/`, route handlers in `app/routes/`.
"""

from __future__ import annotations

from app.main import create_app

__all__ = ["create_app"]
