from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import AppConfig, load_config
from app.http.problem import (
    handle_asset_store_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from app.http.request_id import RequestIdMiddleware
from app.logging_setup import configure_logging
from app.logic import inmemory_state
from app.logic.state_transfer import AssetStoreError
from app.routes import api_router
from app.routes.gateway import router as gateway_router

logger = logging.getLogger(__name__)


def _health_check() -> Callable[[], dict]:
    def check() -> dict:
        store = inmemory_state.get_store()
        uploads = inmemory_state.get_uploads()
        return {"status": "ok", "assets": len(store), "upload_sessions": len(uploads)}

    return check


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    cfg = config or load_config()
    # Configure global logging before app instantiation so all modules emit
    configure_logging(cfg.logging.level)
    inmemory_state.configure(cfg.retrieval.default_document)

    app = FastAPI(title="Asset Store")
    app.state.config = cfg
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(AssetStoreError, handle_asset_store_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router, prefix="/api/v1")
    if cfg.server.enable_test_support:
        from app.routes.test_support import router as test_support_router

        app.include_router(test_support_router)

    health_check = _health_check()

    @app.get("/health")
    def health():  # pragma: no cover - trivial
        return health_check()

    # Catch-all asset gateway must be registered last
    app.include_router(gateway_router)
    logger.info(
        "app_created default_document=%s test_support=%s",
        cfg.retrieval.default_document,
        cfg.server.enable_test_support,
    )
    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
