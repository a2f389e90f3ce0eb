"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and handler callables that produce
application/problem+json responses.
"""

from __future__ import annotations

import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.logic.state_transfer import AssetStoreError

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem(status: int, title: str, detail: str = "", **extra: object) -> JSONResponse:
    body: dict = {"title": title, "status": int(status)}
    if detail:
        body["detail"] = detail
    body.update(extra)
    return JSONResponse(body, status_code=int(status), media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status = int(getattr(exc, "status_code", 500) or 500)
    if isinstance(exc.detail, dict):
        body = dict(exc.detail)
        body.setdefault("status", status)
        return JSONResponse(body, status_code=status, media_type=PROBLEM_MEDIA_TYPE, headers=exc.headers)
    response = problem(status, "Error", str(exc.detail or ""))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    logger.info("request_validation_failed path=%s errors=%d", request.url.path, len(exc.errors()))
    return problem(
        422,
        "Invalid Request",
        "Request validation failed",
        errors=[{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()],
    )


async def handle_asset_store_error(request: Request, exc: AssetStoreError) -> JSONResponse:  # noqa: D401
    logger.info("asset_store_error path=%s detail=%s", request.url.path, exc)
    return problem(400, "Bad Request", str(exc))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return problem(500, "Internal Server Error")


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "problem",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_asset_store_error",
    "handle_unexpected_error",
]
