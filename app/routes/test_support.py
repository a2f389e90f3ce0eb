"""Test support routes.

Provides test-only endpoints used by integration tests to reset in-memory
state and to observe buffered store events. Only mounted when
``server.enable_test_support`` is set.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response
import logging

from app.logic import events
from app.logic.inmemory_state import reset_state as reset_inmemory_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/__test__/reset-state", summary="Test-only reset state")
def reset_state() -> Response:
    """Clear assets, upload sessions and buffered events; returns 204."""
    reset_inmemory_state()
    events.EVENT_BUFFER.clear()
    logger.info("test_support_state_reset")
    return Response(status_code=204)


@router.get("/__test__/events", summary="Test-only events feed")
def get_test_events() -> JSONResponse:
    """Expose buffered store events without clearing the buffer."""
    return JSONResponse(events.get_buffered_events(clear=False), status_code=200)


__all__ = ["router", "reset_state", "get_test_events"]
