"""Plain HTTP gateway serving assets by path.

Unknown paths fall back to the default document. Multi-chunk assets are
streamed to the client by following the streaming tokens to the end.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response, StreamingResponse

from app.logic.inmemory_state import get_coordinator
from app.logic.retrieval import RetrievalCoordinator

router = APIRouter()


@router.get("/{path:path}", summary="Serve an asset", include_in_schema=False)
def serve_asset(path: str, coordinator: RetrievalCoordinator = Depends(get_coordinator)) -> Response:
    response = coordinator.get("/" + path)
    headers = dict(response.headers)
    if response.streaming_strategy is None:
        return Response(
            content=response.body,
            status_code=response.status_code,
            headers=headers,
            media_type=None if "Content-Type" in headers else "text/plain",
        )
    return StreamingResponse(
        coordinator.iter_body(response),
        status_code=response.status_code,
        headers=headers,
    )


__all__ = ["router"]
