"""Dispatch of mutation requests to the asset store and staged uploads.

Each request kind is matched exhaustively. After every mutation the router
fires the notification hook with the request's ``callback`` topic; the hook
is fire-and-forget and a failing hook never fails the request.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from app.logic import events
from app.logic.asset_store import AssetStore
from app.logic.staged_uploads import StagedUploads
from app.models.requests import (
    LiteralPayload,
    PutRequest,
    RemoveRequest,
    RequestOutcome,
    StagedChunkRequest,
    StagedInitRequest,
    StagedPayload,
    StoreRequest,
)

logger = logging.getLogger(__name__)

NotifyHook = Callable[[str, Dict[str, Any], Optional[str]], None]


class RequestRouter:
    def __init__(
        self,
        store: AssetStore,
        uploads: StagedUploads,
        notify: Optional[NotifyHook] = events.publish,
    ) -> None:
        self.store = store
        self.uploads = uploads
        self.notify = notify

    def dispatch(self, request: StoreRequest) -> RequestOutcome:
        with self.store.lock, self.uploads.lock:
            return self._dispatch(request)

    def _dispatch(self, request: StoreRequest) -> RequestOutcome:
        match request:
            case RemoveRequest(name=name):
                self.store.remove(name)
                self._emit(events.ASSET_REMOVED, {"name": name}, request.callback)
                return RequestOutcome(kind=request.kind, name=name)
            case PutRequest(name=name, content_type=content_type, payload=payload):
                chunks = self._resolve_payload(payload)
                asset = self.store.put(name, content_type, chunks)
                self._emit(
                    events.ASSET_PUT,
                    {"name": name, "content_type": content_type, "total_size": asset.total_size},
                    request.callback,
                )
                return RequestOutcome(kind=request.kind, name=name)
            case StagedInitRequest(size_hint=size_hint, session_id=session_id):
                sid = self.uploads.init(size_hint, session_id)
                self._emit(events.UPLOAD_INITIALISED, {"session_id": sid, "size_hint": size_hint}, request.callback)
                return RequestOutcome(kind=request.kind, session_id=sid)
            case StagedChunkRequest(session_id=session_id, data=data):
                count = self.uploads.append(session_id, data)
                self._emit(
                    events.UPLOAD_CHUNK_APPENDED,
                    {"session_id": session_id, "chunks": count, "size": len(data)},
                    request.callback,
                )
                return RequestOutcome(kind=request.kind, session_id=session_id)
            case _:
                raise TypeError(f"unsupported request kind: {type(request).__name__}")

    def _resolve_payload(self, payload: LiteralPayload | StagedPayload) -> tuple[bytes, ...]:
        match payload:
            case LiteralPayload(data=data):
                return (data,)
            case StagedPayload(session_id=session_id):
                return self.uploads.take(session_id)
            case _:
                raise TypeError(f"unsupported payload kind: {type(payload).__name__}")

    def _emit(self, event_type: str, payload: Dict[str, Any], topic: Optional[str]) -> None:
        if self.notify is None:
            return
        try:
            self.notify(event_type, payload, topic)
        except Exception:
            logger.warning("notification_failed type=%s topic=%s", event_type, topic, exc_info=True)


__all__ = ["NotifyHook", "RequestRouter"]
