"""Functional tests for request dispatch and mutation notifications."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest

from app.logic import events
from app.logic.asset_store import AssetStore
from app.logic.request_router import RequestRouter
from app.logic.retrieval import RetrievalCoordinator
from app.logic.staged_uploads import StagedUploads
from app.models.requests import (
    LiteralPayload,
    PutRequest,
    RemoveRequest,
    StagedChunkRequest,
    StagedInitRequest,
    StagedPayload,
)


class Recorder:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any], Optional[str]]] = []

    def __call__(self, event_type: str, payload: Dict[str, Any], topic: Optional[str]) -> None:
        self.calls.append((event_type, payload, topic))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def router(store: AssetStore, uploads: StagedUploads, recorder: Recorder) -> RequestRouter:
    return RequestRouter(store, uploads, notify=recorder)


def _put_literal(name: str, data: bytes, content_type: str = "text/plain", callback: str | None = None) -> PutRequest:
    return PutRequest(name=name, content_type=content_type, payload=LiteralPayload(data=data), callback=callback)


def test_literal_put_round_trips(router: RequestRouter, coordinator: RetrievalCoordinator):
    outcome = router.dispatch(_put_literal("/a", b"hello"))
    assert outcome.kind == "put"
    assert outcome.name == "/a"
    response = coordinator.get("/a")
    assert response.body == b"hello"
    assert response.headers == [("Content-Type", "text/plain")]


def test_remove_then_get_falls_back(router: RequestRouter, coordinator: RetrievalCoordinator):
    router.dispatch(_put_literal("/index.html", b"home", "text/html"))
    router.dispatch(_put_literal("/a", b"hello"))
    router.dispatch(RemoveRequest(name="/a"))
    assert coordinator.get("/a").body == b"home"
    router.dispatch(RemoveRequest(name="/index.html"))
    assert coordinator.get("/a").status_code == 404


def test_remove_of_unknown_name_is_silent(router: RequestRouter, recorder: Recorder):
    outcome = router.dispatch(RemoveRequest(name="/ghost", callback="topic"))
    assert outcome.kind == "remove"
    assert recorder.calls == [(events.ASSET_REMOVED, {"name": "/ghost"}, "topic")]


def test_staged_commit_assembles_chunks(router: RequestRouter, coordinator: RetrievalCoordinator, store: AssetStore):
    sid = router.dispatch(StagedInitRequest(size_hint=5)).session_id
    router.dispatch(StagedChunkRequest(session_id=sid, data=b"he"))
    router.dispatch(StagedChunkRequest(session_id=sid, data=b"llo"))
    router.dispatch(PutRequest(name="/n", content_type="text/plain", payload=StagedPayload(session_id=sid)))

    assert store.get("/n").chunks == (b"he", b"llo")
    assert b"".join(coordinator.iter_body(coordinator.get("/n"))) == b"hello"


def test_second_staged_commit_without_new_chunks_is_empty(router: RequestRouter, store: AssetStore, coordinator: RetrievalCoordinator):
    sid = router.dispatch(StagedInitRequest(size_hint=1)).session_id
    router.dispatch(StagedChunkRequest(session_id=sid, data=b"x"))
    router.dispatch(PutRequest(name="/first", content_type="text/plain", payload=StagedPayload(session_id=sid)))
    router.dispatch(PutRequest(name="/second", content_type="text/plain", payload=StagedPayload(session_id=sid)))

    assert store.get("/second").chunks == ()
    response = coordinator.get("/second")
    assert response.status_code == 200
    assert response.body == b""


def test_concurrent_uploads_stay_isolated(router: RequestRouter, store: AssetStore):
    a = router.dispatch(StagedInitRequest(size_hint=4)).session_id
    b = router.dispatch(StagedInitRequest(size_hint=4)).session_id
    router.dispatch(StagedChunkRequest(session_id=a, data=b"aa"))
    router.dispatch(StagedChunkRequest(session_id=b, data=b"bb"))
    router.dispatch(StagedChunkRequest(session_id=a, data=b"AA"))
    router.dispatch(PutRequest(name="/a", content_type="text/plain", payload=StagedPayload(session_id=a)))
    router.dispatch(PutRequest(name="/b", content_type="text/plain", payload=StagedPayload(session_id=b)))
    assert store.get("/a").chunks == (b"aa", b"AA")
    assert store.get("/b").chunks == (b"bb",)


def test_every_mutation_notifies(router: RequestRouter, recorder: Recorder):
    sid = router.dispatch(StagedInitRequest(size_hint=2, callback="uploads")).session_id
    router.dispatch(StagedChunkRequest(session_id=sid, data=b"ab", callback="uploads"))
    router.dispatch(PutRequest(name="/x", content_type="text/plain", payload=StagedPayload(session_id=sid)))
    router.dispatch(RemoveRequest(name="/x"))

    assert [call[0] for call in recorder.calls] == [
        events.UPLOAD_INITIALISED,
        events.UPLOAD_CHUNK_APPENDED,
        events.ASSET_PUT,
        events.ASSET_REMOVED,
    ]
    assert recorder.calls[0][2] == "uploads"
    assert recorder.calls[2][1] == {"name": "/x", "content_type": "text/plain", "total_size": 2}
    assert recorder.calls[3][2] is None


def test_failing_notification_does_not_fail_request(store: AssetStore, uploads: StagedUploads):
    def broken(event_type: str, payload: Dict[str, Any], topic: Optional[str]) -> None:
        raise RuntimeError("listener down")

    router = RequestRouter(store, uploads, notify=broken)
    outcome = router.dispatch(_put_literal("/a", b"x"))
    assert outcome.name == "/a"
    assert store.get("/a") is not None


def test_router_without_hook(store: AssetStore, uploads: StagedUploads):
    router = RequestRouter(store, uploads, notify=None)
    router.dispatch(_put_literal("/a", b"x"))
    assert store.get("/a").chunks == (b"x",)


def test_default_hook_buffers_events(store: AssetStore, uploads: StagedUploads):
    router = RequestRouter(store, uploads)
    router.dispatch(_put_literal("/a", b"xyz", callback="site"))
    [event] = events.get_buffered_events()
    assert event == {
        "type": events.ASSET_PUT,
        "topic": "site",
        "payload": {"name": "/a", "content_type": "text/plain", "total_size": 3},
    }
    assert events.get_buffered_events() == []


def test_unsupported_request_is_rejected(router: RequestRouter):
    with pytest.raises(TypeError):
        router.dispatch(object())  # type: ignore[arg-type]
