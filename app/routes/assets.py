"""Asset store API endpoints.

Mutations go through a single request endpoint whose body is one of the
store request kinds. Retrieval mirrors the asset gateway protocol: a JSON
request envelope answered with status, headers, a base64 body and, for
multi-chunk assets, a streaming token to pass to the callback endpoint.
"""

from __future__ import annotations

import logging
from typing import Any, List
from urllib.parse import urlsplit

from fastapi import APIRouter, Body, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import TypeAdapter, ValidationError

from app.logic.asset_store import AssetStore
from app.logic.inmemory_state import get_coordinator, get_router, get_store
from app.logic.request_router import RequestRouter
from app.logic.retrieval import RetrievalCoordinator
from app.logic.state_transfer import export_state, import_state
from app.models.requests import RequestOutcome, StoreRequest
from app.models.wire import (
    AssetListingModel,
    HttpRequestModel,
    HttpResponseModel,
    StreamingCallbackModel,
    TokenModel,
)

router = APIRouter()
logger = logging.getLogger(__name__)

_store_request_adapter: TypeAdapter[Any] = TypeAdapter(StoreRequest)


@router.post("/requests", summary="Apply a store mutation request", response_model=RequestOutcome)
def post_request(
    data: Any = Body(...),
    store_router: RequestRouter = Depends(get_router),
) -> RequestOutcome:
    try:
        store_request = _store_request_adapter.validate_python(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e
    return store_router.dispatch(store_request)


@router.get("/assets", summary="List stored assets", response_model=List[AssetListingModel])
def list_assets(store: AssetStore = Depends(get_store)) -> List[AssetListingModel]:
    return [AssetListingModel.from_listing(row) for row in store.list()]


@router.post("/http_request", summary="Retrieve an asset", response_model=HttpResponseModel)
def http_request(
    body: HttpRequestModel,
    coordinator: RetrievalCoordinator = Depends(get_coordinator),
) -> HttpResponseModel:
    key = urlsplit(body.url).path or "/"
    return HttpResponseModel.from_response(coordinator.get(key))


@router.post(
    "/http_request_streaming_callback",
    summary="Fetch the next chunk of a streamed asset",
    response_model=StreamingCallbackModel,
)
def http_request_streaming_callback(
    token: TokenModel,
    coordinator: RetrievalCoordinator = Depends(get_coordinator),
) -> StreamingCallbackModel:
    return StreamingCallbackModel.from_response(coordinator.streaming_callback(token.to_token()))


@router.get("/state", summary="Export all assets")
def get_state(store: AssetStore = Depends(get_store)) -> dict:
    return export_state(store)


@router.put("/state", summary="Replace all assets from an export")
def put_state(document: Any = Body(...), store: AssetStore = Depends(get_store)) -> dict:
    count = import_state(store, document)
    return {"imported": count}


__all__ = ["router"]
