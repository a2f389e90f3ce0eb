"""Asset retrieval with default-document fallback and chunked streaming.

Single-chunk assets are answered in one response. Larger assets return
their first chunk plus a streaming token; each callback with that token
returns the next chunk and, while chunks remain, the token for the one
after it.

Tokens are not bound to a particular version of an asset. If the asset is
replaced mid-stream the callback serves the new asset's chunk at the same
index; if it is removed the stream ends with an empty body.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from app.logic.asset_store import AssetStore
from app.models.asset import (
    Asset,
    HttpResponse,
    StreamingCallbackResponse,
    StreamingStrategy,
    StreamingToken,
)

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT = "/index.html"

HTTP_OK = 200
HTTP_NOT_FOUND = 404
NOT_FOUND_BODY = b"not found"


def _next_token(key: str, index: int, asset: Asset) -> Optional[StreamingToken]:
    nxt = index + 1
    if nxt < asset.chunk_count:
        return StreamingToken(key=key, index=nxt)
    return None


class RetrievalCoordinator:
    def __init__(self, store: AssetStore, default_document: str = DEFAULT_DOCUMENT) -> None:
        self.store = store
        self.default_document = default_document

    def get(self, key: str) -> HttpResponse:
        asset = self.store.get(key)
        if asset is None:
            if key == self.default_document:
                logger.info("asset_not_found key=%s", key)
                return HttpResponse(status_code=HTTP_NOT_FOUND, body=NOT_FOUND_BODY)
            logger.debug("asset_fallback key=%s default=%s", key, self.default_document)
            return self.get(self.default_document)

        headers = [("Content-Type", asset.content_type)]
        if asset.chunk_count <= 1:
            body = asset.chunks[0] if asset.chunks else b""
            return HttpResponse(status_code=HTTP_OK, body=body, headers=headers)

        return HttpResponse(
            status_code=HTTP_OK,
            body=asset.chunks[0],
            headers=headers,
            streaming_strategy=StreamingStrategy(token=StreamingToken(key=key, index=1)),
        )

    def streaming_callback(self, token: StreamingToken) -> StreamingCallbackResponse:
        asset = self.store.get(token.key)
        if asset is None:
            logger.info("stream_asset_gone key=%s index=%d", token.key, token.index)
            return StreamingCallbackResponse(body=b"")
        if not 0 <= token.index < asset.chunk_count:
            return StreamingCallbackResponse(body=b"")
        return StreamingCallbackResponse(
            body=asset.chunks[token.index],
            token=_next_token(token.key, token.index, asset),
        )

    def iter_body(self, response: HttpResponse) -> Iterator[bytes]:
        """Yield the full body of ``response``, following its streaming token."""
        yield response.body
        strategy = response.streaming_strategy
        token = strategy.token if strategy is not None else None
        while token is not None:
            part = self.streaming_callback(token)
            if part.body:
                yield part.body
            token = part.token


__all__ = [
    "DEFAULT_DOCUMENT",
    "HTTP_OK",
    "HTTP_NOT_FOUND",
    "RetrievalCoordinator",
]
