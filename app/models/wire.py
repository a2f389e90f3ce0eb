"""JSON shapes exchanged with the transport layer.

Binary bodies are carried as standard base64 strings.
"""

from __future__ import annotations

import base64
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.asset import (
    AssetListing,
    HttpResponse,
    StreamingCallbackResponse,
    StreamingToken,
)


def encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class TokenModel(BaseModel):
    key: str
    index: int = Field(ge=0)

    def to_token(self) -> StreamingToken:
        return StreamingToken(key=self.key, index=self.index)

    @classmethod
    def from_token(cls, token: Optional[StreamingToken]) -> Optional["TokenModel"]:
        if token is None:
            return None
        return cls(key=token.key, index=token.index)


class StreamingStrategyModel(BaseModel):
    token: TokenModel


class HttpRequestModel(BaseModel):
    url: str
    method: str = "GET"
    headers: List[List[str]] = Field(default_factory=list)


class HttpResponseModel(BaseModel):
    status_code: int
    headers: List[List[str]]
    body: str
    streaming_strategy: Optional[StreamingStrategyModel] = None

    @classmethod
    def from_response(cls, response: HttpResponse) -> "HttpResponseModel":
        strategy = None
        if response.streaming_strategy is not None:
            strategy = StreamingStrategyModel(token=TokenModel.from_token(response.streaming_strategy.token))
        return cls(
            status_code=response.status_code,
            headers=[[name, value] for name, value in response.headers],
            body=encode_bytes(response.body),
            streaming_strategy=strategy,
        )


class StreamingCallbackModel(BaseModel):
    body: str
    token: Optional[TokenModel] = None

    @classmethod
    def from_response(cls, response: StreamingCallbackResponse) -> "StreamingCallbackModel":
        return cls(body=encode_bytes(response.body), token=TokenModel.from_token(response.token))


class AssetListingModel(BaseModel):
    name: str
    content_type: str
    total_size: int

    @classmethod
    def from_listing(cls, row: AssetListing) -> "AssetListingModel":
        return cls(name=row.name, content_type=row.content_type, total_size=row.total_size)


__all__ = [
    "encode_bytes",
    "TokenModel",
    "StreamingStrategyModel",
    "HttpRequestModel",
    "HttpResponseModel",
    "StreamingCallbackModel",
    "AssetListingModel",
]
