"""Value types for committed assets and streaming cursors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Asset:
    """A named blob stored as an ordered sequence of chunks.

    Chunk boundaries are retrieval boundaries only; they carry no meaning
    for the content itself.
    """

    content_type: str
    chunks: Tuple[bytes, ...] = ()

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    @property
    def total_size(self) -> int:
        return sum(len(chunk) for chunk in self.chunks)


@dataclass(frozen=True)
class AssetListing:
    name: str
    content_type: str
    total_size: int


@dataclass(frozen=True)
class StreamingToken:
    key: str
    index: int


@dataclass(frozen=True)
class StreamingStrategy:
    token: StreamingToken


@dataclass
class HttpResponse:
    status_code: int
    body: bytes = b""
    headers: List[Tuple[str, str]] = field(default_factory=list)
    streaming_strategy: Optional[StreamingStrategy] = None


@dataclass(frozen=True)
class StreamingCallbackResponse:
    body: bytes
    token: Optional[StreamingToken] = None


__all__ = [
    "Asset",
    "AssetListing",
    "StreamingToken",
    "StreamingStrategy",
    "HttpResponse",
    "StreamingCallbackResponse",
]
