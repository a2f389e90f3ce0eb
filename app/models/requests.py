"""Pydantic models for the mutation request variants.

Requests form a closed sum type discriminated on ``kind``. The ``payload``
of a put is itself a two-way sum: literal bytes, or the bytes accumulated
in a staged upload session. Binary fields travel as base64 in JSON.
"""

from __future__ import annotations

import base64
import binascii
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field


def _decode_base64(value: Any) -> Any:
    # JSON callers send base64 text; in-process callers pass raw bytes
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("data must be standard base64") from e
    return value


WireBytes = Annotated[bytes, BeforeValidator(_decode_base64)]


class LiteralPayload(BaseModel):
    kind: Literal["literal"] = "literal"
    data: WireBytes


class StagedPayload(BaseModel):
    kind: Literal["staged"] = "staged"
    session_id: str = Field(min_length=1)


Payload = Annotated[Union[LiteralPayload, StagedPayload], Field(discriminator="kind")]


class RemoveRequest(BaseModel):
    kind: Literal["remove"] = "remove"
    name: str
    # Notification topic fired after the mutation
    callback: str | None = None


class PutRequest(BaseModel):
    kind: Literal["put"] = "put"
    name: str
    content_type: str
    payload: Payload
    callback: str | None = None


class StagedInitRequest(BaseModel):
    kind: Literal["staged_init"] = "staged_init"
    size_hint: int = Field(default=0, ge=0)
    # Resets an existing session instead of opening a new one
    session_id: str | None = None
    callback: str | None = None


class StagedChunkRequest(BaseModel):
    kind: Literal["staged_chunk"] = "staged_chunk"
    session_id: str = Field(min_length=1)
    data: WireBytes
    callback: str | None = None


StoreRequest = Annotated[
    Union[RemoveRequest, PutRequest, StagedInitRequest, StagedChunkRequest],
    Field(discriminator="kind"),
]


class RequestOutcome(BaseModel):
    kind: str
    name: str | None = None
    session_id: str | None = None


__all__ = [
    "WireBytes",
    "LiteralPayload",
    "StagedPayload",
    "Payload",
    "RemoveRequest",
    "PutRequest",
    "StagedInitRequest",
    "StagedChunkRequest",
    "StoreRequest",
    "RequestOutcome",
]
