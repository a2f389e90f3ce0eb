"""Store mutation events and publisher.

Defines event type constants and a ``publish()`` callable used as the
default notification hook of the request router.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

ASSET_PUT = "asset.put"
ASSET_REMOVED = "asset.removed"
UPLOAD_INITIALISED = "upload.initialised"
UPLOAD_CHUNK_APPENDED = "upload.chunk_appended"


def publish(event_type: str, payload: Dict[str, Any], topic: Optional[str] = None) -> None:
    """Publish a store event.

    Events are logged and buffered in-memory; ``topic`` is the caller-supplied
    callback name, if any.
    """
    logger.info("event_publish type=%s topic=%s payload=%s", event_type, topic, payload)
    EVENT_BUFFER.append({"type": event_type, "topic": topic, "payload": payload})


# Bounded in-memory buffer of recent events (observed by tests and debug tooling);
# the oldest entries are dropped once the limit is reached
EVENT_BUFFER_LIMIT = 1000
EVENT_BUFFER: Deque[Dict[str, Any]] = deque(maxlen=EVENT_BUFFER_LIMIT)


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return buffered events; optionally clear the buffer."""
    events = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return events


__all__ = [
    "ASSET_PUT",
    "ASSET_REMOVED",
    "UPLOAD_INITIALISED",
    "UPLOAD_CHUNK_APPENDED",
    "publish",
    "get_buffered_events",
    "EVENT_BUFFER",
    "EVENT_BUFFER_LIMIT",
]
