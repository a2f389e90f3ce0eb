"""Staged upload buffers keyed by upload session.

An upload opens a session with ``init``, appends bytes with ``append`` and
is committed by a put that names the session. Sessions are independent, so
two callers uploading at once cannot corrupt each other's data. This
replaces a single process-wide buffer, which let concurrent uploads
interleave; committing also drops the session so the map stays bounded.

The declared size hint is advisory: it is recorded and logged but never
compared against the bytes actually received.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class StagedBuffer:
    size_hint: int = 0
    chunks: List[bytes] = field(default_factory=list)

    @property
    def received(self) -> int:
        return sum(len(c) for c in self.chunks)


class StagedUploads:
    def __init__(self) -> None:
        self._sessions: Dict[str, StagedBuffer] = {}
        self.lock = threading.RLock()

    def init(self, size_hint: int = 0, session_id: Optional[str] = None) -> str:
        """Open a fresh, empty buffer and return its session id.

        Passing an existing ``session_id`` discards whatever that session had
        accumulated.
        """
        sid = session_id or uuid.uuid4().hex
        with self.lock:
            self._sessions[sid] = StagedBuffer(size_hint=max(int(size_hint), 0))
        logger.info("upload_init session=%s size_hint=%d", sid, size_hint)
        return sid

    def append(self, session_id: str, data: bytes) -> int:
        """Append one chunk; returns the session's chunk count afterwards."""
        with self.lock:
            buf = self._sessions.get(session_id)
            if buf is None:
                # No state rejects a chunk: it starts accumulating
                buf = self._sessions[session_id] = StagedBuffer()
                logger.warning("upload_chunk_without_init session=%s", session_id)
            buf.chunks.append(bytes(data))
            count = len(buf.chunks)
        logger.debug("upload_chunk session=%s index=%d size=%d", session_id, count - 1, len(data))
        return count

    def take(self, session_id: str) -> Tuple[bytes, ...]:
        """Hand over the session's chunks and close the session.

        An unknown or already committed session yields no chunks.
        """
        with self.lock:
            buf = self._sessions.pop(session_id, None)
        chunks: Tuple[bytes, ...] = tuple(buf.chunks) if buf is not None else ()
        received = sum(len(c) for c in chunks)
        if buf is not None and buf.size_hint and buf.size_hint != received:
            logger.info(
                "upload_size_hint_mismatch session=%s size_hint=%d received=%d",
                session_id,
                buf.size_hint,
                received,
            )
        logger.info("upload_commit session=%s chunks=%d size=%d", session_id, len(chunks), received)
        return chunks

    def get(self, session_id: str) -> Optional[StagedBuffer]:
        with self.lock:
            return self._sessions.get(session_id)

    def clear(self) -> None:
        with self.lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["StagedBuffer", "StagedUploads"]
