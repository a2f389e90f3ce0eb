"""In-memory store of committed assets keyed by name.

Assets are never mutated in place: ``put`` swaps in a new ``Asset`` and
``remove`` drops the entry. Absence is an ordinary state, so lookups
return ``None`` rather than raising.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.models.asset import Asset, AssetListing

logger = logging.getLogger(__name__)


class AssetStore:
    def __init__(self) -> None:
        self._assets: Dict[str, Asset] = {}
        self.lock = threading.RLock()

    def put(self, name: str, content_type: str, chunks: Sequence[bytes]) -> Asset:
        asset = Asset(content_type=content_type, chunks=tuple(bytes(c) for c in chunks))
        with self.lock:
            self._assets[name] = asset
        logger.info(
            "asset_put name=%s content_type=%s chunks=%d size=%d",
            name,
            content_type,
            asset.chunk_count,
            asset.total_size,
        )
        return asset

    def remove(self, name: str) -> bool:
        with self.lock:
            existed = self._assets.pop(name, None) is not None
        logger.info("asset_remove name=%s existed=%s", name, existed)
        return existed

    def get(self, name: str) -> Optional[Asset]:
        with self.lock:
            return self._assets.get(name)

    def list(self) -> List[AssetListing]:
        with self.lock:
            items = list(self._assets.items())
        return [
            AssetListing(name=name, content_type=asset.content_type, total_size=asset.total_size)
            for name, asset in items
        ]

    def entries(self) -> List[Tuple[str, Asset]]:
        """Return every ``(name, asset)`` pair, exposing internal chunking."""
        with self.lock:
            return list(self._assets.items())

    def replace_all(self, entries: Iterable[Tuple[str, Asset]]) -> None:
        loaded = dict(entries)
        with self.lock:
            self._assets = loaded
        logger.info("asset_store_replaced count=%d", len(loaded))

    def clear(self) -> None:
        with self.lock:
            self._assets.clear()

    def __len__(self) -> int:
        with self.lock:
            return len(self._assets)

    def __contains__(self, name: object) -> bool:
        with self.lock:
            return name in self._assets


__all__ = ["AssetStore"]
