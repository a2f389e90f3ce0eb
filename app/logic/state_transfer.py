"""Export and import of the whole asset store.

The export keeps each asset's chunking so that a re-imported store streams
exactly as the original did.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, List, Tuple

from app.logic.asset_store import AssetStore
from app.models.asset import Asset


class AssetStoreError(Exception):
    """Base error for asset store operations."""


class StateImportError(AssetStoreError):
    """Raised when an export document cannot be loaded."""


def export_state(store: AssetStore) -> Dict[str, Any]:
    assets: List[Dict[str, Any]] = []
    for name, asset in sorted(store.entries(), key=lambda item: item[0]):
        assets.append(
            {
                "name": name,
                "content_type": asset.content_type,
                "chunks": [base64.b64encode(c).decode("ascii") for c in asset.chunks],
            }
        )
    return {"assets": assets}


def _decode_entry(item: Any) -> Tuple[str, Asset]:
    if not isinstance(item, dict):
        raise StateImportError("asset entry must be an object")
    name = item.get("name")
    content_type = item.get("content_type")
    chunks = item.get("chunks", [])
    if not isinstance(name, str) or not isinstance(content_type, str):
        raise StateImportError("asset entry requires string 'name' and 'content_type'")
    if not isinstance(chunks, list):
        raise StateImportError(f"asset {name!r}: 'chunks' must be a list")
    try:
        decoded = tuple(base64.b64decode(c, validate=True) for c in chunks)
    except (binascii.Error, TypeError, ValueError) as e:
        raise StateImportError(f"asset {name!r}: invalid base64 chunk") from e
    return name, Asset(content_type=content_type, chunks=decoded)


def import_state(store: AssetStore, data: Any) -> int:
    """Replace the store's contents with ``data``; returns the asset count.

    Nothing is replaced when any entry is malformed.
    """
    if not isinstance(data, dict) or not isinstance(data.get("assets"), list):
        raise StateImportError("state document requires an 'assets' list")
    entries = [_decode_entry(item) for item in data["assets"]]
    store.replace_all(entries)
    return len(entries)


__all__ = ["AssetStoreError", "StateImportError", "export_state", "import_state"]
