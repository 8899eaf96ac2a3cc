"""Cart persistence - best-effort save/load of the snapshot to a storage slot."""
import json
from typing import Sequence

from core.db import StorageKeys
from core.errors import (
    ERROR_CART_CORRUPTED,
    ERROR_CART_LOAD_FAILED,
    ERROR_CART_SAVE_FAILED,
    PersistenceError,
)
from core.logging import get_logger

from .models import CartEntry
from .storage import KeyValueStorage

logger = get_logger(__name__)


class CartPersistence:
    """
    Reads and writes the cart snapshot as a JSON array of entry records.

    Neither direction raises: a broken slot reads as an empty cart and a
    failed write is logged and dropped. The in-memory cart stays the
    source of truth for the running session.
    """

    def __init__(self, storage: KeyValueStorage, key: str = StorageKeys.CART):
        self.storage = storage
        self.key = key

    def load(self) -> list[CartEntry]:
        """Previously saved entries, or ``[]`` when nothing usable is stored."""
        try:
            data = self.storage.get(self.key)
        except PersistenceError as e:
            logger.error(f"{ERROR_CART_LOAD_FAILED}: {e}")
            return []

        if not data:
            return []

        try:
            records = json.loads(data)
            if not isinstance(records, list):
                raise TypeError(f"expected a list, got {type(records).__name__}")
            entries = [CartEntry.from_dict(record) for record in records]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"{ERROR_CART_CORRUPTED}, starting empty: {e}")
            return []

        return _dedupe(entries)

    def save(self, snapshot: Sequence[CartEntry]) -> bool:
        """Write the snapshot; returns False when the write failed."""
        try:
            payload = json.dumps([entry.to_dict() for entry in snapshot])
            self.storage.set(self.key, payload)
            return True
        except (PersistenceError, TypeError, ValueError) as e:
            logger.error(f"{ERROR_CART_SAVE_FAILED}: {e}")
            return False


def _dedupe(entries: list[CartEntry]) -> list[CartEntry]:
    # A hand-edited slot may repeat an id; keep the first line for it
    seen: set[str] = set()
    unique = []
    for entry in entries:
        marker = f"{type(entry.product_id).__name__}:{entry.product_id}"
        if marker in seen:
            logger.warning(f"{ERROR_CART_CORRUPTED}: duplicate line dropped")
            continue
        seen.add(marker)
        unique.append(entry)
    return unique
