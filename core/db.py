"""
Storage Module - cart slot configuration and Redis client

Resolves the device-scoped key-value storage that holds the persisted cart:
- Local file slots (default) for a single device
- Upstash Redis when the cart should live off-device
- In-memory slots for ephemeral sessions
"""

import os
from pathlib import Path
from typing import Optional

from upstash_redis import Redis

from core.errors import (
    ERROR_STORAGE_REDIS_NOT_CONFIGURED,
    ERROR_STORAGE_UNKNOWN_BACKEND,
    StorageConfigError,
)

# Environment variables
CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "file")
CART_STORAGE_DIR = os.environ.get("CART_STORAGE_DIR", str(Path.home() / ".storefront"))
CART_DEVICE_ID = os.environ.get("CART_DEVICE_ID", "local")

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

_sync_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Cart mutations are synchronous, so only the sync client is used.
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise StorageConfigError(ERROR_STORAGE_REDIS_NOT_CONFIGURED)
        _sync_redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _sync_redis_client


class StorageKeys:
    """Fixed slot names inside a device's storage."""

    # Persisted cart snapshot
    CART = "shopping-cart"

    @staticmethod
    def device_key(device_id: str, key: str) -> str:
        """Redis key for a slot scoped to one device: ``device:{id}:{key}``."""
        return f"device:{device_id}:{key}"


def get_storage(backend: Optional[str] = None, device_id: Optional[str] = None):
    """
    Build the key-value storage selected by ``CART_STORAGE_BACKEND``.

    Args:
        backend: "file", "redis" or "memory"; defaults to the environment
        device_id: Device scope; defaults to ``CART_DEVICE_ID``

    Raises:
        StorageConfigError: Unknown backend or missing Redis credentials
    """
    from core.cart.storage import FileStorage, MemoryStorage, RedisStorage

    backend = (backend or CART_STORAGE_BACKEND).strip().lower()
    device_id = device_id or CART_DEVICE_ID

    if backend == "file":
        return FileStorage(Path(CART_STORAGE_DIR) / device_id)
    if backend == "redis":
        return RedisStorage(get_redis_sync(), device_id)
    if backend == "memory":
        return MemoryStorage()
    raise StorageConfigError(f"{ERROR_STORAGE_UNKNOWN_BACKEND}: {backend}")
