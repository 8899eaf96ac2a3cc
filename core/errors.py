"""
Common Error Constants and Exceptions

Centralized error messages to avoid string duplication.
"""

# Cart errors
ERROR_INVALID_QUANTITY = "quantity must be a positive integer"
ERROR_CART_CORRUPTED = "Stored cart is corrupted"
ERROR_CART_LOAD_FAILED = "Failed to load cart"
ERROR_CART_SAVE_FAILED = "Failed to save cart"

# Storage errors
ERROR_STORAGE_UNKNOWN_BACKEND = "Unknown cart storage backend"
ERROR_STORAGE_REDIS_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"

# Catalog errors
ERROR_CATALOG_UNREADABLE = "Catalog file is unreadable"
ERROR_PRODUCT_INVALID = "Invalid product record"


class PersistenceError(Exception):
    """A key-value slot could not be read or written."""


class StorageConfigError(ValueError):
    """Cart storage backend is misconfigured."""
