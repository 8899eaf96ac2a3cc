"""Cart package: entries, aggregates, persistence, and the cart store."""
from .models import CartEntry
from .aggregates import CartTotals, calculate_totals
from .persistence import CartPersistence
from .storage import FileStorage, KeyValueStorage, MemoryStorage, RedisStorage
from .service import CartSnapshot, CartStore, create_cart_store

__all__ = [
    "CartEntry",
    "CartTotals",
    "calculate_totals",
    "CartPersistence",
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "RedisStorage",
    "CartSnapshot",
    "CartStore",
    "create_cart_store",
]
