"""
Storefront Core Module

This package contains the storefront's stateful and rule-based pieces:
- cart: cart store, aggregates, persistence
- catalog: product records, category filter, catalog provider
- db: cart storage configuration (file, Upstash Redis, memory)
- logging: logging setup

Note: Imports are lazy so that ``import core`` does not touch storage
configuration.
"""

__all__ = [
    "create_cart_store",
    "filter_products",
    "load_catalog",
]


def __getattr__(name):
    """Lazy attribute access for the most used entry points."""
    if name == "create_cart_store":
        from core.cart import create_cart_store
        return create_cart_store
    elif name == "filter_products":
        from core.catalog import filter_products
        return filter_products
    elif name == "load_catalog":
        from core.catalog import load_catalog
        return load_catalog
    raise AttributeError(f"module 'core' has no attribute '{name}'")
