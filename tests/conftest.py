"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("CART_DEVICE_ID", "test-device")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from core.cart import CartPersistence, CartStore, MemoryStorage  # noqa: E402
from core.catalog import Product  # noqa: E402


@pytest.fixture
def sneakers():
    """Sale product with options and a markdown"""
    return Product(
        id=1,
        name="Classic Canvas Sneakers",
        price="49.99",
        originalPrice="69.99",
        category="Shoes",
        onSale=True,
        stock=25,
        colors=["White", "Black"],
        sizes=["8", "9", "10"],
    )


@pytest.fixture
def boots():
    """Featured product without a markdown"""
    return Product(
        id=2,
        name="Steel Toe Work Boots",
        price="139.99",
        category="Work Boots & Shoes",
        featured=True,
        stock=12,
        colors=["Brown"],
    )


@pytest.fixture
def gloves():
    """Plain product, no options"""
    return Product(id=7, name="Leather Work Gloves", price=19.99, category="Accessories")


@pytest.fixture
def catalog(sneakers, boots, gloves):
    """Small ordered catalog covering every filter rule"""
    return [
        sneakers,
        boots,
        gloves,
        Product(id=3, name="Work Jacket", price=89.99, category="Workwear", onSale=True, featured=True),
        Product(id=4, name="Flannel Shirt", price=39.99, category="Men"),
        Product(id=5, name="Lowercase Boots", price=99.0, category="work boots & shoes"),
        Product(id=6, name="Gift Card", price=25.0),
    ]


@pytest.fixture
def storage():
    """Empty in-memory slot storage"""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Cart store over empty in-memory storage"""
    return CartStore(CartPersistence(storage))


@pytest.fixture
def failing_storage():
    """Storage whose every call fails like an unreachable backend"""
    from core.errors import PersistenceError

    backend = Mock()
    backend.get.side_effect = PersistenceError("backend down")
    backend.set.side_effect = PersistenceError("backend down")
    backend.delete.side_effect = PersistenceError("backend down")
    return backend
