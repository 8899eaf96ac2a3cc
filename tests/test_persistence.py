"""
Tests for cart persistence and storage slots
"""

import json
import pytest
from decimal import Decimal
from unittest.mock import Mock
from core.cart import CartEntry, CartPersistence, CartStore, FileStorage, MemoryStorage, RedisStorage
from core.db import StorageKeys, get_storage
from core.errors import PersistenceError, StorageConfigError


@pytest.fixture
def snapshot(sneakers, boots, gloves):
    """Three captured lines"""
    return (
        CartEntry.from_product(sneakers, 2, selected_color="Black"),
        CartEntry.from_product(boots, 1),
        CartEntry.from_product(gloves, 4),
    )


class TestCartPersistence:
    """Tests for CartPersistence load/save."""

    def test_round_trip(self, storage, snapshot):
        """Test load returns exactly what save wrote."""
        persistence = CartPersistence(storage)

        assert persistence.save(snapshot) is True
        assert tuple(persistence.load()) == snapshot

    def test_round_trip_empty(self, storage):
        """Test an empty cart round-trips."""
        persistence = CartPersistence(storage)
        persistence.save(())

        assert persistence.load() == []

    def test_missing_slot(self, storage):
        """Test nothing stored loads as empty."""
        assert CartPersistence(storage).load() == []

    def test_fixed_slot_name(self, storage, snapshot):
        """Test the cart is written under the shopping-cart slot."""
        CartPersistence(storage).save(snapshot)

        records = json.loads(storage.get("shopping-cart"))
        assert [r["product_id"] for r in records] == [1, 2, 7]

    def test_prices_stored_as_captured(self, storage, snapshot):
        """Test stored price is the captured string, not a float."""
        CartPersistence(storage).save(snapshot)

        records = json.loads(storage.get(StorageKeys.CART))
        assert records[0]["price"] == "49.99"
        assert records[0]["original_price"] == "69.99"

    @pytest.mark.parametrize(
        "raw",
        [
            "not json at all",
            "{\"product_id\": 1}",
            "[1, 2, 3]",
            "[{\"name\": \"missing id\"}]",
            "[{\"product_id\": 1, \"name\": \"X\", \"price\": \"1\", \"quantity\": -2}]",
            "[{\"product_id\": [1], \"name\": \"X\", \"price\": \"1\", \"quantity\": 1}]",
            "[{\"product_id\": 1, \"name\": \"X\", \"price\": null, \"quantity\": 1}]",
            "[{\"product_id\": 1, \"name\": \"X\", \"price\": \"NaN\", \"quantity\": 1}]",
            "[{\"product_id\": 1, \"name\": \"X\", \"price\": \"Infinity\", \"quantity\": 1}]",
            "[{\"product_id\": 1, \"name\": \"X\", \"price\": \"sNaN\", \"quantity\": 1}]",
            "[{\"product_id\": 1, \"name\": \"X\", \"price\": NaN, \"quantity\": 1}]",
            "[{\"product_id\": 1, \"name\": \"X\", \"price\": \"1\", \"original_price\": \"-Infinity\", \"quantity\": 1}]",
        ],
    )
    def test_corrupted_slot_loads_empty(self, raw):
        """Test corrupted data degrades to an empty cart without raising."""
        storage = MemoryStorage({StorageKeys.CART: raw})

        assert CartPersistence(storage).load() == []

    def test_non_finite_price_never_reaches_totals(self, sneakers):
        """Test a slot with a NaN price restarts as an empty cart with zero totals."""
        storage = MemoryStorage(
            {StorageKeys.CART: "[{\"product_id\": 1, \"name\": \"X\", \"price\": \"NaN\", \"quantity\": 1}]"}
        )

        store = CartStore(CartPersistence(storage))

        assert store.total_price == Decimal("0")
        assert store.total_discount == Decimal("0")
        store.add(sneakers)
        assert store.total_price == Decimal("49.99")

    def test_duplicate_ids_keep_first(self):
        """Test a slot repeating a product id keeps only the first line."""
        records = [
            {"product_id": 1, "name": "A", "price": "1.00", "quantity": 1},
            {"product_id": 1, "name": "A", "price": "1.00", "quantity": 5},
        ]
        storage = MemoryStorage({StorageKeys.CART: json.dumps(records)})

        entries = CartPersistence(storage).load()

        assert len(entries) == 1
        assert entries[0].quantity == 1

    def test_load_backend_failure(self, failing_storage):
        """Test an unreachable backend loads as empty."""
        assert CartPersistence(failing_storage).load() == []

    def test_save_backend_failure(self, failing_storage, snapshot):
        """Test a failed write is reported, not raised."""
        assert CartPersistence(failing_storage).save(snapshot) is False


class TestFileStorage:
    """Tests for file-backed slots."""

    def test_get_missing(self, tmp_path):
        """Test a missing slot reads as None."""
        assert FileStorage(tmp_path / "device").get("shopping-cart") is None

    def test_set_get_delete(self, tmp_path):
        """Test write, read and delete of a slot."""
        storage = FileStorage(tmp_path / "device")

        storage.set("shopping-cart", "[]")
        assert storage.get("shopping-cart") == "[]"
        assert (tmp_path / "device" / "shopping-cart.json").exists()

        storage.delete("shopping-cart")
        assert storage.get("shopping-cart") is None

    def test_no_temp_files_left(self, tmp_path):
        """Test atomic writes clean up after themselves."""
        storage = FileStorage(tmp_path)
        storage.set("shopping-cart", "[1]")
        storage.set("shopping-cart", "[2]")

        assert [p.name for p in tmp_path.iterdir()] == ["shopping-cart.json"]

    def test_unreadable_slot_raises_persistence_error(self, tmp_path):
        """Test a directory in place of the slot file is a PersistenceError."""
        (tmp_path / "shopping-cart.json").mkdir()

        with pytest.raises(PersistenceError):
            FileStorage(tmp_path).get("shopping-cart")

    def test_persistence_over_files(self, tmp_path, snapshot):
        """Test the adapter round-trips through real files."""
        persistence = CartPersistence(FileStorage(tmp_path))
        persistence.save(snapshot)

        assert tuple(CartPersistence(FileStorage(tmp_path)).load()) == snapshot


class TestRedisStorage:
    """Tests for Upstash Redis slots."""

    def test_keys_are_device_scoped(self):
        """Test slots are namespaced by device id."""
        client = Mock()
        client.get.return_value = "[]"
        storage = RedisStorage(client, "phone-1")

        storage.set("shopping-cart", "[]")
        assert storage.get("shopping-cart") == "[]"
        storage.delete("shopping-cart")

        client.set.assert_called_once_with("device:phone-1:shopping-cart", "[]")
        client.get.assert_called_once_with("device:phone-1:shopping-cart")
        client.delete.assert_called_once_with("device:phone-1:shopping-cart")

    def test_client_errors_wrapped(self):
        """Test client failures surface as PersistenceError."""
        client = Mock()
        client.get.side_effect = ConnectionError("timeout")

        with pytest.raises(PersistenceError):
            RedisStorage(client, "phone-1").get("shopping-cart")


class TestGetStorage:
    """Tests for storage backend selection."""

    def test_memory_backend(self):
        """Test memory backend selection."""
        assert isinstance(get_storage("memory"), MemoryStorage)

    def test_file_backend_scoped_to_device(self):
        """Test file backend directory ends with the device id."""
        storage = get_storage("file", device_id="tablet")

        assert isinstance(storage, FileStorage)
        assert storage.directory.name == "tablet"

    def test_unknown_backend(self):
        """Test unknown backends are a configuration error."""
        with pytest.raises(StorageConfigError):
            get_storage("floppy")

    def test_redis_requires_credentials(self, monkeypatch):
        """Test redis backend without credentials is a configuration error."""
        monkeypatch.setattr("core.db.UPSTASH_REDIS_REST_URL", "")
        monkeypatch.setattr("core.db._sync_redis_client", None)

        with pytest.raises(StorageConfigError):
            get_storage("redis")
