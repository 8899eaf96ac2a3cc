"""Cart store - the in-memory cart ledger with write-behind persistence."""
import threading
from decimal import Decimal
from typing import Callable, Optional

from core.catalog.models import Product, ProductId
from core.errors import ERROR_INVALID_QUANTITY
from core.logging import get_logger, sanitize_id_for_logging

from . import aggregates
from .aggregates import CartTotals
from .models import CartEntry
from .persistence import CartPersistence
from .storage import KeyValueStorage

logger = get_logger(__name__)

CartSnapshot = tuple[CartEntry, ...]
CartListener = Callable[[CartSnapshot], None]


class CartStore:
    """
    Owns the cart snapshot.

    Features:
    - Merge on add: one line per product id, quantities accumulate
    - Lines keep insertion order across quantity changes
    - Every mutation saves through the persistence adapter and notifies
      listeners before returning
    - Mutations are serialized, so only one runs at a time

    Build one per application with ``create_cart_store()`` and pass it to
    whatever needs the cart.
    """

    def __init__(self, persistence: CartPersistence):
        self._persistence = persistence
        self._lock = threading.RLock()
        self._listeners: list[CartListener] = []
        self._entries: CartSnapshot = tuple(persistence.load())
        logger.debug(f"Cart loaded with {len(self._entries)} lines")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(
        self,
        product: Product,
        quantity: int = 1,
        selected_color: Optional[str] = None,
        selected_size: Optional[str] = None,
    ) -> CartSnapshot:
        """
        Add ``quantity`` units of ``product``.

        An existing line for the same id only grows; its captured price and
        options are kept. Stock is not checked here, callers clamp the
        quantity to ``product.max_quantity``.

        Raises:
            ValueError: ``quantity`` is not a positive integer
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValueError(ERROR_INVALID_QUANTITY)

        with self._lock:
            index = self._index_of(product.id)
            entries = list(self._entries)
            if index is not None:
                current = entries[index]
                entries[index] = current.with_quantity(current.quantity + quantity)
            else:
                entries.append(
                    CartEntry.from_product(
                        product,
                        quantity,
                        selected_color=selected_color,
                        selected_size=selected_size,
                    )
                )
            logger.debug(f"Added {quantity} x product {sanitize_id_for_logging(product.id)}")
            return self._commit(entries)

    def remove(self, product_id: ProductId) -> CartSnapshot:
        """Delete the line for ``product_id``; absent ids are ignored."""
        with self._lock:
            entries = [e for e in self._entries if e.product_id != product_id]
            return self._commit(entries)

    def set_quantity(self, product_id: ProductId, quantity: int) -> CartSnapshot:
        """
        Replace a line's quantity in place; ``quantity <= 0`` removes the line.

        Raises:
            ValueError: ``quantity`` is not an integer
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValueError(ERROR_INVALID_QUANTITY)
        if quantity <= 0:
            return self.remove(product_id)

        with self._lock:
            entries = [
                e.with_quantity(quantity) if e.product_id == product_id else e
                for e in self._entries
            ]
            return self._commit(entries)

    def clear(self) -> CartSnapshot:
        with self._lock:
            return self._commit([])

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_snapshot(self) -> CartSnapshot:
        return self._entries

    def get_entry(self, product_id: ProductId) -> Optional[CartEntry]:
        index = self._index_of(product_id)
        return self._entries[index] if index is not None else None

    @property
    def total_items(self) -> int:
        return aggregates.total_items(self._entries)

    @property
    def total_price(self) -> Decimal:
        return aggregates.total_price(self._entries)

    @property
    def original_total_price(self) -> Decimal:
        return aggregates.original_total_price(self._entries)

    @property
    def total_discount(self) -> Decimal:
        return aggregates.total_discount(self._entries)

    @property
    def is_empty(self) -> bool:
        return aggregates.is_empty(self._entries)

    def totals(self) -> CartTotals:
        return aggregates.calculate_totals(self._entries)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Call ``listener`` with the new snapshot after every mutation.

        Returns:
            A function that unregisters the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------

    def _index_of(self, product_id: ProductId) -> Optional[int]:
        return next(
            (i for i, entry in enumerate(self._entries) if entry.product_id == product_id),
            None,
        )

    def _commit(self, entries: list[CartEntry]) -> CartSnapshot:
        self._entries = tuple(entries)
        self._persistence.save(self._entries)
        # Copy: a listener may unsubscribe itself while being notified
        for listener in list(self._listeners):
            listener(self._entries)
        return self._entries


def create_cart_store(storage: Optional[KeyValueStorage] = None) -> CartStore:
    """
    Build the application's cart store.

    Args:
        storage: Slot backend; defaults to the one configured by
            ``CART_STORAGE_BACKEND``
    """
    if storage is None:
        from core.db import get_storage
        storage = get_storage()
    return CartStore(CartPersistence(storage))
