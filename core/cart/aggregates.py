"""
Cart aggregates - totals derived from a snapshot.

Pure functions, recomputed on every call; nothing is cached.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from core.services.money import multiply, round_money, subtract

from .models import CartEntry


@dataclass(frozen=True)
class CartTotals:
    """All aggregates of one snapshot."""
    total_items: int
    total_price: Decimal
    original_total_price: Decimal
    total_discount: Decimal
    is_empty: bool


def total_items(entries: Sequence[CartEntry]) -> int:
    """Total number of units in the cart."""
    return sum(entry.quantity for entry in entries)


def total_price(entries: Sequence[CartEntry]) -> Decimal:
    """Sum of price x quantity at captured prices."""
    return round_money(sum((multiply(e.price, e.quantity) for e in entries), Decimal("0")))


def original_total_price(entries: Sequence[CartEntry]) -> Decimal:
    """Total before markdowns; lines without an original price count at their price."""
    return round_money(
        sum(
            (
                multiply(e.original_price if e.original_price is not None else e.price, e.quantity)
                for e in entries
            ),
            Decimal("0"),
        )
    )


def total_discount(entries: Sequence[CartEntry]) -> Decimal:
    """Savings against original prices, never negative."""
    discount = subtract(original_total_price(entries), total_price(entries))
    return max(discount, Decimal("0.00"))


def is_empty(entries: Sequence[CartEntry]) -> bool:
    return len(entries) == 0


def calculate_totals(entries: Sequence[CartEntry]) -> CartTotals:
    return CartTotals(
        total_items=total_items(entries),
        total_price=total_price(entries),
        original_total_price=original_total_price(entries),
        total_discount=total_discount(entries),
        is_empty=is_empty(entries),
    )
