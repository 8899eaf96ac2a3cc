"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from core.catalog.models import Product, ProductId
from core.services.money import multiply, parse_price, round_money


@dataclass(frozen=True)
class CartEntry:
    """
    Single line of the cart.

    Product fields are copied when the line is created, so later catalog
    price changes never reach an existing line.
    """
    product_id: ProductId
    name: str
    price: Decimal
    quantity: int
    original_price: Optional[Decimal] = None
    category: Optional[str] = None
    image: Optional[str] = None
    on_sale: bool = False
    featured: bool = False
    stock: Optional[int] = None
    colors: tuple[str, ...] = ()
    sizes: tuple[str, ...] = ()
    selected_color: Optional[str] = None
    selected_size: Optional[str] = None

    @classmethod
    def from_product(
        cls,
        product: Product,
        quantity: int,
        selected_color: Optional[str] = None,
        selected_size: Optional[str] = None,
    ) -> "CartEntry":
        """Capture a product as a new line; options default to the first listed."""
        return cls(
            product_id=product.id,
            name=product.name,
            price=product.price,
            quantity=quantity,
            original_price=product.original_price,
            category=product.category,
            image=product.primary_image,
            on_sale=product.on_sale,
            featured=product.featured,
            stock=product.stock,
            colors=tuple(product.colors),
            sizes=tuple(product.sizes),
            selected_color=selected_color or (product.colors[0] if product.colors else None),
            selected_size=selected_size or (product.sizes[0] if product.sizes else None),
        )

    @property
    def subtotal(self) -> Decimal:
        """Line total: price for all units."""
        return round_money(multiply(self.price, self.quantity))

    def with_quantity(self, quantity: int) -> "CartEntry":
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted record."""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": str(self.price),
            "quantity": self.quantity,
            "original_price": str(self.original_price) if self.original_price is not None else None,
            "category": self.category,
            "image": self.image,
            "on_sale": self.on_sale,
            "featured": self.featured,
            "stock": self.stock,
            "colors": list(self.colors),
            "sizes": list(self.sizes),
            "selected_color": self.selected_color,
            "selected_size": self.selected_size,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartEntry":
        """
        Create from a persisted record.

        Raises:
            KeyError, TypeError, ValueError: The record is malformed
        """
        product_id = data["product_id"]
        if not isinstance(product_id, (int, str)) or isinstance(product_id, bool):
            raise TypeError(f"product_id must be int or str, got {type(product_id).__name__}")
        quantity = data["quantity"]
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValueError(f"quantity must be a positive integer, got {quantity!r}")
        original_price = data.get("original_price")
        stock = data.get("stock")
        return cls(
            product_id=product_id,
            name=str(data["name"]),
            price=parse_price(data["price"]),
            quantity=quantity,
            original_price=parse_price(original_price) if original_price is not None else None,
            category=data.get("category"),
            image=data.get("image"),
            on_sale=bool(data.get("on_sale", False)),
            featured=bool(data.get("featured", False)),
            stock=int(stock) if stock is not None else None,
            colors=tuple(data.get("colors") or ()),
            sizes=tuple(data.get("sizes") or ()),
            selected_color=data.get("selected_color"),
            selected_size=data.get("selected_size"),
        )
