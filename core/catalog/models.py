"""Catalog reference data - Product records supplied by the catalog provider."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.services.money import divide, multiply, parse_price, subtract

ProductId = Union[int, str]


class Product(BaseModel):
    """Product model. Read-only once loaded."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: ProductId
    name: str
    price: Decimal
    original_price: Optional[Decimal] = Field(default=None, alias="originalPrice")
    category: Optional[str] = None
    on_sale: bool = Field(default=False, alias="onSale")
    featured: bool = False
    stock: Optional[int] = None
    colors: tuple[str, ...] = ()
    sizes: tuple[str, ...] = ()
    # Display-only fields, carried into cart entries where the cart shows them
    description: Optional[str] = None
    image: Optional[str] = None
    images: tuple[str, ...] = ()
    rating: Optional[float] = None
    reviews: Optional[int] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return parse_price(v)

    @field_validator("original_price", mode="before")
    @classmethod
    def convert_original_price_to_decimal(cls, v):
        if v is None:
            return None
        return parse_price(v)

    @property
    def discount_percent(self) -> int:
        """Whole-percent markdown from ``original_price``; 0 when not marked down."""
        if self.original_price is None or self.original_price <= self.price:
            return 0
        ratio = divide(subtract(self.original_price, self.price), self.original_price)
        return int(multiply(ratio, 100).to_integral_value(rounding=ROUND_HALF_UP))

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock is not None and self.stock <= 0

    @property
    def max_quantity(self) -> Optional[int]:
        """Upper bound a quantity picker should respect; None means unbounded."""
        return self.stock

    @property
    def primary_image(self) -> Optional[str]:
        return self.image or (self.images[0] if self.images else None)
