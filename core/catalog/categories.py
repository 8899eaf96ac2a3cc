"""Category landing pages of the storefront, keyed by URL slug."""
from dataclasses import dataclass
from typing import Iterable, Optional

from core.catalog.filter import filter_products
from core.catalog.models import Product


@dataclass(frozen=True)
class Category:
    slug: str
    name: str  # selector passed to the catalog filter
    title: Optional[str] = None
    description: Optional[str] = None

    @property
    def page_title(self) -> str:
        return self.title or self.name

    @property
    def page_description(self) -> str:
        return self.description or category_description(self.name)


def category_description(name: str) -> str:
    """Fallback blurb for pages without a hand-written description."""
    return f"Browse our collection of {name.lower()} products."


CATEGORIES: tuple[Category, ...] = (
    Category("accessories", "Accessories", "Accessories", "Belts, hats, gloves, and other everyday accessories."),
    Category("black-friday", "Black Friday", "Black Friday", "Door-crasher deals and Black Friday specials."),
    Category("cyber-days", "Cyber Days", "Cyber Days", "Online-only deals for Cyber Days, limited time offers."),
    Category("featured", "Featured", "Featured", "Editor's picks and highlighted collections."),
    Category("kids", "Kids", "Kids", "Shop durable and comfortable clothing and footwear for kids."),
    Category("men", "Men", "Men", "Explore men's workwear, casual clothing, and footwear."),
    Category(
        "sale-clearance",
        "Sale & Clearance",
        "Sale & Clearance",
        "Save on markdowns, limited-time offers, and clearance items.",
    ),
    Category("shoes", "Shoes", "Shoes", "Find the latest casual and performance footwear."),
    Category("women", "Women", "Women", "Browse our collection of women's clothing, footwear, and accessories."),
    Category(
        "work-boots-and-shoes",
        "Work Boots & Shoes",
        "Work Boots & Shoes",
        "Safety-rated work boots and shoes for every environment.",
    ),
    Category("workwear", "Workwear", "Workwear", "Heavy-duty work clothing designed for tough jobs."),
)

_BY_SLUG = {category.slug: category for category in CATEGORIES}


def get_category(slug: str) -> Optional[Category]:
    return _BY_SLUG.get(slug.lower())


def category_products(slug: str, catalog: Iterable[Product]) -> list[Product]:
    """Products shown on a category page; unknown slugs show nothing."""
    category = get_category(slug)
    if category is None:
        return []
    return filter_products(category.name, catalog)
