"""
Catalog Filter

Maps a category selector (page name or slug) to the matching products.

Promotional selectors are evaluated first, in order, and the first rule
whose selector set contains the normalized selector decides the predicate.
Anything else is treated as a plain category name.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from core.catalog.models import Product
from core.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)

WORK_BOOTS_CATEGORY = "Work Boots & Shoes"

Predicate = Callable[[Product], bool]


@dataclass(frozen=True)
class FilterRule:
    """One entry of the ordered rule list."""

    name: str
    selectors: frozenset[str]
    predicate: Predicate

    def matches(self, selector: str) -> bool:
        return selector in self.selectors


def _on_sale(product: Product) -> bool:
    return product.on_sale is True


def _featured(product: Product) -> bool:
    return product.featured is True


def _on_sale_or_featured(product: Product) -> bool:
    return product.on_sale is True or product.featured is True


def _work_boots(product: Product) -> bool:
    # Exact-case literal; the catalog is expected to use this spelling
    return product.category == WORK_BOOTS_CATEGORY


FILTER_RULES: tuple[FilterRule, ...] = (
    FilterRule("sale-clearance", frozenset({"sale & clearance", "sale-clearance"}), _on_sale),
    FilterRule("featured", frozenset({"featured"}), _featured),
    FilterRule("cyber-days", frozenset({"cyber days", "cyber-days"}), _on_sale_or_featured),
    FilterRule("black-friday", frozenset({"black friday", "black-friday"}), _on_sale),
    FilterRule(
        "work-boots-and-shoes",
        frozenset({"work boots & shoes", "work-boots-and-shoes"}),
        _work_boots,
    ),
)


def normalize_selector(selector: str) -> str:
    return selector.lower()


def match_rule(selector: str) -> Optional[FilterRule]:
    """
    Find the promotional rule for a selector.

    Returns:
        The first matching rule, or None when the selector is a plain
        category name
    """
    normalized = normalize_selector(selector)
    return next((rule for rule in FILTER_RULES if rule.matches(normalized)), None)


def _category_predicate(normalized: str) -> Predicate:
    def predicate(product: Product) -> bool:
        if not product.category:
            return False
        return product.category.lower() == normalized

    return predicate


def filter_products(selector: str, catalog: Iterable[Product]) -> list[Product]:
    """
    Return the products of ``catalog`` that belong under ``selector``.

    Catalog order is preserved. Unknown selectors yield an empty list.

    Args:
        selector: Category or promotion name, any case ("Black Friday",
            "sale-clearance", "Shoes")
        catalog: Ordered product records

    Returns:
        Ordered subsequence of the catalog
    """
    rule = match_rule(selector)
    predicate = rule.predicate if rule else _category_predicate(normalize_selector(selector))

    products = [product for product in catalog if predicate(product)]
    logger.debug(
        "Filtered catalog by '%s' (rule=%s): %d products",
        sanitize_string_for_logging(selector),
        rule.name if rule else "category",
        len(products),
    )
    return products
