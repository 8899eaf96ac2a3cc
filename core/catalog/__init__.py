"""Catalog package: product records, category filter, and provider."""
from .models import Product, ProductId
from .filter import FILTER_RULES, FilterRule, filter_products, match_rule
from .categories import CATEGORIES, Category, category_products, get_category
from .provider import get_product, load_catalog

__all__ = [
    "Product",
    "ProductId",
    "FILTER_RULES",
    "FilterRule",
    "filter_products",
    "match_rule",
    "CATEGORIES",
    "Category",
    "category_products",
    "get_category",
    "get_product",
    "load_catalog",
]
