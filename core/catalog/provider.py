"""
Catalog Provider

Loads the static product catalog from a JSON file at process start.
Records that fail validation are logged and skipped.
"""

import json
import os
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from core.catalog.models import Product, ProductId
from core.errors import ERROR_CATALOG_UNREADABLE, ERROR_PRODUCT_INVALID
from core.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging

logger = get_logger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "products.json"
CATALOG_PATH = os.environ.get("CATALOG_PATH", str(DEFAULT_CATALOG_PATH))


def load_catalog(path: Optional[str | Path] = None) -> list[Product]:
    """
    Read product records from ``path`` (defaults to ``CATALOG_PATH``).

    Returns:
        Products in file order

    Raises:
        ValueError: The file is missing, unparsable, or not a JSON array
    """
    catalog_path = Path(path or CATALOG_PATH)
    try:
        with catalog_path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"{ERROR_CATALOG_UNREADABLE}: {sanitize_string_for_logging(str(catalog_path))}: {e}")
        raise ValueError(f"{ERROR_CATALOG_UNREADABLE}: {catalog_path}") from e

    if not isinstance(raw, list):
        raise ValueError(f"{ERROR_CATALOG_UNREADABLE}: expected a JSON array in {catalog_path}")

    products: list[Product] = []
    for index, entry in enumerate(raw):
        try:
            products.append(Product.model_validate(entry))
        except ValidationError as e:
            record_id = entry.get("id") if isinstance(entry, dict) else None
            logger.warning(
                f"{ERROR_PRODUCT_INVALID} at index {index} "
                f"(id={sanitize_id_for_logging(record_id)}): {e.error_count()} errors"
            )

    logger.info(f"Loaded {len(products)} products from catalog")
    return products


def get_product(product_id: ProductId, catalog: Iterable[Product]) -> Optional[Product]:
    """Find a product by id; ``"7"`` and ``7`` name the same product."""
    wanted = str(product_id)
    return next((p for p in catalog if str(p.id) == wanted), None)
