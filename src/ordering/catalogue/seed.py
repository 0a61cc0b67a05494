"""Load products into the catalogue from a JSON file.

The file holds a list of objects with ``name``, ``price``, ``stock`` and
optionally ``id`` and ``category_id``. Must be called within a domain
context.
"""

import json
from pathlib import Path

import structlog
from protean.utils.globals import current_domain

from ordering.catalogue.registration import RegisterProduct

logger = structlog.get_logger(__name__)


def load_records(path) -> list[dict]:
    records = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a JSON list of products")
    return records


def seed_catalogue(records) -> list[str]:
    """Register every record as a product and return the product ids."""
    product_ids = []
    for record in records:
        product_id = current_domain.process(
            RegisterProduct(
                product_id=record.get("id"),
                name=record["name"],
                price=record["price"],
                stock=record["stock"],
                category_id=record.get("category_id"),
            ),
            asynchronous=False,
        )
        product_ids.append(product_id)

    logger.info("Catalogue seeded", product_count=len(product_ids))
    return product_ids
