"""Product catalogue reader — read-only price and availability lookups.

``ProductCatalog`` is the port the checkout flow depends on;
``RepositoryProductCatalog`` answers it from the Product aggregate. No
reservation happens here: a quote is a point-in-time read.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product
from ordering.errors import ProductNotFound


@dataclass(frozen=True)
class PriceQuote:
    """Current unit price and available stock for one product."""

    product_id: str
    name: str
    unit_price: float
    available_stock: int


class ProductCatalog(ABC):
    """Read-only catalogue lookup."""

    @abstractmethod
    def get_price(self, product_id: str) -> PriceQuote:
        """Return the current quote for a product, or raise ProductNotFound."""
        ...


class RepositoryProductCatalog(ProductCatalog):
    """Catalogue lookups backed by the Product repository."""

    def get_price(self, product_id: str) -> PriceQuote:
        try:
            product = current_domain.repository_for(Product).get(str(product_id))
        except ObjectNotFoundError:
            raise ProductNotFound(product_id) from None

        return PriceQuote(
            product_id=str(product.id),
            name=product.name,
            unit_price=product.price,
            available_stock=product.stock,
        )
