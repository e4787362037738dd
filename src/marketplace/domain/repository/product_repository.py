"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from marketplace.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product, assigning an ID if needed."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product. Returns False if it did not exist."""

    @abstractmethod
    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        """Atomically take *quantity* units if at least that many are in stock.

        Returns False, leaving stock untouched, when there are fewer than
        *quantity* units.  Raises EntityNotFoundError for unknown products.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> None:
        """Atomically put *quantity* units back into stock."""

    @abstractmethod
    def update(self, product_id: str, mutate: Callable[[Product], None]) -> Product:
        """Load, mutate and save one product as a single atomic step.

        Raises EntityNotFoundError for unknown products.  Exceptions from
        *mutate* propagate and nothing is saved.
        """

    def list_by_vendor(self, vendor_id: str) -> list[Product]:
        return [p for p in self.list_all() if p.vendor_id == vendor_id]

    def list_by_categories(self, category_ids: set[str]) -> list[Product]:
        return [p for p in self.list_all() if p.category_id in category_ids]
