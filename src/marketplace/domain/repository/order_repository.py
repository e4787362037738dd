"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from marketplace.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order (full-document replace)."""

    @abstractmethod
    def update(self, order_id: str, mutate: Callable[[Order], None]) -> Order:
        """Load, mutate and save one order as a single atomic step.

        Status transitions go through here so two requests can never both
        act on the same prior state.  Raises EntityNotFoundError for
        unknown orders.  Exceptions from *mutate* propagate and nothing is
        saved.
        """

    def find(
        self,
        customer_id: str | None = None,
        vendor_id: str | None = None,
        status: OrderStatus | None = None,
        product_ids: set[str] | None = None,
    ) -> list[Order]:
        """Return orders matching every given filter, newest first."""
        orders = self.list_all()
        if customer_id is not None:
            orders = [o for o in orders if o.customer_id == customer_id]
        if vendor_id is not None:
            orders = [o for o in orders if vendor_id in o.vendor_ids]
        if status is not None:
            orders = [o for o in orders if o.status == status]
        if product_ids is not None:
            orders = [o for o in orders if o.product_ids & product_ids]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)
