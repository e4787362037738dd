"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_customer(self, customer_id: str) -> Cart | None:
        """Return the customer's cart, or None if they never created one."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart (one per customer)."""
