"""Cart aggregate: one mutable shopping list per customer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from marketplace.domain.model.value_objects import Quantity


@dataclass
class CartLine:
    product_id: str
    quantity: Quantity


@dataclass
class Cart:
    """A customer's cart.

    Adding a product that is already in the cart increases that line's
    quantity instead of creating a second line.
    """

    customer_id: str
    lines: list[CartLine] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def add(self, product_id: str, quantity: Quantity) -> None:
        for line in self.lines:
            if line.product_id == product_id:
                line.quantity = Quantity(line.quantity.value + quantity.value)
                self._touch()
                return
        self.lines.append(CartLine(product_id=product_id, quantity=quantity))
        self._touch()

    def remove(self, product_id: str) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]
        self._touch()

    def clear(self) -> None:
        self.lines = []
        self._touch()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
