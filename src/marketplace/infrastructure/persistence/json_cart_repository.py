"""JSON-file-backed implementation of CartRepository, keyed by customer."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from marketplace.domain.model.cart import Cart, CartLine
from marketplace.domain.model.value_objects import Quantity
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.infrastructure.persistence.json_store import JsonCollection


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonCollection(file_path)

    def get_by_customer(self, customer_id: str) -> Cart | None:
        raw = self._store.find_raw(lambda r: r["customer_id"] == customer_id)
        return self._to_domain(raw) if raw else None

    def save(self, cart: Cart) -> None:
        self._store.upsert_raw(self._to_raw(cart), key="customer_id")

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "customer_id": cart.customer_id,
            "updated_at": cart.updated_at.isoformat(),
            "items": [
                {"product_id": line.product_id, "quantity": line.quantity.value}
                for line in cart.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            customer_id=raw["customer_id"],
            lines=[
                CartLine(product_id=i["product_id"], quantity=Quantity(i["quantity"]))
                for i in raw.get("items", [])
            ],
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
