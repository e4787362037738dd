"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable

from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentStatus,
    Refund,
)
from marketplace.domain.model.value_objects import Address, Money, Quantity
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.infrastructure.persistence.json_store import JsonCollection


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonCollection(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._store.find_raw(lambda r: r["id"] == order_id)
        return self._to_domain(raw) if raw else None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._store.all_raw()]

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._store.new_id()
        # Upsert: replace if exists, otherwise append
        self._store.upsert_raw(self._to_raw(order))

    def update(self, order_id: str, mutate: Callable[[Order], None]) -> Order:
        with self._store.editing() as records:
            raw = self._find(records, order_id)
            order = self._to_domain(raw)
            mutate(order)
            records[records.index(raw)] = self._to_raw(order)
            return order

    @staticmethod
    def _find(records: list[dict], order_id: str) -> dict:
        for raw in records:
            if raw["id"] == order_id:
                return raw
        raise EntityNotFoundError("Order not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        currency = order.total.currency
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method,
            "payment_intent_id": order.payment_intent_id,
            "total": str(order.total.amount),
            "currency": currency,
            "shipping_address": order.shipping_address.to_dict() if order.shipping_address else None,
            "tracking_number": order.tracking_number,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "vendor_id": item.vendor_id,
                    "quantity": item.quantity.value,
                    "price_at_purchase": str(item.price_at_purchase.amount),
                }
                for item in order.items
            ],
            "refunds": [
                {
                    "id": r.id,
                    "amount": str(r.amount.amount),
                    "reason": r.reason,
                    "created_at": r.created_at.isoformat(),
                }
                for r in order.refunds
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = [
            OrderLine(
                product_id=i["product_id"],
                product_name=i["product_name"],
                vendor_id=i["vendor_id"],
                quantity=Quantity(i["quantity"]),
                price_at_purchase=Money(Decimal(i["price_at_purchase"]), currency),
            )
            for i in raw["items"]
        ]
        refunds = [
            Refund(
                id=r["id"],
                amount=Money(Decimal(r["amount"]), currency),
                reason=r["reason"],
                created_at=datetime.fromisoformat(r["created_at"]),
            )
            for r in raw.get("refunds", [])
        ]
        address = raw.get("shipping_address")
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            items=items,
            total=Money(Decimal(raw["total"]), currency),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw.get("payment_status", "pending")),
            payment_method=raw.get("payment_method", "cash_on_delivery"),
            payment_intent_id=raw.get("payment_intent_id"),
            shipping_address=Address.from_dict(address) if address else None,
            tracking_number=raw.get("tracking_number"),
            notes=raw.get("notes"),
            refunds=refunds,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
