"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable

from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.model.product import DEFAULT_WEIGHT_KG, Product
from marketplace.domain.model.value_objects import Money, Percentage
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.infrastructure.persistence.json_store import JsonCollection


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonCollection(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._store.find_raw(lambda r: r["id"] == product_id)
        return self._to_domain(raw) if raw else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._store.all_raw()]

    def save(self, product: Product) -> None:
        if product.id is None:
            product.id = self._store.new_id()
        self._store.upsert_raw(self._to_raw(product))

    def delete(self, product_id: str) -> bool:
        return self._store.delete_raw(product_id)

    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        with self._store.editing() as records:
            raw = self._find(records, product_id)
            if raw["stock"] < quantity:
                return False
            raw["stock"] -= quantity
            return True

    def increment_stock(self, product_id: str, quantity: int) -> None:
        with self._store.editing() as records:
            raw = self._find(records, product_id)
            raw["stock"] += quantity

    def update(self, product_id: str, mutate: Callable[[Product], None]) -> Product:
        with self._store.editing() as records:
            raw = self._find(records, product_id)
            product = self._to_domain(raw)
            mutate(product)
            records[records.index(raw)] = self._to_raw(product)
            return product

    @staticmethod
    def _find(records: list[dict], product_id: str) -> dict:
        for raw in records:
            if raw["id"] == product_id:
                return raw
        raise EntityNotFoundError("Product not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "offer": str(product.offer.value),
            "stock": product.stock,
            "vendor_id": product.vendor_id,
            "category_id": product.category_id,
            "image_url": product.image_url,
            "weight_kg": str(product.weight_kg),
            "is_active": product.is_active,
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description"),
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            offer=Percentage(Decimal(raw.get("offer", "0"))),
            stock=raw.get("stock", 0),
            vendor_id=raw["vendor_id"],
            category_id=raw.get("category_id"),
            image_url=raw.get("image_url"),
            weight_kg=Decimal(raw["weight_kg"]) if raw.get("weight_kg") else DEFAULT_WEIGHT_KG,
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
