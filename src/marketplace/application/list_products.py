"""Application services: catalog queries."""

from __future__ import annotations

from marketplace.application.dto import ProductDTO
from marketplace.application.lookups import require_product
from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.product import Product
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Money
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.service import access_policy

SORT_KEYS = {
    "price_asc": (lambda p: p.price.amount, False),
    "price_desc": (lambda p: p.price.amount, True),
    "newest": (lambda p: p.created_at, True),
    "oldest": (lambda p: p.created_at, False),
    "name_asc": (lambda p: p.name.casefold(), False),
    "name_desc": (lambda p: p.name.casefold(), True),
}


def sort_products(products: list[Product], sort: str | None) -> list[Product]:
    if not sort:
        return products
    if sort not in SORT_KEYS:
        raise ValidationError(f"Unknown sort order: {sort!r}")
    key, reverse = SORT_KEYS[sort]
    return sorted(products, key=key, reverse=reverse)


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        search: str | None = None,
        category_id: str | None = None,
        min_price: str | None = None,
        max_price: str | None = None,
        sort: str | None = None,
    ) -> list[ProductDTO]:
        products = self._product_repo.list_all()
        if search:
            needle = search.casefold()
            products = [
                p for p in products
                if needle in p.name.casefold() or needle in (p.description or "").casefold()
            ]
        if category_id:
            products = [p for p in products if p.category_id == category_id]
        if min_price is not None:
            low = Money.of(min_price)
            products = [p for p in products if p.price >= low]
        if max_price is not None:
            high = Money.of(max_price)
            products = [p for p in products if p.price <= high]
        return [ProductDTO.from_product(p) for p in sort_products(products, sort)]

    def show(self, product_id: str) -> ProductDTO:
        return ProductDTO.from_product(require_product(self._product_repo, product_id))

    def by_vendor(self, vendor_id: str) -> list[ProductDTO]:
        return [ProductDTO.from_product(p) for p in self._product_repo.list_by_vendor(vendor_id)]

    def mine(self, actor: User) -> list[ProductDTO]:
        access_policy.ensure_vendor(actor, "view their products")
        return self.by_vendor(actor.id)  # type: ignore[arg-type]

    def low_stock(self, actor: User) -> list[ProductDTO]:
        access_policy.ensure_vendor(actor, "view stock alerts")
        return [
            ProductDTO.from_product(p)
            for p in self._product_repo.list_by_vendor(actor.id)  # type: ignore[arg-type]
            if p.is_low_stock
        ]

    def for_admin(
        self,
        actor: User,
        vendor_id: str | None = None,
        category_id: str | None = None,
        is_active: bool | None = None,
    ) -> list[ProductDTO]:
        access_policy.ensure_admin(actor)
        products = self._product_repo.list_all()
        if vendor_id:
            products = [p for p in products if p.vendor_id == vendor_id]
        if category_id:
            products = [p for p in products if p.category_id == category_id]
        if is_active is not None:
            products = [p for p in products if p.is_active == is_active]
        return [ProductDTO.from_product(p) for p in products]
