"""Application services: Update Product, Set Stock and Set Offer use cases.

Admins may change any product; vendors only their own.  Each change is
applied through ``ProductRepository.update`` so it cannot overwrite a
stock decrement made by a concurrent order.
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.application.add_product import parse_weight
from marketplace.application.dto import ProductDTO
from marketplace.application.lookups import require_category, require_product
from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.product import Product
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Money, Percentage
from marketplace.domain.repository.category_repository import CategoryRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.service import access_policy


@dataclass(frozen=True)
class ProductChanges:
    """Fields to change; ``None`` leaves a field as it is."""

    name: str | None = None
    price: str | None = None
    description: str | None = None
    image_url: str | None = None
    offer: str | None = None
    category_id: str | None = None
    stock: int | None = None
    weight_kg: str | None = None
    is_active: bool | None = None


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(self, actor: User, product_id: str, changes: ProductChanges) -> ProductDTO:
        """Update a product.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        product = require_product(self._product_repo, product_id)
        access_policy.ensure_can_manage_product(actor, product)
        if changes.category_id:
            require_category(self._category_repo, changes.category_id)

        def _apply(p: Product) -> None:
            if changes.name is not None:
                p.rename(changes.name)
            if changes.price is not None:
                p.update_price(Money.of(changes.price))
            if changes.description is not None:
                p.description = changes.description
            if changes.image_url is not None:
                p.image_url = changes.image_url
            if changes.offer is not None:
                p.set_offer(Percentage.of(changes.offer))
            if changes.category_id is not None:
                p.category_id = changes.category_id or None
            if changes.stock is not None:
                p.set_stock(changes.stock)
            if changes.weight_kg is not None:
                weight = parse_weight(changes.weight_kg)
                if weight <= 0:
                    raise ValidationError("Weight must be greater than zero")
                p.weight_kg = weight
            if changes.is_active is not None:
                p.is_active = changes.is_active

        updated = self._product_repo.update(product_id, _apply)
        return ProductDTO.from_product(updated)


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, actor: User, product_id: str, stock: int) -> ProductDTO:
        product = require_product(self._product_repo, product_id)
        access_policy.ensure_can_manage_product(actor, product)
        updated = self._product_repo.update(product_id, lambda p: p.set_stock(stock))
        return ProductDTO.from_product(updated)


class SetOfferHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, actor: User, product_id: str, offer: str | int) -> ProductDTO:
        new_offer = Percentage.of(offer)
        product = require_product(self._product_repo, product_id)
        access_policy.ensure_can_manage_product(actor, product)
        updated = self._product_repo.update(product_id, lambda p: p.set_offer(new_offer))
        return ProductDTO.from_product(updated)
