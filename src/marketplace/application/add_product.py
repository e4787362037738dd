"""Application service: Add Product use case."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from marketplace.application.dto import ProductDTO
from marketplace.application.lookups import require_category
from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.product import DEFAULT_WEIGHT_KG, Product
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Money, Percentage
from marketplace.domain.repository.category_repository import CategoryRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.service import access_policy

logger = logging.getLogger(__name__)


def parse_weight(value: str | float | Decimal | None) -> Decimal:
    if value is None:
        return DEFAULT_WEIGHT_KG
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid weight: {value!r}") from exc


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(
        self,
        actor: User,
        name: str,
        price: str,
        description: str | None = None,
        image_url: str | None = None,
        offer: str | int = 0,
        category_id: str | None = None,
        stock: int = 0,
        weight_kg: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog, owned by the caller."""
        access_policy.ensure_can_create_product(actor)
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if category_id:
            require_category(self._category_repo, category_id)

        product = Product(
            id=None,
            name=name.strip(),
            price=Money.of(price),
            vendor_id=actor.id,  # type: ignore[arg-type]
            stock=stock,
            offer=Percentage.of(offer),
            description=description,
            image_url=image_url,
            category_id=category_id or None,
            weight_kg=parse_weight(weight_kg),
        )
        self._product_repo.save(product)
        logger.info("Product %s '%s' added by %s", product.id, product.name, actor.id)
        return ProductDTO.from_product(product)
