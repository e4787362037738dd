"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, offers come and go, stock is replenished and sold.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.value_objects import Money, Percentage

DEFAULT_WEIGHT_KG = Decimal("0.5")
LOW_STOCK_THRESHOLD = 5


@dataclass
class Product:
    """A product in the catalog, owned by exactly one vendor.

    Invariant: ``stock`` is never negative.  Stock is only decremented
    through the repository's conditional decrement so that two
    concurrent orders cannot both take the last unit.
    """

    id: str | None
    name: str
    price: Money
    vendor_id: str
    stock: int = 0
    offer: Percentage = field(default_factory=lambda: Percentage(Decimal("0")))
    description: str | None = None
    image_url: str | None = None
    category_id: str | None = None
    weight_kg: Decimal = DEFAULT_WEIGHT_KG
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValidationError("Stock must be an integer")
        if self.stock < 0:
            raise ValidationError("Stock must be a non-negative number")
        if self.weight_kg <= 0:
            raise ValidationError("Weight must be greater than zero")

    @property
    def sale_price(self) -> Money:
        """Per-unit price after the current offer."""
        return self.price.discounted(self.offer)

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= LOW_STOCK_THRESHOLD

    def is_owned_by(self, user_id: str) -> bool:
        return self.vendor_id == user_id

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price

    def set_offer(self, offer: Percentage) -> None:
        self.offer = offer

    def set_stock(self, stock: int) -> None:
        if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
            raise ValidationError("Stock must be a non-negative number")
        self.stock = stock

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        self.name = name.strip()
