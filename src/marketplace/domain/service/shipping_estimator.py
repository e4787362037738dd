"""Shipping cost and delivery-time estimation.

Pure functions over shipping rates; no repository access.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from marketplace.domain.model.value_objects import CENT, Money

FREE_SHIPPING_THRESHOLD = Money(Decimal("50.00"))


@dataclass(frozen=True)
class ShippingMethod:
    id: str
    name: str
    description: str
    base: Money
    per_kg: Money
    max_days: int


SHIPPING_METHODS: dict[str, ShippingMethod] = {
    "standard": ShippingMethod(
        "standard", "Standard Shipping", "5-7 business days",
        Money.of("5.99"), Money.of("2.50"), 7,
    ),
    "express": ShippingMethod(
        "express", "Express Shipping", "2-3 business days",
        Money.of("12.99"), Money.of("4.00"), 3,
    ),
    "overnight": ShippingMethod(
        "overnight", "Overnight Shipping", "Next business day",
        Money.of("24.99"), Money.of("6.00"), 1,
    ),
}
DEFAULT_METHOD = "standard"


@dataclass(frozen=True)
class ShippingParcelLine:
    weight_kg: Decimal
    unit_price: Money
    quantity: int


@dataclass(frozen=True)
class ShippingQuote:
    method: ShippingMethod
    cost: Money
    total_weight_kg: Decimal
    subtotal: Money
    free_shipping: bool

    @property
    def estimated_days(self) -> int:
        return self.method.max_days


def resolve_method(method_id: str | None) -> ShippingMethod:
    """Unknown or missing method ids fall back to standard shipping."""
    return SHIPPING_METHODS.get(method_id or DEFAULT_METHOD, SHIPPING_METHODS[DEFAULT_METHOD])


def shipping_cost(method: ShippingMethod, total_weight_kg: Decimal) -> Money:
    """``base + per_kg * weight``, rounded to the cent."""
    raw = method.base.amount + method.per_kg.amount * total_weight_kg
    return Money(raw.quantize(CENT, rounding=ROUND_HALF_UP))


def estimate(method_id: str | None, lines: list[ShippingParcelLine]) -> ShippingQuote:
    method = resolve_method(method_id)
    total_weight = sum((line.weight_kg * line.quantity for line in lines), Decimal("0"))
    subtotal = Money.zero()
    for line in lines:
        subtotal = subtotal + line.unit_price * line.quantity

    free = subtotal > FREE_SHIPPING_THRESHOLD
    cost = Money.zero() if free else shipping_cost(method, total_weight)
    return ShippingQuote(
        method=method,
        cost=cost,
        total_weight_kg=total_weight,
        subtotal=subtotal,
        free_shipping=free,
    )
