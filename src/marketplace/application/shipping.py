"""Application services: shipping quotes, tracking and the address book."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from marketplace.application.dto import AddressDTO, OrderItemSpec
from marketplace.application.lookups import require_order, require_product, require_user
from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.order import OrderStatus
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Address, Quantity
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy
from marketplace.domain.service.shipping_estimator import (
    SHIPPING_METHODS,
    ShippingParcelLine,
    estimate,
)


@dataclass(frozen=True)
class ShippingMethodDTO:
    id: str
    name: str
    description: str
    base_price: str
    per_kg_price: str
    estimated_days: int


@dataclass(frozen=True)
class ShippingQuoteDTO:
    shipping_cost: str
    estimated_days: int
    shipping_method: str
    total_weight: str
    subtotal: str
    free_shipping: bool


@dataclass(frozen=True)
class TrackingUpdateDTO:
    status: str
    location: str
    timestamp: str
    description: str


@dataclass(frozen=True)
class TrackingDTO:
    order_id: str
    tracking_number: str
    status: str
    estimated_delivery: str | None
    updates: list[TrackingUpdateDTO]


class ShippingHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    @staticmethod
    def methods() -> list[ShippingMethodDTO]:
        return [
            ShippingMethodDTO(
                id=m.id,
                name=m.name,
                description=m.description,
                base_price=m.base.to_plain(),
                per_kg_price=m.per_kg.to_plain(),
                estimated_days=m.max_days,
            )
            for m in SHIPPING_METHODS.values()
        ]

    def quote(
        self,
        items: list[OrderItemSpec],
        destination: Address | None,
        method: str | None = None,
    ) -> ShippingQuoteDTO:
        """Price a shipment of catalog items at their current sale price."""
        if not items:
            raise ValidationError("Items are required")
        if destination is None:
            raise ValidationError("Destination address is required")

        lines = []
        for spec in items:
            quantity = Quantity(spec.quantity)
            product = require_product(self._product_repo, spec.product_id)
            lines.append(
                ShippingParcelLine(
                    weight_kg=product.weight_kg,
                    unit_price=product.sale_price,
                    quantity=quantity.value,
                )
            )

        result = estimate(method, lines)
        return ShippingQuoteDTO(
            shipping_cost=result.cost.to_plain(),
            estimated_days=result.estimated_days,
            shipping_method=result.method.id,
            total_weight=f"{result.total_weight_kg:.2f}",
            subtotal=result.subtotal.to_plain(),
            free_shipping=result.free_shipping,
        )

    def track(self, actor: User, order_id: str) -> TrackingDTO:
        order = require_order(self._order_repo, order_id)
        access_policy.ensure_can_view_order(actor, order)

        destination = order.shipping_address.city if order.shipping_address else "Destination"
        updates = [
            TrackingUpdateDTO(
                "Order Placed", "Warehouse", order.created_at.isoformat(),
                "Order has been placed and is being processed",
            ),
            TrackingUpdateDTO(
                "Processing", "Warehouse", (order.created_at + timedelta(hours=2)).isoformat(),
                "Order is being prepared for shipment",
            ),
        ]
        if order.status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            updates.append(
                TrackingUpdateDTO(
                    "Shipped", destination, order.updated_at.isoformat(),
                    "Package has been shipped",
                )
            )
        if order.status == OrderStatus.DELIVERED:
            updates.append(
                TrackingUpdateDTO(
                    "Delivered", destination, order.updated_at.isoformat(),
                    "Package has been delivered",
                )
            )

        in_transit = order.status in (OrderStatus.PENDING, OrderStatus.PAID, OrderStatus.SHIPPED)
        eta = datetime.now(timezone.utc) + timedelta(days=3) if in_transit else None
        return TrackingDTO(
            order_id=order.id,  # type: ignore[arg-type]
            tracking_number=order.tracking_number or order.default_tracking_number(),
            status=order.status.value,
            estimated_delivery=eta.isoformat() if eta else None,
            updates=updates,
        )


class AddressBookHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def list(self, actor: User) -> list[AddressDTO]:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        return [AddressDTO.from_saved(a) for a in user.addresses]

    def add(self, actor: User, address: Address, is_default: bool = False) -> AddressDTO:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        saved = user.add_address(address, is_default)
        self._user_repo.save(user)
        return AddressDTO.from_saved(saved)

    def update(
        self, actor: User, address_id: str, address: Address, is_default: bool = False
    ) -> AddressDTO:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        saved = user.update_address(address_id, address, is_default)
        self._user_repo.save(user)
        return AddressDTO.from_saved(saved)

    def remove(self, actor: User, address_id: str) -> None:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        user.remove_address(address_id)
        self._user_repo.save(user)

    def set_default(self, actor: User, address_id: str) -> AddressDTO:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        saved = user.set_default_address(address_id)
        self._user_repo.save(user)
        return AddressDTO.from_saved(saved)
