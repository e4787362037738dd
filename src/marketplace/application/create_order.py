"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.  This
is the place that coordinates several aggregates: product lookup, stock
reservation and Order creation.
"""

from __future__ import annotations

import logging

from marketplace.application.dto import OrderDTO, OrderItemSpec
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.model.order import Order, OrderLine
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Address, Quantity
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy
from marketplace.domain.service.order_notifier import OrderNotifier
from marketplace.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._user_repo = user_repo

    def handle(
        self,
        actor: User,
        item_specs: list[OrderItemSpec],
        shipping_address: Address | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Place a new order for the acting customer.

        Steps:
        1. Resolve each product (fail if missing or inactive).
        2. Build OrderLines with the *current* discounted price (snapshot).
        3. Let the Order aggregate validate and fix the total.
        4. Reserve stock for all lines, all or nothing.
        5. Persist; if that fails, give the stock back.
        """
        access_policy.ensure_can_place_order(actor)

        lines = [self._build_line(spec) for spec in item_specs]
        order = Order.place(
            customer_id=actor.id,  # type: ignore[arg-type]
            items=lines,
            shipping_address=shipping_address,
            notes=notes,
        )

        stock = StockReservationService(self._product_repo)
        stock.reserve_lines(order.items)
        try:
            self._order_repo.save(order)
        except Exception:
            logger.exception("Persisting new order failed; releasing reserved stock")
            stock.release_lines(order.items)
            raise

        logger.info(
            "Order %s placed by %s: %d line(s), total %s",
            order.id, actor.id, len(order.items), order.total,
        )
        OrderNotifier(self._user_repo).status_changed(order)
        return OrderDTO.from_order(order)

    def _build_line(self, spec: OrderItemSpec) -> OrderLine:
        quantity = Quantity(spec.quantity)
        product = self._product_repo.get_by_id(spec.product_id)
        if product is None or not product.is_active:
            raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")
        return OrderLine(
            product_id=product.id,  # type: ignore[arg-type]
            product_name=product.name,
            vendor_id=product.vendor_id,
            quantity=quantity,
            price_at_purchase=product.sale_price,  # <-- price snapshot
        )
