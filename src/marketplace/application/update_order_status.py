"""Application service: Update Order Status use case (vendor fulfilment).

Vendors move orders containing their products along
paid -> shipped -> delivered, or cancel them.
"""

from __future__ import annotations

import logging

from marketplace.application.cancel_order import CancelOrderHandler
from marketplace.application.dto import OrderDTO
from marketplace.application.lookups import require_order
from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.order import Order, OrderStatus
from marketplace.domain.model.user import User
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy
from marketplace.domain.service.order_notifier import OrderNotifier

logger = logging.getLogger(__name__)

VENDOR_STATUSES = (OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class UpdateOrderStatusHandler:

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
        order_id: str,
        status: str,
        tracking_number: str | None = None,
    ) -> OrderDTO:
        target = OrderStatus.parse(status)
        if target not in VENDOR_STATUSES:
            raise ValidationError("Invalid status")

        if target == OrderStatus.CANCELLED:
            # Line ownership is immutable.
            access_policy.ensure_can_fulfil_order(actor, require_order(self._order_repo, order_id))
            return CancelOrderHandler(
                self._order_repo, self._product_repo, self._user_repo
            ).handle(actor, order_id)

        def _advance(order: Order) -> None:
            access_policy.ensure_can_fulfil_order(actor, order)
            if target == OrderStatus.SHIPPED:
                order.ship(tracking_number)
            else:
                order.deliver()

        order = self._order_repo.update(order_id, _advance)
        logger.info("Order %s marked %s by vendor %s", order.id, target.value, actor.id)

        OrderNotifier(self._user_repo).status_changed(order)
        return OrderDTO.from_order(order)
