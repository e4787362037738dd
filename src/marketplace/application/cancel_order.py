"""Application service: Cancel Order use case.

Only pending and paid orders can be cancelled.  A paid order gives its
stock back (every line's quantity is returned to the product); a pending
order is cancelled without touching stock.

The status change runs as one atomic repository update, so of several
concurrent cancels only one sees the order as paid and restores stock.
"""

from __future__ import annotations

import logging

from marketplace.application.dto import OrderDTO
from marketplace.domain.model.order import Order, OrderStatus
from marketplace.domain.model.user import User
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy
from marketplace.domain.service.order_notifier import OrderNotifier
from marketplace.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._user_repo = user_repo

    def handle(self, actor: User, order_id: str) -> OrderDTO:
        previous: OrderStatus | None = None

        def _cancel(order: Order) -> None:
            nonlocal previous
            access_policy.ensure_can_cancel_order(actor, order)
            previous = order.cancel()

        order = self._order_repo.update(order_id, _cancel)
        if previous == OrderStatus.PAID:
            StockReservationService(self._product_repo).restore_for_order(order)
        logger.info("Order %s cancelled by %s (was %s)", order.id, actor.id, previous.value)

        OrderNotifier(self._user_repo).status_changed(order)
        return OrderDTO.from_order(order)
