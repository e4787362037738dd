"""Domain service: writes order events into the customer's notifications."""

from __future__ import annotations

import logging

from marketplace.domain.model.order import Order
from marketplace.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    "pending": "Your order {order_id} has been placed",
    "paid": "Payment received for order {order_id}",
    "shipped": "Order {order_id} has been shipped (tracking {tracking})",
    "delivered": "Order {order_id} has been delivered",
    "cancelled": "Order {order_id} has been cancelled",
    "refunded": "Order {order_id} has been refunded",
}


class OrderNotifier:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def status_changed(self, order: Order) -> None:
        template = STATUS_MESSAGES[order.status.value]
        self.notify_customer(
            order,
            template.format(order_id=order.id, tracking=order.tracking_number),
            kind=f"order_{order.status.value}",
        )

    def notify_customer(self, order: Order, message: str, kind: str = "order") -> None:
        customer = self._user_repo.get_by_id(order.customer_id)
        if customer is None:
            logger.warning("Customer %s of order %s no longer exists", order.customer_id, order.id)
            return
        customer.notify(message, kind=kind, order_id=order.id)
        self._user_repo.save(customer)
