"""Application service: Pay Order use case (simulated self-payment)."""

from __future__ import annotations

import logging

from marketplace.application.dto import OrderDTO
from marketplace.domain.model.order import Order
from marketplace.domain.model.user import User
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy
from marketplace.domain.service.order_notifier import OrderNotifier

logger = logging.getLogger(__name__)


class PayOrderHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(self, actor: User, order_id: str, method: str | None = None) -> OrderDTO:
        def _pay(order: Order) -> None:
            access_policy.ensure_can_pay_order(actor, order)
            order.pay(method)

        order = self._order_repo.update(order_id, _pay)
        logger.info("Order %s paid by customer %s", order.id, actor.id)

        OrderNotifier(self._user_repo).status_changed(order)
        return OrderDTO.from_order(order)
