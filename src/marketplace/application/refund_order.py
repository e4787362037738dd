"""Application service: Refund Order use case (simulated refund).

A refund never exceeds what is left of the order total.  Once the
refunds add up to the full total the order becomes ``refunded``.
"""

from __future__ import annotations

import logging

from marketplace.application.dto import RefundDTO
from marketplace.domain.model.order import Order, OrderStatus, Refund
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Money
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy
from marketplace.domain.service.order_notifier import OrderNotifier

logger = logging.getLogger(__name__)


class RefundOrderHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(
        self,
        actor: User,
        order_id: str,
        amount: str,
        reason: str | None = None,
    ) -> RefundDTO:
        refund: Refund | None = None

        def _refund(order: Order) -> None:
            nonlocal refund
            access_policy.ensure_can_refund_order(actor, order)
            refund = order.refund(Money.of(amount), reason)

        order = self._order_repo.update(order_id, _refund)
        logger.info("Refund %s of %s issued for order %s", refund.id, refund.amount, order.id)

        if order.status == OrderStatus.REFUNDED:
            OrderNotifier(self._user_repo).status_changed(order)

        return RefundDTO(
            id=refund.id,
            amount=refund.amount.to_plain(),
            reason=refund.reason,
            status="succeeded",
            order_id=order.id,  # type: ignore[arg-type]
            created_at=refund.created_at.isoformat(),
        )
