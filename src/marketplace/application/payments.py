"""Application services: simulated payment gateway.

There is no real settlement.  Intents and confirmations only move the
order through the same ``pending -> paid`` transition that self-payment
uses.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from decimal import Decimal

from marketplace.application.dto import OrderDTO
from marketplace.application.lookups import visible_orders
from marketplace.domain.exceptions import InvalidTransitionError, ValidationError
from marketplace.domain.model.order import Order, OrderStatus
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Money
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy
from marketplace.domain.service.order_notifier import OrderNotifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentIntentDTO:
    id: str
    amount: int  # minor units (cents)
    currency: str
    status: str
    order_id: str
    client_secret: str


@dataclass(frozen=True)
class PaymentSummaryDTO:
    order_id: str
    total: str
    status: str
    payment_status: str
    payment_method: str
    created_at: str


@dataclass(frozen=True)
class PaymentHistoryDTO:
    payments: list[PaymentSummaryDTO]
    total_pages: int
    current_page: int
    total: int


class CreatePaymentIntentHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        actor: User,
        order_id: str,
        amount: str | None = None,
        currency: str = "USD",
    ) -> PaymentIntentDTO:
        token = uuid.uuid4().hex[:16]
        intent_id = f"pi_{token}"

        def _attach_intent(order: Order) -> None:
            access_policy.ensure_can_pay_order(actor, order)
            if order.status != OrderStatus.PENDING:
                raise InvalidTransitionError("Order is not pending payment")
            if amount is not None and Money.of(amount) != order.total:
                raise ValidationError("Amount does not match order total")
            order.payment_intent_id = intent_id

        order = self._order_repo.update(order_id, _attach_intent)
        intent = PaymentIntentDTO(
            id=intent_id,
            amount=int(order.total.amount * Decimal(100)),
            currency=currency,
            status="requires_payment_method",
            order_id=order.id,  # type: ignore[arg-type]
            client_secret=f"pi_{token}_secret_{uuid.uuid4().hex[:9]}",
        )
        logger.info("Payment intent %s created for order %s", intent.id, order.id)
        return intent


class ConfirmPaymentHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(self, actor: User, order_id: str, payment_intent_id: str) -> OrderDTO:
        def _confirm(order: Order) -> None:
            access_policy.ensure_can_pay_order(actor, order)
            if not payment_intent_id or order.payment_intent_id != payment_intent_id:
                raise ValidationError("Unknown payment intent for this order")
            order.pay("card")

        order = self._order_repo.update(order_id, _confirm)
        logger.info("Payment %s confirmed for order %s", payment_intent_id, order.id)
        OrderNotifier(self._user_repo).status_changed(order)
        return OrderDTO.from_order(order)


class PaymentHistoryHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, actor: User, page: int = 1, limit: int = 10) -> PaymentHistoryDTO:
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")

        orders = visible_orders(self._order_repo, actor)

        start = (page - 1) * limit
        window = orders[start:start + limit]
        return PaymentHistoryDTO(
            payments=[
                PaymentSummaryDTO(
                    order_id=o.id,  # type: ignore[arg-type]
                    total=o.total.to_plain(),
                    status=o.status.value,
                    payment_status=o.payment_status.value,
                    payment_method=o.payment_method,
                    created_at=o.created_at.isoformat(),
                )
                for o in window
            ],
            total_pages=math.ceil(len(orders) / limit),
            current_page=page,
            total=len(orders),
        )


class PaymentWebhookHandler:
    """Applies gateway callbacks.

    ``payment_intent.succeeded`` pays the order; ``payment_intent.payment_failed``
    marks its payment as failed.  Other event types are acknowledged and
    ignored.
    """

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(self, event_type: str, data: dict) -> None:
        metadata = (data.get("object") or {}).get("metadata") or {}
        order_id = metadata.get("orderId") or metadata.get("order_id")

        if event_type not in ("payment_intent.succeeded", "payment_intent.payment_failed"):
            logger.info("Unhandled webhook type: %s", event_type)
            return
        if not order_id:
            logger.warning("Webhook %s without an order id", event_type)
            return

        if event_type == "payment_intent.succeeded":
            order = self._order_repo.update(order_id, lambda o: o.pay("card"))
            OrderNotifier(self._user_repo).status_changed(order)
        else:
            order = self._order_repo.update(order_id, lambda o: o.mark_payment_failed())
        logger.info("Webhook %s applied to order %s", event_type, order.id)
