"""Simulated payment gateway endpoints."""

import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header

from marketplace.application.payments import (
    ConfirmPaymentHandler,
    CreatePaymentIntentHandler,
    PaymentHistoryHandler,
    PaymentWebhookHandler,
)
from marketplace.application.refund_order import RefundOrderHandler
from marketplace.domain.exceptions import AuthenticationError
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import (
    PaymentConfirmRequest,
    PaymentIntentRequest,
    RefundRequest,
    WebhookEvent,
)

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/create-intent")
def create_intent(
    body: PaymentIntentRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    intent = CreatePaymentIntentHandler(container.orders).handle(
        actor,
        body.order_id,
        amount=str(body.amount) if body.amount is not None else None,
        currency=body.currency,
    )
    return {"payment_intent": intent, "message": "Payment intent created successfully"}


@router.post("/confirm")
def confirm_payment(
    body: PaymentConfirmRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    order = ConfirmPaymentHandler(container.orders, container.users).handle(
        actor, body.order_id, body.payment_intent_id
    )
    return {"order": order, "message": "Payment confirmed successfully"}


@router.post("/refund")
def refund(
    body: RefundRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    result = RefundOrderHandler(container.orders, container.users).handle(
        actor, body.order_id, str(body.amount), body.reason
    )
    return {"refund": result, "message": "Refund processed successfully"}


@router.get("/history")
def payment_history(
    page: int = 1,
    limit: int = 10,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return PaymentHistoryHandler(container.orders).handle(actor, page=page, limit=limit)


@router.post("/webhook")
def webhook(
    event: WebhookEvent,
    x_webhook_secret: Optional[str] = Header(None),
    container: Container = Depends(get_container),
):
    expected = container.settings.webhook_secret
    if expected and not hmac.compare_digest((x_webhook_secret or "").encode(), expected.encode()):
        raise AuthenticationError("Invalid webhook secret")
    PaymentWebhookHandler(container.orders, container.users).handle(event.type, event.data)
    return {"received": True}
