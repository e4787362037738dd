"""Order lifecycle endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends

from marketplace.application.amend_order import AmendOrderHandler
from marketplace.application.cancel_order import CancelOrderHandler
from marketplace.application.create_order import CreateOrderHandler
from marketplace.application.list_orders import ListOrdersHandler
from marketplace.application.pay_order import PayOrderHandler
from marketplace.application.show_order import ShowOrderHandler
from marketplace.application.update_order_status import UpdateOrderStatusHandler
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import (
    OrderAmendRequest,
    OrderCreateRequest,
    PayRequest,
    StatusRequest,
    to_address,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=201)
def create_order(
    body: OrderCreateRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    handler = CreateOrderHandler(container.orders, container.products, container.users)
    return handler.handle(
        actor,
        [item.to_spec() for item in body.items],
        shipping_address=to_address(body.shipping_address),
        notes=body.notes,
    )


@router.get("")
def list_orders(
    status: Optional[str] = None,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return ListOrdersHandler(container.orders).handle(actor, status)


@router.get("/mine")
def my_orders(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return ListOrdersHandler(container.orders).mine(actor)


@router.get("/vendor")
def vendor_orders(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return ListOrdersHandler(container.orders).for_vendor(actor)


@router.get("/status/{status}")
def orders_by_status(
    status: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return ListOrdersHandler(container.orders).handle(actor, status)


@router.get("/{order_id}")
def get_order(
    order_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return ShowOrderHandler(container.orders).handle(actor, order_id)


@router.put("/{order_id}")
def amend_order(
    order_id: str,
    body: OrderAmendRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AmendOrderHandler(container.orders).handle(
        actor,
        order_id,
        shipping_address=to_address(body.shipping_address),
        notes=body.notes,
        tracking_number=body.tracking_number,
    )


@router.patch("/{order_id}/pay")
def pay_order(
    order_id: str,
    body: Optional[PayRequest] = None,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    method = body.payment_method if body else None
    return PayOrderHandler(container.orders, container.users).handle(actor, order_id, method)


@router.patch("/{order_id}/status")
def update_status(
    order_id: str,
    body: StatusRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    handler = UpdateOrderStatusHandler(container.orders, container.products, container.users)
    return handler.handle(actor, order_id, body.status, body.tracking_number)


@router.delete("/{order_id}")
def cancel_order(
    order_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return CancelOrderHandler(container.orders, container.products, container.users).handle(
        actor, order_id
    )
