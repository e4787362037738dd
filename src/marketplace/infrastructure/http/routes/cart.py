"""Customer cart endpoints."""

from fastapi import APIRouter, Depends

from marketplace.application.checkout_cart import CheckoutCartHandler
from marketplace.application.manage_cart import CartHandler
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import (
    CartAddRequest,
    CartRemoveRequest,
    CheckoutRequest,
    to_address,
)

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("")
def get_cart(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return CartHandler(container.carts, container.products).show(actor)


@router.post("/add")
def add_to_cart(
    body: CartAddRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return CartHandler(container.carts, container.products).add(actor, body.product_id, body.quantity)


@router.post("/remove")
def remove_from_cart(
    body: CartRemoveRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return CartHandler(container.carts, container.products).remove(actor, body.product_id)


@router.post("/clear")
def clear_cart(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return CartHandler(container.carts, container.products).clear(actor)


@router.post("/checkout", status_code=201)
def checkout(
    body: CheckoutRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    handler = CheckoutCartHandler(container.carts, container.orders, container.products, container.users)
    return handler.handle(actor, to_address(body.shipping_address), body.notes)
