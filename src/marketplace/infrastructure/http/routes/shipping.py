"""Shipping quotes, tracking and the saved address book."""

from fastapi import APIRouter, Depends

from marketplace.application.shipping import AddressBookHandler, ShippingHandler
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import (
    SavedAddressRequest,
    ShippingQuoteRequest,
    to_address,
)

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.get("/methods")
def shipping_methods():
    return ShippingHandler.methods()


@router.post("/calculate")
def calculate_shipping(body: ShippingQuoteRequest, container: Container = Depends(get_container)):
    return ShippingHandler(container.products, container.orders).quote(
        [item.to_spec() for item in body.items],
        to_address(body.destination),
        body.shipping_method,
    )


@router.get("/track/{order_id}")
def track_order(
    order_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return ShippingHandler(container.products, container.orders).track(actor, order_id)


@router.post("/address", status_code=201)
def add_address(
    body: SavedAddressRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AddressBookHandler(container.users).add(actor, body.to_domain(), body.is_default)


@router.get("/addresses")
def list_addresses(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return AddressBookHandler(container.users).list(actor)


@router.put("/addresses/{address_id}")
def update_address(
    address_id: str,
    body: SavedAddressRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AddressBookHandler(container.users).update(
        actor, address_id, body.to_domain(), body.is_default
    )


@router.delete("/addresses/{address_id}")
def delete_address(
    address_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    AddressBookHandler(container.users).remove(actor, address_id)
    return {"message": "Address deleted successfully"}


@router.patch("/addresses/{address_id}/default")
def set_default_address(
    address_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AddressBookHandler(container.users).set_default(actor, address_id)
