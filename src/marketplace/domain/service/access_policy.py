"""Authorization policy: one check per operation.

Every use case asks this module whether the acting user may proceed;
role and ownership rules are not repeated in handlers.  Each ``ensure_*``
function raises PermissionDeniedError on refusal.
"""

from __future__ import annotations

from marketplace.domain.exceptions import PermissionDeniedError
from marketplace.domain.model.order import Order
from marketplace.domain.model.product import Product
from marketplace.domain.model.user import Role, User


def _require(actor: User, *roles: Role, message: str) -> None:
    if actor.role not in roles:
        raise PermissionDeniedError(message)


def ensure_admin(actor: User) -> None:
    _require(actor, Role.ADMIN, message="Admin access only")


def ensure_customer(actor: User, action: str = "use cart") -> None:
    _require(actor, Role.CUSTOMER, message=f"Only customers can {action}")


def ensure_vendor(actor: User, action: str) -> None:
    _require(actor, Role.VENDOR, message=f"Only vendors can {action}")


# --- Catalog ------------------------------------------------------------------


def ensure_can_create_product(actor: User) -> None:
    _require(actor, Role.VENDOR, Role.ADMIN, message="Only vendors and admins can add products")


def ensure_can_manage_product(actor: User, product: Product) -> None:
    """Admins manage any product; vendors only the products they own."""
    if actor.role == Role.ADMIN:
        return
    if actor.role == Role.VENDOR and product.is_owned_by(actor.id):
        return
    raise PermissionDeniedError("Product is not owned by you")


def ensure_can_manage_categories(actor: User) -> None:
    ensure_admin(actor)


# --- Orders -------------------------------------------------------------------


def _is_order_party(actor: User, order: Order) -> bool:
    if actor.role == Role.ADMIN:
        return True
    if actor.role == Role.CUSTOMER:
        return order.customer_id == actor.id
    return actor.id in order.vendor_ids


def ensure_can_place_order(actor: User) -> None:
    ensure_customer(actor, "place orders")


def ensure_can_view_order(actor: User, order: Order) -> None:
    if not _is_order_party(actor, order):
        raise PermissionDeniedError("Access denied")


def ensure_can_cancel_order(actor: User, order: Order) -> None:
    """Owning customer, a vendor with a line in the order, or an admin."""
    if not _is_order_party(actor, order):
        raise PermissionDeniedError("Access denied")


def ensure_can_pay_order(actor: User, order: Order) -> None:
    ensure_customer(actor, "pay for orders")
    if order.customer_id != actor.id:
        raise PermissionDeniedError("Access denied")


def ensure_can_refund_order(actor: User, order: Order) -> None:
    if actor.role == Role.ADMIN:
        return
    if order.customer_id == actor.id:
        return
    raise PermissionDeniedError("Access denied")


def ensure_can_fulfil_order(actor: User, order: Order) -> None:
    """Only a vendor owning at least one line may ship or deliver."""
    ensure_vendor(actor, "update order status")
    if actor.id not in order.vendor_ids:
        raise PermissionDeniedError("Order is not related to your products")


def ensure_can_amend_order(actor: User) -> None:
    _require(actor, Role.ADMIN, message="Only admins can update orders")
