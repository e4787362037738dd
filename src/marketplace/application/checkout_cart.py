"""Application service: Checkout Cart use case.

Turns the customer's cart into an order through CreateOrderHandler and
empties the cart only once the order exists.
"""

from __future__ import annotations

from marketplace.application.create_order import CreateOrderHandler
from marketplace.application.dto import OrderDTO, OrderItemSpec
from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Address
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy


class CheckoutCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._create_order = CreateOrderHandler(order_repo, product_repo, user_repo)

    def handle(
        self,
        actor: User,
        shipping_address: Address | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        access_policy.ensure_can_place_order(actor)
        cart = self._cart_repo.get_by_customer(actor.id)  # type: ignore[arg-type]
        if cart is None or cart.is_empty:
            raise ValidationError("Cart is empty")

        specs = [
            OrderItemSpec(product_id=line.product_id, quantity=line.quantity.value)
            for line in cart.lines
        ]
        dto = self._create_order.handle(actor, specs, shipping_address, notes)

        cart.clear()
        self._cart_repo.save(cart)
        return dto
