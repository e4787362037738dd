"""Application service: cart use cases (customers only)."""

from __future__ import annotations

from marketplace.application.dto import CartDTO
from marketplace.application.lookups import require_product
from marketplace.domain.exceptions import EntityNotFoundError, ValidationError
from marketplace.domain.model.cart import Cart
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Quantity
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.service import access_policy


class CartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def show(self, actor: User) -> CartDTO:
        access_policy.ensure_customer(actor)
        cart = self._cart_repo.get_by_customer(actor.id) or Cart(customer_id=actor.id)  # type: ignore[arg-type]
        return self._to_dto(cart)

    def add(self, actor: User, product_id: str, quantity: int) -> CartDTO:
        access_policy.ensure_customer(actor)
        if not product_id:
            raise ValidationError("Product and valid quantity required")
        qty = Quantity(quantity)
        require_product(self._product_repo, product_id)

        cart = self._cart_repo.get_by_customer(actor.id) or Cart(customer_id=actor.id)  # type: ignore[arg-type]
        cart.add(product_id, qty)
        self._cart_repo.save(cart)
        return self._to_dto(cart)

    def remove(self, actor: User, product_id: str) -> CartDTO:
        access_policy.ensure_customer(actor)
        cart = self._require_cart(actor)
        cart.remove(product_id)
        self._cart_repo.save(cart)
        return self._to_dto(cart)

    def clear(self, actor: User) -> CartDTO:
        access_policy.ensure_customer(actor)
        cart = self._require_cart(actor)
        cart.clear()
        self._cart_repo.save(cart)
        return self._to_dto(cart)

    def _require_cart(self, actor: User) -> Cart:
        cart = self._cart_repo.get_by_customer(actor.id)  # type: ignore[arg-type]
        if cart is None:
            raise EntityNotFoundError("Cart not found")
        return cart

    def _to_dto(self, cart: Cart) -> CartDTO:
        products = {}
        for line in cart.lines:
            product = self._product_repo.get_by_id(line.product_id)
            if product is not None:
                products[line.product_id] = product
        return CartDTO.from_cart(cart, products)
