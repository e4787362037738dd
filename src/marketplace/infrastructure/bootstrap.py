"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  One container is
built per process (or per app in tests) so every request shares the
same repository instances and therefore the same file locks.
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.application.ports import PasswordHasher, TokenService
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.repository.category_repository import CategoryRepository
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.infrastructure.config import Settings
from marketplace.infrastructure.persistence.json_cart_repository import JsonCartRepository
from marketplace.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from marketplace.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from marketplace.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from marketplace.infrastructure.persistence.json_user_repository import JsonUserRepository
from marketplace.infrastructure.security import JwtTokenService, PasslibPasswordHasher


@dataclass(frozen=True)
class Container:
    settings: Settings
    users: UserRepository
    products: ProductRepository
    categories: CategoryRepository
    carts: CartRepository
    orders: OrderRepository
    hasher: PasswordHasher
    tokens: TokenService


def build_container(settings: Settings) -> Container:
    data_dir = settings.data_dir
    return Container(
        settings=settings,
        users=JsonUserRepository(data_dir / "users.json"),
        products=JsonProductRepository(data_dir / "products.json"),
        categories=JsonCategoryRepository(data_dir / "categories.json"),
        carts=JsonCartRepository(data_dir / "carts.json"),
        orders=JsonOrderRepository(data_dir / "orders.json"),
        hasher=PasslibPasswordHasher(),
        tokens=JwtTokenService(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        ),
    )
