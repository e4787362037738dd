"""Load-or-404 helpers shared by the use cases."""

from __future__ import annotations

from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.model.category import Category
from marketplace.domain.model.order import Order, OrderStatus
from marketplace.domain.model.product import Product
from marketplace.domain.model.user import Role, User
from marketplace.domain.repository.category_repository import CategoryRepository
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.repository.user_repository import UserRepository


def require_order(order_repo: OrderRepository, order_id: str) -> Order:
    order = order_repo.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError("Order not found")
    return order


def require_product(product_repo: ProductRepository, product_id: str) -> Product:
    product = product_repo.get_by_id(product_id)
    if product is None:
        raise EntityNotFoundError("Product not found")
    return product


def require_user(user_repo: UserRepository, user_id: str) -> User:
    user = user_repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundError("User not found")
    return user


def require_category(category_repo: CategoryRepository, category_id: str) -> Category:
    category = category_repo.get_by_id(category_id)
    if category is None:
        raise EntityNotFoundError("Category not found")
    return category


def visible_orders(
    order_repo: OrderRepository,
    actor: User,
    status: OrderStatus | None = None,
) -> list[Order]:
    """Orders *actor* may see, newest first.

    Customers see their own orders, vendors the orders that contain one
    of their products, admins every order.
    """
    if actor.role == Role.CUSTOMER:
        return order_repo.find(customer_id=actor.id, status=status)
    if actor.role == Role.VENDOR:
        return order_repo.find(vendor_id=actor.id, status=status)
    return order_repo.find(status=status)
