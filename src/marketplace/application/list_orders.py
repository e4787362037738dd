"""Application service: List Orders use case (query).

Every listing is scoped by role: customers see their own orders,
vendors see orders containing one of their products, admins see all.
"""

from __future__ import annotations

from marketplace.application.dto import OrderDTO
from marketplace.application.lookups import visible_orders
from marketplace.domain.model.order import OrderStatus
from marketplace.domain.model.user import User
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.service import access_policy


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, actor: User, status: str | None = None) -> list[OrderDTO]:
        wanted = OrderStatus.parse(status) if status else None
        orders = visible_orders(self._order_repo, actor, wanted)
        return [OrderDTO.from_order(o) for o in orders]

    def mine(self, actor: User) -> list[OrderDTO]:
        access_policy.ensure_customer(actor, "view their orders")
        return self.handle(actor)

    def for_vendor(self, actor: User) -> list[OrderDTO]:
        access_policy.ensure_vendor(actor, "view their orders")
        return self.handle(actor)

    def for_admin(
        self,
        actor: User,
        status: str | None = None,
        customer_id: str | None = None,
        vendor_id: str | None = None,
    ) -> list[OrderDTO]:
        access_policy.ensure_admin(actor)
        wanted = OrderStatus.parse(status) if status else None
        orders = self._order_repo.find(customer_id=customer_id, vendor_id=vendor_id, status=wanted)
        return [OrderDTO.from_order(o) for o in orders]
