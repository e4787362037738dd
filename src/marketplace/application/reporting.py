"""Application service: admin analytics, computed on demand."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from marketplace.application.dto import OrderDTO
from marketplace.domain.model.order import REVENUE_STATUSES
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Money
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy

TOP_PRODUCTS = 5
RECENT_ORDERS = 10


@dataclass(frozen=True)
class TopProductDTO:
    product_id: str
    product_name: str
    total_sold: int


@dataclass(frozen=True)
class AnalyticsDTO:
    total_users: int
    total_products: int
    total_orders: int
    total_revenue: str
    recent_orders: list[OrderDTO]
    top_products: list[TopProductDTO]


class AnalyticsHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._user_repo = user_repo
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(self, actor: User) -> AnalyticsDTO:
        access_policy.ensure_admin(actor)
        return self.summary()

    def summary(self) -> AnalyticsDTO:
        """Unchecked variant for trusted callers such as the CLI."""
        orders = self._order_repo.find()  # newest first

        revenue = Money.zero()
        for order in orders:
            if order.status in REVENUE_STATUSES:
                revenue = revenue + order.total

        sold: Counter[str] = Counter()
        names: dict[str, str] = {}
        for order in orders:
            for line in order.items:
                sold[line.product_id] += line.quantity.value
                names.setdefault(line.product_id, line.product_name)

        top = []
        for product_id, total_sold in sold.most_common(TOP_PRODUCTS):
            product = self._product_repo.get_by_id(product_id)
            top.append(
                TopProductDTO(
                    product_id=product_id,
                    product_name=product.name if product else names[product_id],
                    total_sold=total_sold,
                )
            )

        return AnalyticsDTO(
            total_users=len(self._user_repo.list_all()),
            total_products=len(self._product_repo.list_all()),
            total_orders=len(orders),
            total_revenue=revenue.to_plain(),
            recent_orders=[OrderDTO.from_order(o) for o in orders[:RECENT_ORDERS]],
            top_products=top,
        )
