"""Application service: Show Order use case (query)."""

from __future__ import annotations

from marketplace.application.dto import OrderDTO
from marketplace.application.lookups import require_order
from marketplace.domain.model.user import User
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.service import access_policy


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, actor: User, order_id: str) -> OrderDTO:
        order = require_order(self._order_repo, order_id)
        access_policy.ensure_can_view_order(actor, order)
        return OrderDTO.from_order(order)
