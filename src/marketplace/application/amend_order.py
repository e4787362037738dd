"""Application service: Amend Order use case (admin edits).

Admins may correct the shipping address, notes and tracking number.
Totals and status are never edited directly.
"""

from __future__ import annotations

from marketplace.application.dto import OrderDTO
from marketplace.domain.model.user import User
from marketplace.domain.model.value_objects import Address
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.service import access_policy


class AmendOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        actor: User,
        order_id: str,
        shipping_address: Address | None = None,
        notes: str | None = None,
        tracking_number: str | None = None,
    ) -> OrderDTO:
        access_policy.ensure_can_amend_order(actor)
        order = self._order_repo.update(
            order_id,
            lambda order: order.amend(
                shipping_address=shipping_address,
                notes=notes,
                tracking_number=tracking_number,
            ),
        )
        return OrderDTO.from_order(order)
