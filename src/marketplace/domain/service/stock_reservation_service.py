"""Domain service: Stock Reservation.

Coordinates the cross-aggregate operation of taking stock for an order
and giving it back.  It lives in the domain layer because all-or-nothing
reservation is a core business rule, not just orchestration.

Every line is taken with the repository's atomic conditional decrement.
If a later line fails, the lines already taken are released before the
error propagates, so a failed order never leaves stock decremented.
"""

from __future__ import annotations

import logging

from marketplace.domain.exceptions import InsufficientStockError
from marketplace.domain.model.order import Order, OrderLine
from marketplace.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve_lines(self, lines: list[OrderLine]) -> None:
        """Take stock for every line, or for none of them.

        Raises InsufficientStockError naming the first product that
        could not be satisfied.
        """
        taken: list[OrderLine] = []
        try:
            for line in lines:
                qty = line.quantity.value
                if not self._product_repo.decrement_stock_if_available(line.product_id, qty):
                    raise InsufficientStockError(f"Insufficient stock for {line.product_name}")
                taken.append(line)
        except Exception:
            if taken:
                logger.info("Releasing stock for %d line(s) after failed reservation", len(taken))
            self.release_lines(taken)
            raise

    def release_lines(self, lines: list[OrderLine]) -> None:
        for line in lines:
            self._product_repo.increment_stock(line.product_id, line.quantity.value)

    def restore_for_order(self, order: Order) -> None:
        """Put every line's quantity back into stock (paid order cancelled)."""
        self.release_lines(order.items)
        logger.info("Restored stock for order %s", order.id)
