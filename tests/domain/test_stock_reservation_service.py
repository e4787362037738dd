"""Unit tests for all-or-nothing stock reservation."""

import pytest

from marketplace.domain.exceptions import InsufficientStockError
from marketplace.domain.model.order import OrderLine
from marketplace.domain.model.product import Product
from marketplace.domain.model.value_objects import Money, Quantity
from marketplace.domain.service.stock_reservation_service import StockReservationService
from tests.fakes import FakeProductRepository


def _setup() -> tuple[StockReservationService, FakeProductRepository]:
    repo = FakeProductRepository([
        Product(id="p1", name="Lamp", price=Money.of("10"), vendor_id="v1", stock=5),
        Product(id="p2", name="Desk", price=Money.of("90"), vendor_id="v1", stock=1),
    ])
    return StockReservationService(repo), repo


def _line(product_id: str, name: str, qty: int) -> OrderLine:
    return OrderLine(product_id, name, "v1", Quantity(qty), Money.of("1"))


class TestReserve:

    def test_takes_every_line(self):
        service, repo = _setup()
        service.reserve_lines([_line("p1", "Lamp", 2), _line("p2", "Desk", 1)])
        assert repo.stock_of("p1") == 3
        assert repo.stock_of("p2") == 0

    def test_failure_releases_earlier_lines(self):
        service, repo = _setup()
        with pytest.raises(InsufficientStockError, match="Insufficient stock for Desk"):
            service.reserve_lines([_line("p1", "Lamp", 2), _line("p2", "Desk", 2)])
        assert repo.stock_of("p1") == 5
        assert repo.stock_of("p2") == 1

    def test_restore_for_order(self):
        service, repo = _setup()
        lines = [_line("p1", "Lamp", 4)]
        service.reserve_lines(lines)
        service.release_lines(lines)
        assert repo.stock_of("p1") == 5
