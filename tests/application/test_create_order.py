"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories; no file I/O.
"""

import pytest

from marketplace.application.create_order import CreateOrderHandler
from marketplace.application.dto import OrderItemSpec
from marketplace.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    PermissionDeniedError,
    ValidationError,
)
from marketplace.domain.model.product import Product
from marketplace.domain.model.user import Role
from marketplace.domain.model.value_objects import Address, Money, Percentage
from tests.fakes import (
    FailingOrderRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeUserRepository,
    make_user,
)

CUSTOMER = make_user("c1")


def _setup(order_repo=None):
    """Build handler with fake repos pre-loaded with a small catalog."""
    products = [
        Product(id="widget", name="Widget", price=Money.of("15.00"), vendor_id="v1", stock=10),
        Product(id="gadget", name="Gadget", price=Money.of("25.00"), vendor_id="v2", stock=5),
        Product(
            id="sale", name="Sale Item", price=Money.of("20.00"), vendor_id="v1",
            stock=3, offer=Percentage.of(10),
        ),
        Product(id="hidden", name="Hidden", price=Money.of("1.00"), vendor_id="v1", stock=9, is_active=False),
    ]
    order_repo = order_repo or FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    user_repo = FakeUserRepository([CUSTOMER])
    handler = CreateOrderHandler(order_repo, product_repo, user_repo)
    return handler, order_repo, product_repo, user_repo


class TestCreateOrderHappyPath:

    def test_creates_order_with_correct_total(self):
        handler, _, _, _ = _setup()
        dto = handler.handle(CUSTOMER, [OrderItemSpec("widget", 3), OrderItemSpec("gadget", 5)])
        assert dto.total == "170.00"
        assert dto.status == "pending"
        assert dto.payment_status == "pending"
        assert dto.customer_id == "c1"
        assert len(dto.items) == 2

    def test_decrements_stock(self):
        handler, _, product_repo, _ = _setup()
        handler.handle(CUSTOMER, [OrderItemSpec("widget", 3), OrderItemSpec("gadget", 5)])
        assert product_repo.stock_of("widget") == 7
        assert product_repo.stock_of("gadget") == 0

    def test_offer_is_applied_to_line_price(self):
        handler, _, _, _ = _setup()
        dto = handler.handle(CUSTOMER, [OrderItemSpec("sale", 2)])
        assert dto.items[0].price_at_purchase == "18.00"
        assert dto.total == "36.00"

    def test_records_vendor_on_each_line(self):
        handler, _, _, _ = _setup()
        dto = handler.handle(CUSTOMER, [OrderItemSpec("widget", 1), OrderItemSpec("gadget", 1)])
        assert [i.vendor_id for i in dto.items] == ["v1", "v2"]

    def test_persists_order_with_address_and_notes(self):
        handler, order_repo, _, _ = _setup()
        address = Address("1 Main St", "LA", "CA", "90001", "US")
        dto = handler.handle(CUSTOMER, [OrderItemSpec("widget", 1)], address, "ring twice")
        saved = order_repo.get_by_id(dto.id)
        assert saved.shipping_address == address
        assert saved.notes == "ring twice"

    def test_customer_is_notified(self):
        handler, _, _, user_repo = _setup()
        dto = handler.handle(CUSTOMER, [OrderItemSpec("widget", 1)])
        notes = user_repo.get_by_id("c1").notifications
        assert len(notes) == 1
        assert notes[0].order_id == dto.id


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, order_repo, product_repo, _ = _setup()
        dto = handler.handle(CUSTOMER, [OrderItemSpec("widget", 1)])

        widget = product_repo.get_by_id("widget")
        widget.update_price(Money.of("99.99"))
        product_repo.save(widget)

        saved = order_repo.get_by_id(dto.id)
        assert saved.total == Money.of("15.00")
        assert saved.items[0].price_at_purchase == Money.of("15.00")


class TestCreateOrderAllOrNothing:

    def test_insufficient_stock_leaves_every_product_untouched(self):
        handler, order_repo, product_repo, _ = _setup()
        with pytest.raises(InsufficientStockError, match="Insufficient stock for Gadget"):
            handler.handle(CUSTOMER, [OrderItemSpec("widget", 2), OrderItemSpec("gadget", 6)])
        assert product_repo.stock_of("widget") == 10
        assert product_repo.stock_of("gadget") == 5
        assert order_repo.list_all() == []

    def test_unknown_product_creates_nothing(self):
        handler, order_repo, product_repo, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle(CUSTOMER, [OrderItemSpec("widget", 1), OrderItemSpec("nope", 1)])
        assert product_repo.stock_of("widget") == 10
        assert order_repo.list_all() == []

    def test_inactive_product_counts_as_missing(self):
        handler, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle(CUSTOMER, [OrderItemSpec("hidden", 1)])

    def test_failed_save_gives_stock_back(self):
        handler, _, product_repo, _ = _setup(order_repo=FailingOrderRepository())
        with pytest.raises(OSError):
            handler.handle(CUSTOMER, [OrderItemSpec("widget", 4)])
        assert product_repo.stock_of("widget") == 10


class TestCreateOrderValidation:

    def test_empty_items(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="No items in order"):
            handler.handle(CUSTOMER, [])

    @pytest.mark.parametrize("qty", [0, -2])
    def test_bad_quantity(self, qty):
        handler, _, product_repo, _ = _setup()
        with pytest.raises(ValidationError, match="Quantity"):
            handler.handle(CUSTOMER, [OrderItemSpec("widget", qty)])
        assert product_repo.stock_of("widget") == 10

    @pytest.mark.parametrize("role", [Role.VENDOR, Role.ADMIN])
    def test_only_customers_order(self, role):
        handler, _, _, _ = _setup()
        with pytest.raises(PermissionDeniedError):
            handler.handle(make_user("x", role), [OrderItemSpec("widget", 1)])
