"""JSON repositories persist aggregates and read them back intact."""

from decimal import Decimal

import pytest

from marketplace.domain.exceptions import EntityNotFoundError, ValidationError
from marketplace.domain.model.cart import Cart
from marketplace.domain.model.category import Category
from marketplace.domain.model.order import Order, OrderLine, OrderStatus
from marketplace.domain.model.product import Product
from marketplace.domain.model.user import Role, User
from marketplace.domain.model.value_objects import Address, Money, Percentage, Quantity
from marketplace.infrastructure.persistence.json_cart_repository import JsonCartRepository
from marketplace.infrastructure.persistence.json_category_repository import JsonCategoryRepository
from marketplace.infrastructure.persistence.json_order_repository import JsonOrderRepository
from marketplace.infrastructure.persistence.json_product_repository import JsonProductRepository
from marketplace.infrastructure.persistence.json_user_repository import JsonUserRepository

ADDRESS = Address("1 Main St", "Austin", "TX", "73301", "US", phone="555")


def _product(**overrides):
    fields = dict(
        id=None, name="Lamp", price=Money.of("40.00"), vendor_id="v1", stock=3,
        offer=Percentage.of("12.5"), weight_kg=Decimal("1.25"),
    )
    fields.update(overrides)
    return Product(**fields)


class TestProductRepository:

    def test_save_assigns_id_and_round_trips(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        repo.save(product)

        loaded = JsonProductRepository(tmp_path / "products.json").get_by_id(product.id)
        assert loaded.price == Money.of("40.00")
        assert loaded.offer == Percentage.of("12.5")
        assert loaded.weight_kg == Decimal("1.25")
        assert loaded.sale_price == Money.of("35.00")

    def test_conditional_decrement(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product(stock=2)
        repo.save(product)

        assert repo.decrement_stock_if_available(product.id, 2)
        assert not repo.decrement_stock_if_available(product.id, 1)
        assert repo.get_by_id(product.id).stock == 0
        repo.increment_stock(product.id, 4)
        assert repo.get_by_id(product.id).stock == 4

    def test_unknown_product(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        with pytest.raises(EntityNotFoundError):
            repo.decrement_stock_if_available("missing", 1)

    def test_failed_update_writes_nothing(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        repo.save(product)

        def mutate(p):
            p.rename("Renamed")
            p.set_stock(-1)

        with pytest.raises(ValidationError):
            repo.update(product.id, mutate)
        assert repo.get_by_id(product.id).name == "Lamp"

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        repo.save(product)
        assert repo.delete(product.id)
        assert not repo.delete(product.id)
        assert repo.list_all() == []


class TestOrderRepository:

    def test_round_trip_with_refund(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        line = OrderLine("p1", "Lamp", "v1", Quantity(2), Money.of("35.00"))
        order = Order.place("c1", [line], shipping_address=ADDRESS, notes="gift")
        order.pay("card")
        order.refund(Money.of("10.00"), "scratched")
        repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.status == OrderStatus.PAID
        assert loaded.total == Money.of("70.00")
        assert loaded.refunded_amount == Money.of("10.00")
        assert loaded.refunds[0].reason == "scratched"
        assert loaded.items[0].price_at_purchase == Money.of("35.00")
        assert loaded.shipping_address == ADDRESS
        assert loaded.payment_method == "card"

    def test_find_by_vendor(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        for vendor in ("v1", "v2"):
            line = OrderLine("p", "Thing", vendor, Quantity(1), Money.of("1.00"))
            repo.save(Order.place("c1", [line]))
        assert len(repo.find(vendor_id="v2")) == 1
        assert len(repo.find(customer_id="c1")) == 2
        assert len(repo.find(product_ids={"p", "other"})) == 2
        assert repo.find(product_ids={"other"}) == []

    def test_update_persists_mutation(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        line = OrderLine("p1", "Lamp", "v1", Quantity(1), Money.of("5.00"))
        order = Order.place("c1", [line])
        repo.save(order)

        updated = repo.update(order.id, lambda o: o.pay("card"))

        assert updated.status == OrderStatus.PAID
        assert JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id).status == OrderStatus.PAID

    def test_update_that_raises_saves_nothing(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        line = OrderLine("p1", "Lamp", "v1", Quantity(1), Money.of("5.00"))
        order = Order.place("c1", [line])
        repo.save(order)

        def _pay_then_fail(o):
            o.pay("card")
            raise ValidationError("nope")

        with pytest.raises(ValidationError):
            repo.update(order.id, _pay_then_fail)
        assert repo.get_by_id(order.id).status == OrderStatus.PENDING

    def test_update_unknown_order(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        with pytest.raises(EntityNotFoundError):
            repo.update("missing", lambda o: None)


class TestUserRepository:

    def test_inline_collections_round_trip(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        user = User.create("Alice", "Alice@Example.com", "hash", role=Role.VENDOR)
        user.add_address(ADDRESS)
        user.notify("hello", kind="info")
        repo.save(user)

        loaded = repo.get_by_email("alice@example.com")
        assert loaded.role == Role.VENDOR
        assert loaded.addresses[0].address == ADDRESS
        assert loaded.addresses[0].is_default
        assert loaded.notifications[0].message == "hello"
        assert repo.get_by_username("ALICE").id == user.id


class TestCategoryAndCartRepositories:

    def test_category_round_trip(self, tmp_path):
        repo = JsonCategoryRepository(tmp_path / "categories.json")
        parent = Category.create("Home")
        repo.save(parent)
        child = Category.create("Lighting", parent_id=parent.id)
        repo.save(child)
        assert repo.get_by_id(child.id).parent_id == parent.id
        assert repo.get_by_name("home").id == parent.id

    def test_cart_is_keyed_by_customer(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart(customer_id="c1")
        cart.add("p1", Quantity(2))
        repo.save(cart)
        cart.add("p1", Quantity(1))
        repo.save(cart)

        loaded = repo.get_by_customer("c1")
        assert [(l.product_id, l.quantity.value) for l in loaded.lines] == [("p1", 3)]
        assert repo.get_by_customer("c2") is None
