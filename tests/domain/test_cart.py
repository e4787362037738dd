"""Unit tests for the Cart aggregate."""

from marketplace.domain.model.cart import Cart
from marketplace.domain.model.value_objects import Quantity


class TestCart:

    def test_add_new_line(self):
        cart = Cart(customer_id="c1")
        cart.add("p1", Quantity(2))
        assert [(l.product_id, l.quantity.value) for l in cart.lines] == [("p1", 2)]

    def test_adding_same_product_merges_quantity(self):
        cart = Cart(customer_id="c1")
        cart.add("p1", Quantity(2))
        cart.add("p1", Quantity(3))
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity.value == 5

    def test_remove_and_clear(self):
        cart = Cart(customer_id="c1")
        cart.add("p1", Quantity(1))
        cart.add("p2", Quantity(1))
        cart.remove("p1")
        assert [l.product_id for l in cart.lines] == ["p2"]
        cart.clear()
        assert cart.is_empty

    def test_removing_absent_product_is_harmless(self):
        cart = Cart(customer_id="c1")
        cart.remove("nope")
        assert cart.is_empty
