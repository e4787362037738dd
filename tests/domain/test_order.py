"""Unit tests for the Order aggregate and its state machine."""

import pytest

from marketplace.domain.exceptions import InvalidTransitionError, ValidationError
from marketplace.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentStatus,
)
from marketplace.domain.model.value_objects import Address, Money, Quantity


def _make_line(name: str = "Widget", qty: int = 1, price: str = "15.00", vendor: str = "v1") -> OrderLine:
    """Helper to build a valid line."""
    return OrderLine(
        product_id=name.lower(),
        product_name=name,
        vendor_id=vendor,
        quantity=Quantity(qty),
        price_at_purchase=Money.of(price),
    )


def _paid_order(total: str = "100.00") -> Order:
    order = Order.place("c1", [_make_line(price=total)])
    order.id = "abcdef0123456789"
    order.pay()
    return order


class TestOrderPlacement:

    def test_happy_path(self):
        order = Order.place("c1", [_make_line(qty=2, price="10.00")])
        assert order.customer_id == "c1"
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.PENDING
        assert order.total == Money.of("20.00")

    def test_id_is_none_for_new_orders(self):
        assert Order.place("c1", [_make_line()]).id is None  # assigned by repository

    def test_total_is_sum_of_lines(self):
        order = Order.place("c1", [
            _make_line("Widget", qty=3, price="15.00"),
            _make_line("Gadget", qty=5, price="25.00"),
        ])
        assert order.total == Money.of("170.00")

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="No items in order"):
            Order.place("c1", [])

    def test_51_lines_rejected(self):
        with pytest.raises(ValidationError, match="Maximum 50 items"):
            Order.place("c1", [_make_line(price="1.00") for _ in range(51)])

    def test_lines_are_immutable(self):
        line = _make_line()
        with pytest.raises(AttributeError):
            line.quantity = Quantity(5)  # type: ignore[misc]


class TestPay:

    def test_pending_to_paid(self):
        order = Order.place("c1", [_make_line()])
        order.pay("card")
        assert order.status == OrderStatus.PAID
        assert order.payment_status == PaymentStatus.PAID
        assert order.payment_method == "card"

    def test_paying_twice_rejected(self):
        order = _paid_order()
        with pytest.raises(InvalidTransitionError):
            order.pay()

    def test_payment_failure_keeps_order_pending(self):
        order = Order.place("c1", [_make_line()])
        order.mark_payment_failed()
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.FAILED


class TestCancel:

    def test_cancel_pending_returns_previous_status(self):
        order = Order.place("c1", [_make_line()])
        assert order.cancel() == OrderStatus.PENDING
        assert order.status == OrderStatus.CANCELLED

    def test_cancel_paid(self):
        order = _paid_order()
        assert order.cancel() == OrderStatus.PAID

    @pytest.mark.parametrize("advance", ["ship", "deliver"])
    def test_cannot_cancel_after_shipping(self, advance):
        order = _paid_order()
        order.ship()
        if advance == "deliver":
            order.deliver()
        with pytest.raises(InvalidTransitionError, match="cannot be cancelled"):
            order.cancel()

    def test_cancelled_is_terminal(self):
        order = Order.place("c1", [_make_line()])
        order.cancel()
        with pytest.raises(InvalidTransitionError):
            order.pay()


class TestFulfilment:

    def test_ship_sets_default_tracking_number(self):
        order = _paid_order()
        order.ship()
        assert order.status == OrderStatus.SHIPPED
        assert order.tracking_number == "TRK23456789"

    def test_ship_keeps_given_tracking_number(self):
        order = _paid_order()
        order.ship("UPS-1")
        assert order.tracking_number == "UPS-1"

    def test_ship_requires_paid(self):
        order = Order.place("c1", [_make_line()])
        with pytest.raises(InvalidTransitionError, match="expected paid"):
            order.ship()

    def test_deliver_requires_shipped(self):
        order = _paid_order()
        with pytest.raises(InvalidTransitionError, match="expected shipped"):
            order.deliver()
        order.ship()
        order.deliver()
        assert order.status == OrderStatus.DELIVERED


class TestRefund:

    def test_partial_refund_keeps_order_paid(self):
        order = _paid_order("100.00")
        refund = order.refund(Money.of("40.00"), "damaged")
        assert refund.id.startswith("re_")
        assert order.status == OrderStatus.PAID
        assert order.refunded_amount == Money.of("40.00")
        assert order.refundable_amount == Money.of("60.00")

    def test_refunds_reaching_total_mark_order_refunded(self):
        order = _paid_order("100.00")
        order.refund(Money.of("40.00"))
        order.refund(Money.of("60.00"))
        assert order.status == OrderStatus.REFUNDED
        assert order.payment_status == PaymentStatus.REFUNDED

    def test_full_refund_in_one_go(self):
        order = _paid_order("15.00")
        refund = order.refund(Money.of("15.00"))
        assert refund.reason == "Customer request"
        assert order.status == OrderStatus.REFUNDED

    def test_refund_over_remaining_rejected(self):
        order = _paid_order("100.00")
        order.refund(Money.of("70.00"))
        with pytest.raises(ValidationError, match="cannot exceed order total"):
            order.refund(Money.of("40.00"))

    def test_zero_refund_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _paid_order().refund(Money.zero())

    def test_sub_cent_refund_rounds_to_zero(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _paid_order().refund(Money.of("0.001"))

    def test_amount_rounded_half_up_to_cent(self):
        order = _paid_order("100.00")
        refund = order.refund(Money.of("10.005"))
        assert refund.amount.to_plain() == "10.01"
        assert order.refundable_amount == Money.of("89.99")

    def test_thirds_leave_a_cent_refundable(self):
        order = _paid_order("100.00")
        for _ in range(3):
            order.refund(Money.of("33.333"))
        assert order.status == OrderStatus.PAID
        order.refund(Money.of("0.01"))
        assert order.status == OrderStatus.REFUNDED

    def test_unpaid_order_cannot_be_refunded(self):
        order = Order.place("c1", [_make_line()])
        with pytest.raises(InvalidTransitionError, match="not paid"):
            order.refund(Money.of("1.00"))

    def test_shipped_order_cannot_be_refunded(self):
        order = _paid_order()
        order.ship()
        with pytest.raises(InvalidTransitionError):
            order.refund(Money.of("1.00"))


class TestAmend:

    def test_notes_and_tracking(self):
        order = _paid_order()
        order.amend(notes="leave at door", tracking_number="DHL-9")
        assert order.notes == "leave at door"
        assert order.tracking_number == "DHL-9"

    def test_address_locked_on_terminal_orders(self):
        order = Order.place("c1", [_make_line()])
        order.cancel()
        with pytest.raises(InvalidTransitionError):
            order.amend(shipping_address=Address("1 Main St", "LA", "CA", "90001", "US"))

    def test_total_untouched(self):
        order = _paid_order("50.00")
        order.amend(notes="x")
        assert order.total == Money.of("50.00")


class TestComputed:

    def test_vendor_ids(self):
        order = Order.place("c1", [_make_line("A", vendor="v1"), _make_line("B", vendor="v2")])
        assert order.vendor_ids == {"v1", "v2"}
        assert order.product_ids == {"a", "b"}

    def test_parse_status(self):
        assert OrderStatus.parse("shipped") == OrderStatus.SHIPPED
        with pytest.raises(ValidationError, match="Invalid status"):
            OrderStatus.parse("lost")
