"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its line items.  Status changes
only happen through the transition methods below, which enforce the
order state machine::

    pending -> paid -> shipped -> delivered
    pending | paid -> cancelled
    paid -> refunded

``delivered``, ``cancelled`` and ``refunded`` are terminal.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from marketplace.domain.exceptions import InvalidTransitionError, ValidationError
from marketplace.domain.model.value_objects import Address, Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @staticmethod
    def parse(value: str) -> OrderStatus:
        try:
            return OrderStatus(value)
        except ValueError:
            raise ValidationError(f"Invalid status: {value!r}") from None


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


TERMINAL_STATUSES = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED}
)
CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PAID})
REVENUE_STATUSES = frozenset({OrderStatus.PAID, OrderStatus.DELIVERED})

MAX_LINE_ITEMS = 50


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderLine:
    """Captures the price snapshot of a product at order-creation time.

    Immutable: neither quantity nor ``price_at_purchase`` ever change,
    so the order total stays historically accurate when the product's
    price or offer is edited later.
    """

    product_id: str
    product_name: str
    vendor_id: str
    quantity: Quantity
    price_at_purchase: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.price_at_purchase * self.quantity.value


@dataclass(frozen=True)
class Refund:
    id: str
    amount: Money
    reason: str
    created_at: datetime = field(default_factory=_now)


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.place()`` factory for new orders; it enforces all
    business rules and fixes the total.  The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted orders without
    re-validating.
    """

    id: str | None
    customer_id: str
    items: list[OrderLine]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str = "cash_on_delivery"
    shipping_address: Address | None = None
    tracking_number: str | None = None
    notes: str | None = None
    payment_intent_id: str | None = None
    refunds: list[Refund] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        customer_id: str,
        items: list[OrderLine],
        shipping_address: Address | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new pending order, computing its total once."""
        if not items:
            raise ValidationError("No items in order")
        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            customer_id=customer_id,
            items=list(items),
            total=total,
            shipping_address=shipping_address,
            notes=notes,
        )

    # --- State transitions ----------------------------------------------------

    def pay(self, method: str | None = None) -> None:
        """Transition pending -> paid (simulated successful payment)."""
        if self.status != OrderStatus.PENDING:
            raise InvalidTransitionError("Order is not pending")
        self.status = OrderStatus.PAID
        self.payment_status = PaymentStatus.PAID
        if method:
            self.payment_method = method
        self._touch()

    def mark_payment_failed(self) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidTransitionError("Order is not pending payment")
        self.payment_status = PaymentStatus.FAILED
        self._touch()

    def cancel(self) -> OrderStatus:
        """Transition pending|paid -> cancelled.

        Returns the status the order had before cancelling so the caller
        can decide whether stock has to be restored.
        """
        if self.status not in CANCELLABLE_STATUSES:
            raise InvalidTransitionError("Order cannot be cancelled at this stage")
        previous = self.status
        self.status = OrderStatus.CANCELLED
        self._touch()
        return previous

    def ship(self, tracking_number: str | None = None) -> None:
        if self.status != OrderStatus.PAID:
            raise InvalidTransitionError(
                f"Cannot ship order in {self.status.value} status, expected paid"
            )
        self.status = OrderStatus.SHIPPED
        self.tracking_number = tracking_number or self.tracking_number or self.default_tracking_number()
        self._touch()

    def deliver(self) -> None:
        if self.status != OrderStatus.SHIPPED:
            raise InvalidTransitionError(
                f"Cannot deliver order in {self.status.value} status, expected shipped"
            )
        self.status = OrderStatus.DELIVERED
        self._touch()

    def refund(self, amount: Money, reason: str | None = None) -> Refund:
        """Record a (possibly partial) refund.

        When refunds add up to the order total, both ``status`` and
        ``payment_status`` become ``refunded``.  The amount is rounded
        half-up to the cent before any check.
        """
        if self.payment_status != PaymentStatus.PAID or self.status != OrderStatus.PAID:
            raise InvalidTransitionError("Order is not paid")
        amount = amount.rounded()
        if amount.is_zero:
            raise ValidationError("Refund amount must be greater than zero")
        if amount > self.refundable_amount:
            raise ValidationError("Refund amount cannot exceed order total")

        refund = Refund(id=f"re_{uuid.uuid4().hex[:16]}", amount=amount, reason=reason or "Customer request")
        self.refunds.append(refund)
        if self.refundable_amount.is_zero:
            self.status = OrderStatus.REFUNDED
            self.payment_status = PaymentStatus.REFUNDED
        self._touch()
        return refund

    # --- Administrative edits -------------------------------------------------

    def amend(
        self,
        shipping_address: Address | None = None,
        notes: str | None = None,
        tracking_number: str | None = None,
    ) -> None:
        """Edit fields that are outside the pricing and status invariants."""
        if self.status in TERMINAL_STATUSES and shipping_address is not None:
            raise InvalidTransitionError(
                f"Cannot change the shipping address of a {self.status.value} order"
            )
        if shipping_address is not None:
            self.shipping_address = shipping_address
        if notes is not None:
            self.notes = notes
        if tracking_number is not None:
            self.tracking_number = tracking_number
        self._touch()

    # --- Computed properties --------------------------------------------------

    @property
    def refunded_amount(self) -> Money:
        result = Money.zero()
        for refund in self.refunds:
            result = result + refund.amount
        return result

    @property
    def refundable_amount(self) -> Money:
        return self.total - self.refunded_amount

    @property
    def product_ids(self) -> set[str]:
        return {item.product_id for item in self.items}

    @property
    def vendor_ids(self) -> set[str]:
        return {item.vendor_id for item in self.items}

    def default_tracking_number(self) -> str:
        return f"TRK{(self.id or '')[-8:].upper()}"

    # --- Internal helpers -----------------------------------------------------

    def _touch(self) -> None:
        self.updated_at = _now()
