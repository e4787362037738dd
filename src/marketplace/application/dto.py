"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI layers and the application layer
without exposing domain internals.  Money is rendered as a two-decimal
string so no precision is lost on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from marketplace.domain.model.cart import Cart
from marketplace.domain.model.category import Category
from marketplace.domain.model.order import Order
from marketplace.domain.model.product import Product
from marketplace.domain.model.user import Notification, SavedAddress, User
from marketplace.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: str
    product_name: str
    vendor_id: str
    quantity: int
    price_at_purchase: str
    line_total: str


@dataclass(frozen=True)
class RefundDTO:
    id: str
    amount: str
    reason: str
    status: str
    order_id: str
    created_at: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order."""

    id: str
    customer_id: str
    status: str
    payment_status: str
    payment_method: str
    items: list[OrderLineDTO]
    total: str
    refunded_amount: str
    shipping_address: dict | None
    tracking_number: str | None
    notes: str | None
    created_at: str
    updated_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_id=order.customer_id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            payment_method=order.payment_method,
            items=[
                OrderLineDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    vendor_id=item.vendor_id,
                    quantity=item.quantity.value,
                    price_at_purchase=item.price_at_purchase.to_plain(),
                    line_total=item.line_total.to_plain(),
                )
                for item in order.items
            ],
            total=order.total.to_plain(),
            refunded_amount=order.refunded_amount.to_plain(),
            shipping_address=order.shipping_address.to_dict() if order.shipping_address else None,
            tracking_number=order.tracking_number,
            notes=order.notes,
            created_at=order.created_at.isoformat(),
            updated_at=order.updated_at.isoformat(),
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str | None
    price: str
    offer: str
    sale_price: str
    stock: int
    vendor_id: str
    category_id: str | None
    weight_kg: str
    image_url: str | None
    is_active: bool
    created_at: str

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            description=product.description,
            price=product.price.to_plain(),
            offer=str(product.offer.value),
            sale_price=product.sale_price.to_plain(),
            stock=product.stock,
            vendor_id=product.vendor_id,
            category_id=product.category_id,
            weight_kg=str(product.weight_kg),
            image_url=product.image_url,
            is_active=product.is_active,
            created_at=product.created_at.isoformat(),
        )


@dataclass(frozen=True)
class CategoryDTO:
    id: str
    name: str
    description: str | None
    image_url: str | None
    parent_id: str | None
    is_active: bool
    created_at: str
    product_count: int | None = None

    @staticmethod
    def from_category(category: Category, product_count: int | None = None) -> CategoryDTO:
        return CategoryDTO(
            id=category.id,  # type: ignore[arg-type]
            name=category.name,
            description=category.description,
            image_url=category.image_url,
            parent_id=category.parent_id,
            is_active=category.is_active,
            created_at=category.created_at.isoformat(),
            product_count=product_count,
        )


@dataclass(frozen=True)
class CategoryNodeDTO:
    category: CategoryDTO
    children: list[CategoryNodeDTO] = field(default_factory=list)


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    quantity: int
    product_name: str | None
    unit_price: str | None


@dataclass(frozen=True)
class CartDTO:
    customer_id: str
    items: list[CartLineDTO]
    subtotal: str

    @staticmethod
    def from_cart(cart: Cart, products: dict[str, Product]) -> CartDTO:
        subtotal = Money.zero()
        lines = []
        for line in cart.lines:
            product = products.get(line.product_id)
            if product is not None:
                subtotal = subtotal + product.sale_price * line.quantity.value
            lines.append(
                CartLineDTO(
                    product_id=line.product_id,
                    quantity=line.quantity.value,
                    product_name=product.name if product else None,
                    unit_price=product.sale_price.to_plain() if product else None,
                )
            )
        return CartDTO(customer_id=cart.customer_id, items=lines, subtotal=subtotal.to_plain())


@dataclass(frozen=True)
class AddressDTO:
    id: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    phone: str | None
    is_default: bool

    @staticmethod
    def from_saved(saved: SavedAddress) -> AddressDTO:
        return AddressDTO(id=saved.id, is_default=saved.is_default, **saved.address.to_dict())


@dataclass(frozen=True)
class NotificationDTO:
    id: str
    message: str
    kind: str
    order_id: str | None
    is_read: bool
    created_at: str

    @staticmethod
    def from_notification(notification: Notification) -> NotificationDTO:
        return NotificationDTO(
            id=notification.id,
            message=notification.message,
            kind=notification.kind,
            order_id=notification.order_id,
            is_read=notification.is_read,
            created_at=notification.created_at.isoformat(),
        )


@dataclass(frozen=True)
class UserDTO:
    """Output: a user without credentials."""

    id: str
    username: str
    email: str
    role: str
    phone: str | None
    is_blocked: bool
    is_deleted: bool
    created_at: str

    @staticmethod
    def from_user(user: User) -> UserDTO:
        return UserDTO(
            id=user.id,  # type: ignore[arg-type]
            username=user.username,
            email=user.email,
            role=user.role.value,
            phone=user.phone,
            is_blocked=user.is_blocked,
            is_deleted=user.is_deleted,
            created_at=user.created_at.isoformat(),
        )
