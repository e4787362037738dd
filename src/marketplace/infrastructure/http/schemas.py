"""Pydantic request bodies.

Responses are the application DTOs, which FastAPI serialises directly.
Money fields accept JSON numbers or strings and are handed on as strings.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from marketplace.application.dto import OrderItemSpec
from marketplace.domain.model.value_objects import Address


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str
    role: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class AddressSchema(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""
    phone: Optional[str] = None

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
            phone=self.phone,
        )


def to_address(schema: Optional[AddressSchema]) -> Optional[Address]:
    return schema.to_domain() if schema is not None else None


class SavedAddressRequest(AddressSchema):
    is_default: bool = False


class ProductCreateRequest(BaseModel):
    name: str
    price: Decimal
    description: Optional[str] = None
    image_url: Optional[str] = None
    offer: Decimal = Decimal("0")
    category_id: Optional[str] = None
    stock: int = 0
    weight_kg: Optional[Decimal] = None


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    offer: Optional[Decimal] = None
    category_id: Optional[str] = None
    stock: Optional[int] = None
    weight_kg: Optional[Decimal] = None
    is_active: Optional[bool] = None


class StockRequest(BaseModel):
    stock: int


class OfferRequest(BaseModel):
    offer: Decimal


class CategoryCreateRequest(BaseModel):
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    parent_id: Optional[str] = None


class CategoryUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    parent_id: Optional[str] = None
    is_active: Optional[bool] = None


class CartAddRequest(BaseModel):
    product_id: str
    quantity: int = 1


class CartRemoveRequest(BaseModel):
    product_id: str


class CheckoutRequest(BaseModel):
    shipping_address: Optional[AddressSchema] = None
    notes: Optional[str] = None


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int

    def to_spec(self) -> OrderItemSpec:
        return OrderItemSpec(product_id=self.product_id, quantity=self.quantity)


class OrderCreateRequest(BaseModel):
    items: list[OrderItemRequest]
    shipping_address: Optional[AddressSchema] = None
    notes: Optional[str] = None


class OrderAmendRequest(BaseModel):
    shipping_address: Optional[AddressSchema] = None
    notes: Optional[str] = None
    tracking_number: Optional[str] = None


class PayRequest(BaseModel):
    payment_method: Optional[str] = None


class StatusRequest(BaseModel):
    status: str
    tracking_number: Optional[str] = None


class PaymentIntentRequest(BaseModel):
    order_id: str
    amount: Optional[Decimal] = None
    currency: str = "USD"


class PaymentConfirmRequest(BaseModel):
    order_id: str
    payment_intent_id: str


class RefundRequest(BaseModel):
    order_id: str
    amount: Decimal
    reason: Optional[str] = None


class WebhookEvent(BaseModel):
    type: str
    data: dict = Field(default_factory=dict)


class ShippingQuoteRequest(BaseModel):
    items: list[OrderItemRequest]
    destination: Optional[AddressSchema] = None
    shipping_method: Optional[str] = None


class UserUpdateRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class RoleRequest(BaseModel):
    role: str
