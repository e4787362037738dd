"""User aggregate: identity, role, address book and notifications.

Notifications and saved addresses are owned collections of the user
record and are only ever reached through it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from marketplace.domain.exceptions import EntityNotFoundError, ValidationError
from marketplace.domain.model.value_objects import Address


class Role(Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
    ADMIN = "admin"

    @staticmethod
    def parse(value: str) -> Role:
        try:
            return Role(value)
        except ValueError:
            raise ValidationError(f"Invalid role: {value!r}") from None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Notification:
    id: str
    message: str
    kind: str = "info"
    order_id: str | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=_now)


@dataclass
class SavedAddress:
    id: str
    address: Address
    is_default: bool = False


@dataclass
class User:
    """Aggregate root for a marketplace account.

    ``password_hash`` is opaque to the domain; hashing lives in the
    infrastructure layer.
    """

    id: str | None
    username: str
    email: str
    password_hash: str
    role: Role = Role.CUSTOMER
    phone: str | None = None
    is_blocked: bool = False
    is_deleted: bool = False
    addresses: list[SavedAddress] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(
        username: str,
        email: str,
        password_hash: str,
        role: Role = Role.CUSTOMER,
        phone: str | None = None,
    ) -> User:
        if not username or not username.strip():
            raise ValidationError("Username is required")
        if not email or "@" not in email:
            raise ValidationError("A valid email is required")
        return User(
            id=None,
            username=username.strip(),
            email=email.strip().lower(),
            password_hash=password_hash,
            role=role,
            phone=phone,
        )

    @property
    def is_active(self) -> bool:
        return not self.is_deleted

    # --- Profile --------------------------------------------------------------

    def update_profile(
        self,
        username: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> None:
        """Update self-service fields; role and password are never touched here."""
        if username is not None:
            if not username.strip():
                raise ValidationError("Username cannot be empty")
            self.username = username.strip()
        if email is not None:
            if "@" not in email:
                raise ValidationError("A valid email is required")
            self.email = email.strip().lower()
        if phone is not None:
            self.phone = phone

    # --- Notifications --------------------------------------------------------

    def notify(self, message: str, kind: str = "info", order_id: str | None = None) -> Notification:
        notification = Notification(id=_new_id(), message=message, kind=kind, order_id=order_id)
        self.notifications.append(notification)
        return notification

    def mark_notification_read(self, notification_id: str) -> None:
        self._find_notification(notification_id).is_read = True

    def mark_all_notifications_read(self) -> None:
        for notification in self.notifications:
            notification.is_read = True

    def delete_notification(self, notification_id: str) -> None:
        notification = self._find_notification(notification_id)
        self.notifications.remove(notification)

    def clear_notifications(self) -> None:
        self.notifications = []

    def _find_notification(self, notification_id: str) -> Notification:
        for notification in self.notifications:
            if notification.id == notification_id:
                return notification
        raise EntityNotFoundError("Notification not found")

    # --- Address book ---------------------------------------------------------

    def add_address(self, address: Address, is_default: bool = False) -> SavedAddress:
        """Save an address; the first one saved always becomes the default."""
        saved = SavedAddress(id=_new_id(), address=address)
        if not self.addresses or is_default:
            for existing in self.addresses:
                existing.is_default = False
            saved.is_default = True
        self.addresses.append(saved)
        return saved

    def update_address(
        self, address_id: str, address: Address, is_default: bool = False
    ) -> SavedAddress:
        saved = self._find_address(address_id)
        saved.address = address
        if is_default:
            self.set_default_address(address_id)
        return saved

    def remove_address(self, address_id: str) -> None:
        saved = self._find_address(address_id)
        self.addresses.remove(saved)
        if saved.is_default and self.addresses:
            self.addresses[0].is_default = True

    def set_default_address(self, address_id: str) -> SavedAddress:
        target = self._find_address(address_id)
        for saved in self.addresses:
            saved.is_default = saved is target
        return target

    def _find_address(self, address_id: str) -> SavedAddress:
        for saved in self.addresses:
            if saved.id == address_id:
                return saved
        raise EntityNotFoundError("Address not found")
