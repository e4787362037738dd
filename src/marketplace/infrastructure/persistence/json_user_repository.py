"""JSON-file-backed implementation of UserRepository.

Notifications and saved addresses are stored inline on the user record.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from marketplace.domain.model.user import Notification, Role, SavedAddress, User
from marketplace.domain.model.value_objects import Address
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.infrastructure.persistence.json_store import JsonCollection


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonCollection(file_path)

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: str) -> User | None:
        raw = self._store.find_raw(lambda r: r["id"] == user_id)
        return self._to_domain(raw) if raw else None

    def get_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        raw = self._store.find_raw(lambda r: r["email"].lower() == wanted)
        return self._to_domain(raw) if raw else None

    def get_by_username(self, username: str) -> User | None:
        wanted = username.strip().casefold()
        raw = self._store.find_raw(lambda r: r["username"].casefold() == wanted)
        return self._to_domain(raw) if raw else None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._store.all_raw()]

    def save(self, user: User) -> None:
        if user.id is None:
            user.id = self._store.new_id()
        self._store.upsert_raw(self._to_raw(user))

    def delete(self, user_id: str) -> bool:
        return self._store.delete_raw(user_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "password_hash": user.password_hash,
            "role": user.role.value,
            "phone": user.phone,
            "is_blocked": user.is_blocked,
            "is_deleted": user.is_deleted,
            "created_at": user.created_at.isoformat(),
            "addresses": [
                {"id": a.id, "is_default": a.is_default, **a.address.to_dict()}
                for a in user.addresses
            ],
            "notifications": [
                {
                    "id": n.id,
                    "message": n.message,
                    "kind": n.kind,
                    "order_id": n.order_id,
                    "is_read": n.is_read,
                    "created_at": n.created_at.isoformat(),
                }
                for n in user.notifications
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            username=raw["username"],
            email=raw["email"],
            password_hash=raw["password_hash"],
            role=Role(raw.get("role", "customer")),
            phone=raw.get("phone"),
            is_blocked=raw.get("is_blocked", False),
            is_deleted=raw.get("is_deleted", False),
            created_at=datetime.fromisoformat(raw["created_at"]),
            addresses=[
                SavedAddress(
                    id=a["id"],
                    address=Address.from_dict(a),
                    is_default=a.get("is_default", False),
                )
                for a in raw.get("addresses", [])
            ],
            notifications=[
                Notification(
                    id=n["id"],
                    message=n["message"],
                    kind=n.get("kind", "info"),
                    order_id=n.get("order_id"),
                    is_read=n.get("is_read", False),
                    created_at=datetime.fromisoformat(n["created_at"]),
                )
                for n in raw.get("notifications", [])
            ],
        )
