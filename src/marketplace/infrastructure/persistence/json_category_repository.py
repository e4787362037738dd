"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from marketplace.domain.model.category import Category
from marketplace.domain.repository.category_repository import CategoryRepository
from marketplace.infrastructure.persistence.json_store import JsonCollection


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonCollection(file_path)

    def get_by_id(self, category_id: str) -> Category | None:
        raw = self._store.find_raw(lambda r: r["id"] == category_id)
        return self._to_domain(raw) if raw else None

    def list_all(self) -> list[Category]:
        return [self._to_domain(raw) for raw in self._store.all_raw()]

    def save(self, category: Category) -> None:
        if category.id is None:
            category.id = self._store.new_id()
        self._store.upsert_raw(self._to_raw(category))

    def delete(self, category_id: str) -> bool:
        return self._store.delete_raw(category_id)

    @staticmethod
    def _to_raw(category: Category) -> dict:
        return {
            "id": category.id,
            "name": category.name,
            "description": category.description,
            "image_url": category.image_url,
            "parent_id": category.parent_id,
            "is_active": category.is_active,
            "created_at": category.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description"),
            image_url=raw.get("image_url"),
            parent_id=raw.get("parent_id"),
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
