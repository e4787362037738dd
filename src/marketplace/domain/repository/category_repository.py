"""Abstract repository for Category aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.category import Category


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: str) -> Category | None:
        """Return a category by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category."""

    @abstractmethod
    def save(self, category: Category) -> None:
        """Persist a new or updated category, assigning an ID if needed."""

    @abstractmethod
    def delete(self, category_id: str) -> bool:
        """Remove a category. Returns False if it did not exist."""

    def get_by_name(self, name: str) -> Category | None:
        """Case-insensitive lookup by name."""
        for category in self.list_all():
            if category.has_name(name):
                return category
        return None

    def list_children(self, parent_id: str | None) -> list[Category]:
        return [c for c in self.list_all() if c.parent_id == parent_id]
