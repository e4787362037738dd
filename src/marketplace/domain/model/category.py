"""Category aggregate: a node in the catalog tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from marketplace.domain.exceptions import ValidationError


@dataclass
class Category:
    """A catalog category.

    ``parent_id`` links categories into a tree.  Cycle prevention needs
    the other categories, so it is enforced by ``CategoryTreeService``,
    not here.
    """

    id: str | None
    name: str
    description: str | None = None
    image_url: str | None = None
    parent_id: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        description: str | None = None,
        image_url: str | None = None,
        parent_id: str | None = None,
    ) -> Category:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        return Category(
            id=None,
            name=name.strip(),
            description=description,
            image_url=image_url,
            parent_id=parent_id or None,
        )

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        self.name = name.strip()

    def has_name(self, name: str) -> bool:
        return self.name.casefold() == name.strip().casefold()
