"""Domain service: Category Tree.

Walks the parent links between categories, both to reject a parent that
would close a cycle and to expand a category into its subtree.
"""

from __future__ import annotations

from marketplace.domain.exceptions import EntityNotFoundError, ValidationError
from marketplace.domain.repository.category_repository import CategoryRepository


class CategoryTreeService:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def validate_parent(self, category_id: str | None, parent_id: str | None) -> None:
        """Reject a parent that does not exist or would create a cycle.

        Walks up from *parent_id*; reaching *category_id* means the
        category would become its own ancestor.
        """
        if parent_id is None:
            return
        if category_id is not None and parent_id == category_id:
            raise ValidationError("A category cannot be its own parent")

        by_id = {c.id: c for c in self._category_repo.list_all()}
        if parent_id not in by_id:
            raise EntityNotFoundError("Parent category not found")

        seen: set[str] = set()
        current: str | None = parent_id
        while current is not None:
            if current == category_id:
                raise ValidationError("Parent assignment would create a cycle")
            if current in seen:
                # Pre-existing loop in stored data; stop walking.
                break
            seen.add(current)
            node = by_id.get(current)
            current = node.parent_id if node else None

    def descendant_ids(self, category_id: str) -> set[str]:
        """Return *category_id* plus every category below it."""
        children: dict[str | None, list[str]] = {}
        for category in self._category_repo.list_all():
            children.setdefault(category.parent_id, []).append(category.id)

        result: set[str] = set()
        stack = [category_id]
        while stack:
            current = stack.pop()
            if current in result:
                continue
            result.add(current)
            stack.extend(children.get(current, []))
        return result

    def build_tree(self, only_active: bool = True) -> list[dict]:
        """Nested ``{"category": Category, "children": [...]}`` nodes sorted by name."""
        categories = [
            c for c in self._category_repo.list_all() if c.is_active or not only_active
        ]
        categories.sort(key=lambda c: c.name.casefold())

        def _children_of(parent_id: str | None, path: frozenset[str]) -> list[dict]:
            return [
                {
                    "category": category,
                    "children": _children_of(category.id, path | {category.id}),
                }
                for category in categories
                if category.parent_id == parent_id and category.id not in path
            ]

        return _children_of(None, frozenset())
