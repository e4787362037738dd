"""Application services: category queries."""

from __future__ import annotations

import math
from dataclasses import dataclass

from marketplace.application.dto import CategoryDTO, CategoryNodeDTO, ProductDTO
from marketplace.application.list_products import sort_products
from marketplace.application.lookups import require_category
from marketplace.domain.exceptions import ValidationError
from marketplace.domain.repository.category_repository import CategoryRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.service.category_tree_service import CategoryTreeService

ROOT = "root"


@dataclass(frozen=True)
class CategoryProductsDTO:
    category: CategoryDTO
    products: list[ProductDTO]
    total: int
    total_pages: int
    current_page: int
    limit: int


class ListCategoriesHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, parent: str | None = None, include_products: bool = False) -> list[CategoryDTO]:
        """List categories sorted by name.

        *parent* filters by parent id; ``"root"`` (or an empty string)
        selects top-level categories only.
        """
        categories = self._category_repo.list_all()
        if parent in (ROOT, "", "null"):
            categories = [c for c in categories if c.parent_id is None]
        elif parent:
            categories = [c for c in categories if c.parent_id == parent]
        categories.sort(key=lambda c: c.name.casefold())

        return [
            CategoryDTO.from_category(c, self._count_products(c.id) if include_products else None)
            for c in categories
        ]

    def show(self, category_id: str) -> CategoryDTO:
        category = require_category(self._category_repo, category_id)
        return CategoryDTO.from_category(category, self._count_products(category_id))

    def tree(self) -> list[CategoryNodeDTO]:
        def _to_node(node: dict) -> CategoryNodeDTO:
            return CategoryNodeDTO(
                category=CategoryDTO.from_category(node["category"]),
                children=[_to_node(child) for child in node["children"]],
            )

        return [_to_node(node) for node in CategoryTreeService(self._category_repo).build_tree()]

    def products(
        self,
        category_id: str,
        page: int = 1,
        limit: int = 10,
        sort: str = "newest",
    ) -> CategoryProductsDTO:
        """Products in a category or any of its subcategories, paginated."""
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")
        category = require_category(self._category_repo, category_id)
        ids = CategoryTreeService(self._category_repo).descendant_ids(category_id)

        products = sort_products(self._product_repo.list_by_categories(ids), sort)
        start = (page - 1) * limit
        return CategoryProductsDTO(
            category=CategoryDTO.from_category(category),
            products=[ProductDTO.from_product(p) for p in products[start:start + limit]],
            total=len(products),
            total_pages=math.ceil(len(products) / limit),
            current_page=page,
            limit=limit,
        )

    def _count_products(self, category_id: str | None) -> int:
        return len(self._product_repo.list_by_categories({category_id}))  # type: ignore[arg-type]
