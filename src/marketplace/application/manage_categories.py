"""Application services: Create, Update and Delete Category use cases (admin)."""

from __future__ import annotations

import logging

from marketplace.application.dto import CategoryDTO
from marketplace.application.lookups import require_category
from marketplace.domain.exceptions import ConflictError
from marketplace.domain.model.category import Category
from marketplace.domain.model.user import User
from marketplace.domain.repository.category_repository import CategoryRepository
from marketplace.domain.repository.product_repository import ProductRepository
from marketplace.domain.service import access_policy
from marketplace.domain.service.category_tree_service import CategoryTreeService

logger = logging.getLogger(__name__)


class CreateCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(
        self,
        actor: User,
        name: str,
        description: str | None = None,
        image_url: str | None = None,
        parent_id: str | None = None,
    ) -> CategoryDTO:
        access_policy.ensure_can_manage_categories(actor)
        category = Category.create(name, description, image_url, parent_id)

        if self._category_repo.get_by_name(category.name) is not None:
            raise ConflictError("Category already exists")
        CategoryTreeService(self._category_repo).validate_parent(None, category.parent_id)

        self._category_repo.save(category)
        logger.info("Category %s '%s' created", category.id, category.name)
        return CategoryDTO.from_category(category)


class UpdateCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(
        self,
        actor: User,
        category_id: str,
        name: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
        parent_id: str | None = None,
        clear_parent: bool = False,
        is_active: bool | None = None,
    ) -> CategoryDTO:
        """Apply the given changes.

        ``parent_id`` re-parents the category (rejected if it would create
        a cycle); ``clear_parent`` makes it a root category.
        """
        access_policy.ensure_can_manage_categories(actor)
        category = require_category(self._category_repo, category_id)

        if name is not None and not category.has_name(name):
            existing = self._category_repo.get_by_name(name)
            if existing is not None and existing.id != category.id:
                raise ConflictError("Category name already exists")
            category.rename(name)

        if clear_parent:
            category.parent_id = None
        elif parent_id is not None:
            CategoryTreeService(self._category_repo).validate_parent(category.id, parent_id)
            category.parent_id = parent_id

        if description is not None:
            category.description = description
        if image_url is not None:
            category.image_url = image_url
        if is_active is not None:
            category.is_active = is_active

        self._category_repo.save(category)
        return CategoryDTO.from_category(category)


class DeleteCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, actor: User, category_id: str) -> CategoryDTO:
        """Delete an empty leaf category."""
        access_policy.ensure_can_manage_categories(actor)
        category = require_category(self._category_repo, category_id)

        product_count = len(self._product_repo.list_by_categories({category_id}))
        if product_count:
            raise ConflictError(
                "Cannot delete category with products. "
                "Please move or delete products first."
            )
        if self._category_repo.list_children(category_id):
            raise ConflictError(
                "Cannot delete category with subcategories. "
                "Please delete subcategories first."
            )

        self._category_repo.delete(category_id)
        logger.info("Category %s deleted", category_id)
        return CategoryDTO.from_category(category)
