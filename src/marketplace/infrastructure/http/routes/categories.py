"""Category endpoints; writes are admin only."""

from typing import Optional

from fastapi import APIRouter, Depends

from marketplace.application.list_categories import ListCategoriesHandler
from marketplace.application.manage_categories import (
    CreateCategoryHandler,
    DeleteCategoryHandler,
    UpdateCategoryHandler,
)
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import CategoryCreateRequest, CategoryUpdateRequest

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", status_code=201)
def create_category(
    body: CategoryCreateRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return CreateCategoryHandler(container.categories).handle(
        actor,
        name=body.name,
        description=body.description,
        image_url=body.image_url,
        parent_id=body.parent_id,
    )


@router.get("")
def list_categories(
    parent: Optional[str] = None,
    include_products: bool = False,
    container: Container = Depends(get_container),
):
    return ListCategoriesHandler(container.categories, container.products).handle(
        parent=parent, include_products=include_products
    )


@router.get("/hierarchy/tree")
def category_tree(container: Container = Depends(get_container)):
    return ListCategoriesHandler(container.categories, container.products).tree()


@router.get("/{category_id}")
def get_category(category_id: str, container: Container = Depends(get_container)):
    return ListCategoriesHandler(container.categories, container.products).show(category_id)


@router.put("/{category_id}")
def update_category(
    category_id: str,
    body: CategoryUpdateRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    # An explicit null parent_id moves the category to the top level.
    clear_parent = "parent_id" in body.model_fields_set and body.parent_id is None
    return UpdateCategoryHandler(container.categories).handle(
        actor,
        category_id,
        name=body.name,
        description=body.description,
        image_url=body.image_url,
        parent_id=body.parent_id,
        clear_parent=clear_parent,
        is_active=body.is_active,
    )


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    DeleteCategoryHandler(container.categories, container.products).handle(actor, category_id)
    return {"message": "Category deleted successfully"}


@router.get("/{category_id}/products")
def category_products(
    category_id: str,
    page: int = 1,
    limit: int = 10,
    sort: str = "newest",
    container: Container = Depends(get_container),
):
    return ListCategoriesHandler(container.categories, container.products).products(
        category_id, page=page, limit=limit, sort=sort
    )
