"""Catalog endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends

from marketplace.application.add_product import AddProductHandler
from marketplace.application.delete_product import DeleteProductHandler
from marketplace.application.list_products import ListProductsHandler
from marketplace.application.update_product import (
    ProductChanges,
    SetOfferHandler,
    SetStockHandler,
    UpdateProductHandler,
)
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import (
    OfferRequest,
    ProductCreateRequest,
    ProductUpdateRequest,
    StockRequest,
)

router = APIRouter(prefix="/products", tags=["products"])


def _text(value) -> Optional[str]:
    return str(value) if value is not None else None


@router.post("", status_code=201)
def add_product(
    body: ProductCreateRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AddProductHandler(container.products, container.categories).handle(
        actor,
        name=body.name,
        price=str(body.price),
        description=body.description,
        image_url=body.image_url,
        offer=str(body.offer),
        category_id=body.category_id,
        stock=body.stock,
        weight_kg=_text(body.weight_kg),
    )


@router.get("")
def list_products(
    search: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    sort: Optional[str] = None,
    container: Container = Depends(get_container),
):
    return ListProductsHandler(container.products).handle(
        search=search,
        category_id=category,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
    )


@router.get("/mine")
def my_products(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return ListProductsHandler(container.products).mine(actor)


@router.get("/out-of-stock")
def low_stock_products(
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return ListProductsHandler(container.products).low_stock(actor)


@router.get("/vendor/{vendor_id}")
def vendor_products(vendor_id: str, container: Container = Depends(get_container)):
    return ListProductsHandler(container.products).by_vendor(vendor_id)


@router.get("/{product_id}")
def get_product(product_id: str, container: Container = Depends(get_container)):
    return ListProductsHandler(container.products).show(product_id)


@router.put("/{product_id}")
def update_product(
    product_id: str,
    body: ProductUpdateRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    changes = ProductChanges(
        name=body.name,
        price=_text(body.price),
        description=body.description,
        image_url=body.image_url,
        offer=_text(body.offer),
        category_id=body.category_id,
        stock=body.stock,
        weight_kg=_text(body.weight_kg),
        is_active=body.is_active,
    )
    return UpdateProductHandler(container.products, container.categories).handle(
        actor, product_id, changes
    )


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    DeleteProductHandler(container.products).handle(actor, product_id)
    return {"message": "Product deleted successfully"}


@router.patch("/{product_id}/stock")
def set_stock(
    product_id: str,
    body: StockRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return SetStockHandler(container.products).handle(actor, product_id, body.stock)


@router.patch("/{product_id}/offer")
def set_offer(
    product_id: str,
    body: OfferRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return SetOfferHandler(container.products).handle(actor, product_id, str(body.offer))
