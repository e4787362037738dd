"""Admin-only management and reporting endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends

from marketplace.application.admin_users import AdminUsersHandler
from marketplace.application.list_orders import ListOrdersHandler
from marketplace.application.list_products import ListProductsHandler
from marketplace.application.reporting import AnalyticsHandler
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import RoleRequest, UserUpdateRequest

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users")
def list_users(
    role: Optional[str] = None,
    blocked: Optional[bool] = None,
    search: Optional[str] = None,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AdminUsersHandler(container.users).list(actor, role=role, blocked=blocked, search=search)


@router.get("/users/{user_id}")
def get_user(
    user_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AdminUsersHandler(container.users).show(actor, user_id)


@router.put("/users/{user_id}")
def update_user(
    user_id: str,
    body: UserUpdateRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AdminUsersHandler(container.users).update(
        actor, user_id, username=body.username, email=body.email, phone=body.phone
    )


@router.patch("/users/{user_id}/role")
def change_role(
    user_id: str,
    body: RoleRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AdminUsersHandler(container.users).change_role(actor, user_id, body.role)


@router.patch("/users/{user_id}/block")
def block_user(
    user_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AdminUsersHandler(container.users).block(actor, user_id)


@router.patch("/users/{user_id}/unblock")
def unblock_user(
    user_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return AdminUsersHandler(container.users).unblock(actor, user_id)


@router.delete("/users/{user_id}")
def delete_user(
    user_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    AdminUsersHandler(container.users).delete(actor, user_id)
    return {"message": "User deleted successfully"}


@router.get("/products")
def list_products(
    vendor_id: Optional[str] = None,
    category_id: Optional[str] = None,
    is_active: Optional[bool] = None,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return ListProductsHandler(container.products).for_admin(
        actor, vendor_id=vendor_id, category_id=category_id, is_active=is_active
    )


@router.get("/orders")
def list_orders(
    status: Optional[str] = None,
    customer_id: Optional[str] = None,
    vendor_id: Optional[str] = None,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return ListOrdersHandler(container.orders).for_admin(
        actor, status=status, customer_id=customer_id, vendor_id=vendor_id
    )


@router.get("/analytics")
def analytics(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return AnalyticsHandler(container.users, container.products, container.orders).handle(actor)
