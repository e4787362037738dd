"""The caller's own profile."""

from fastapi import APIRouter, Depends

from marketplace.application.profile import ProfileHandler
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import ProfileUpdateRequest

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
def get_profile(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return ProfileHandler(container.users).show(actor)


@router.put("")
def update_profile(
    body: ProfileUpdateRequest,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return ProfileHandler(container.users).update(
        actor, username=body.username, email=body.email, phone=body.phone
    )


@router.delete("")
def delete_profile(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    ProfileHandler(container.users).delete(actor)
    return {"message": "Account deleted successfully"}
