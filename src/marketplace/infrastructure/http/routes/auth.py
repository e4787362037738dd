"""Registration, login and token refresh."""

from fastapi import APIRouter, Depends

from marketplace.application.auth import LoginHandler, RefreshTokenHandler, RegisterUserHandler
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container
from marketplace.infrastructure.http.schemas import LoginRequest, RegisterRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
def register(body: RegisterRequest, container: Container = Depends(get_container)):
    RegisterUserHandler(container.users, container.hasher).handle(
        username=body.username,
        email=body.email,
        password=body.password,
        role=body.role,
        phone=body.phone,
    )
    # Registration signs the new user straight in.
    return LoginHandler(container.users, container.hasher, container.tokens).handle(
        body.email, body.password
    )


@router.post("/login")
def login(body: LoginRequest, container: Container = Depends(get_container)):
    return LoginHandler(container.users, container.hasher, container.tokens).handle(
        body.email, body.password
    )


@router.post("/logout")
def logout(actor: User = Depends(current_user)):
    # Tokens are stateless; the client drops its copy.
    return {"message": "Logged out successfully"}


@router.post("/refresh-token")
def refresh_token(
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    return RefreshTokenHandler(container.tokens).handle(actor)
