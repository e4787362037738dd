"""FastAPI dependencies shared by the routers."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.application.auth import resolve_actor
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


def current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    container: Container = Depends(get_container),
) -> User:
    """The stored user behind the request's bearer token."""
    token = credentials.credentials if credentials else None
    return resolve_actor(container.tokens, container.users, token)
