"""Application services: registration, login and credential resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from marketplace.application.dto import UserDTO
from marketplace.application.ports import PasswordHasher, TokenService
from marketplace.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)
from marketplace.domain.model.user import Role, User
from marketplace.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
SELF_SERVICE_ROLES = frozenset({Role.CUSTOMER, Role.VENDOR})


@dataclass(frozen=True)
class SessionDTO:
    message: str
    token: str
    user: UserDTO


def resolve_actor(tokens: TokenService, user_repo: UserRepository, credential: str | None) -> User:
    """Turn a bearer credential into the stored user acting on this request.

    The token only proves who the caller was at issue time.  The user is
    re-read so a deleted account stops working at once and the stored
    role, not the one in the token, drives authorization.
    """
    identity = tokens.authenticate(credential)
    user = user_repo.get_by_id(identity.user_id)
    if user is None or user.is_deleted:
        raise AuthenticationError("User not found")
    if user.is_blocked:
        raise PermissionDeniedError("Account is blocked")
    return user


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._hasher = hasher

    def handle(
        self,
        username: str,
        email: str,
        password: str,
        role: str | None = None,
        phone: str | None = None,
        allow_admin: bool = False,
    ) -> UserDTO:
        """Create an account.

        Self-registration may only pick ``customer`` or ``vendor``; admins
        are created with ``allow_admin`` from the command line.
        """
        wanted = Role.parse(role) if role else Role.CUSTOMER
        if wanted not in SELF_SERVICE_ROLES and not allow_admin:
            raise ValidationError("Role must be customer or vendor")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = User.create(
            username=username,
            email=email,
            password_hash=self._hasher.hash(password),
            role=wanted,
            phone=phone,
        )
        ensure_unique_identity(self._user_repo, user.email, user.username)
        self._user_repo.save(user)
        logger.info("Registered %s %s", user.role.value, user.id)
        return UserDTO.from_user(user)


class LoginHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._tokens = tokens

    def handle(self, email: str, password: str) -> SessionDTO:
        if not email or not password:
            raise ValidationError("Email and password are required")
        user = self._user_repo.get_by_email(email.strip().lower())
        if user is None or user.is_deleted or not self._hasher.verify(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        if user.is_blocked:
            raise PermissionDeniedError("Account is blocked")
        return SessionDTO(
            message=f"Welcome {user.username}",
            token=self._tokens.issue(user),
            user=UserDTO.from_user(user),
        )


class RefreshTokenHandler:

    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def handle(self, actor: User) -> SessionDTO:
        return SessionDTO(
            message="Token refreshed",
            token=self._tokens.issue(actor),
            user=UserDTO.from_user(actor),
        )


def ensure_unique_identity(
    user_repo: UserRepository,
    email: str | None,
    username: str | None,
    exclude_id: str | None = None,
) -> None:
    """Raise ConflictError if another account already uses the email or username."""
    if email:
        other = user_repo.get_by_email(email)
        if other is not None and other.id != exclude_id:
            raise ConflictError("Email already in use")
    if username:
        other = user_repo.get_by_username(username)
        if other is not None and other.id != exclude_id:
            raise ConflictError("Username already taken")
