"""Application service: the caller's own profile."""

from __future__ import annotations

import logging

from marketplace.application.auth import ensure_unique_identity
from marketplace.application.dto import UserDTO
from marketplace.application.lookups import require_user
from marketplace.domain.model.user import User
from marketplace.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class ProfileHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def show(self, actor: User) -> UserDTO:
        return UserDTO.from_user(require_user(self._user_repo, actor.id))  # type: ignore[arg-type]

    def update(
        self,
        actor: User,
        username: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> UserDTO:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        ensure_unique_identity(
            self._user_repo,
            email.strip().lower() if email else None,
            username.strip() if username else None,
            exclude_id=user.id,
        )
        user.update_profile(username=username, email=email, phone=phone)
        self._user_repo.save(user)
        return UserDTO.from_user(user)

    def delete(self, actor: User) -> None:
        """Soft delete: the record stays so existing orders keep their customer."""
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        user.is_deleted = True
        self._user_repo.save(user)
        logger.info("User %s deleted their account", user.id)
