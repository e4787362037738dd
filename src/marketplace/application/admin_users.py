"""Application service: admin user management."""

from __future__ import annotations

import logging

from marketplace.application.auth import ensure_unique_identity
from marketplace.application.dto import UserDTO
from marketplace.application.lookups import require_user
from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.user import Role, User
from marketplace.domain.repository.user_repository import UserRepository
from marketplace.domain.service import access_policy

logger = logging.getLogger(__name__)


class AdminUsersHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def list(
        self,
        actor: User,
        role: str | None = None,
        blocked: bool | None = None,
        search: str | None = None,
    ) -> list[UserDTO]:
        access_policy.ensure_admin(actor)
        users = self._user_repo.list_all()
        if role:
            wanted = Role.parse(role)
            users = [u for u in users if u.role == wanted]
        if blocked is not None:
            users = [u for u in users if u.is_blocked == blocked]
        if search:
            needle = search.casefold()
            users = [
                u for u in users
                if needle in u.username.casefold() or needle in u.email.casefold()
            ]
        users.sort(key=lambda u: u.created_at, reverse=True)
        return [UserDTO.from_user(u) for u in users]

    def show(self, actor: User, user_id: str) -> UserDTO:
        access_policy.ensure_admin(actor)
        return UserDTO.from_user(require_user(self._user_repo, user_id))

    def update(
        self,
        actor: User,
        user_id: str,
        username: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> UserDTO:
        access_policy.ensure_admin(actor)
        user = require_user(self._user_repo, user_id)
        ensure_unique_identity(
            self._user_repo,
            email.strip().lower() if email else None,
            username.strip() if username else None,
            exclude_id=user.id,
        )
        user.update_profile(username=username, email=email, phone=phone)
        self._user_repo.save(user)
        return UserDTO.from_user(user)

    def change_role(self, actor: User, user_id: str, role: str) -> UserDTO:
        access_policy.ensure_admin(actor)
        if not role:
            raise ValidationError("Role is required")
        user = require_user(self._user_repo, user_id)
        user.role = Role.parse(role)
        self._user_repo.save(user)
        logger.info("Admin %s set role of %s to %s", actor.id, user.id, user.role.value)
        return UserDTO.from_user(user)

    def block(self, actor: User, user_id: str) -> UserDTO:
        return self._set_blocked(actor, user_id, True)

    def unblock(self, actor: User, user_id: str) -> UserDTO:
        return self._set_blocked(actor, user_id, False)

    def delete(self, actor: User, user_id: str) -> None:
        access_policy.ensure_admin(actor)
        if user_id == actor.id:
            raise ValidationError("Admins cannot delete their own account here")
        user = require_user(self._user_repo, user_id)
        user.is_deleted = True
        self._user_repo.save(user)
        logger.info("Admin %s deleted user %s", actor.id, user.id)

    def _set_blocked(self, actor: User, user_id: str, blocked: bool) -> UserDTO:
        access_policy.ensure_admin(actor)
        if user_id == actor.id:
            raise ValidationError("Admins cannot block themselves")
        user = require_user(self._user_repo, user_id)
        user.is_blocked = blocked
        self._user_repo.save(user)
        logger.info("Admin %s %s user %s", actor.id, "blocked" if blocked else "unblocked", user.id)
        return UserDTO.from_user(user)
