"""Application service: the caller's own notifications."""

from __future__ import annotations

from marketplace.application.dto import NotificationDTO
from marketplace.application.lookups import require_user
from marketplace.domain.model.user import User
from marketplace.domain.repository.user_repository import UserRepository


class NotificationsHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def list(self, actor: User) -> list[NotificationDTO]:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        return [NotificationDTO.from_notification(n) for n in reversed(user.notifications)]

    def mark_read(self, actor: User, notification_id: str) -> None:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        user.mark_notification_read(notification_id)
        self._user_repo.save(user)

    def mark_all_read(self, actor: User) -> None:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        user.mark_all_notifications_read()
        self._user_repo.save(user)

    def delete(self, actor: User, notification_id: str) -> None:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        user.delete_notification(notification_id)
        self._user_repo.save(user)

    def clear(self, actor: User) -> None:
        user = require_user(self._user_repo, actor.id)  # type: ignore[arg-type]
        user.clear_notifications()
        self._user_repo.save(user)
