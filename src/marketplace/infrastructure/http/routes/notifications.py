"""The caller's notification inbox."""

from fastapi import APIRouter, Depends

from marketplace.application.manage_notifications import NotificationsHandler
from marketplace.domain.model.user import User
from marketplace.infrastructure.bootstrap import Container
from marketplace.infrastructure.http.dependencies import current_user, get_container

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
def list_notifications(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    return NotificationsHandler(container.users).list(actor)


@router.patch("/read-all")
def mark_all_read(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    NotificationsHandler(container.users).mark_all_read(actor)
    return {"message": "All notifications marked as read"}


@router.patch("/{notification_id}/read")
def mark_read(
    notification_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    NotificationsHandler(container.users).mark_read(actor, notification_id)
    return {"message": "Notification marked as read"}


@router.delete("/clear")
def clear_notifications(actor: User = Depends(current_user), container: Container = Depends(get_container)):
    NotificationsHandler(container.users).clear(actor)
    return {"message": "All notifications cleared"}


@router.delete("/{notification_id}")
def delete_notification(
    notification_id: str,
    actor: User = Depends(current_user),
    container: Container = Depends(get_container),
):
    NotificationsHandler(container.users).delete(actor, notification_id)
    return {"message": "Notification deleted"}
