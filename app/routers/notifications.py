from typing import List

from fastapi import APIRouter, Depends

from app.db import get_store
from app.deps import auth_bearer
from app.errors import NotFoundError
from app.models.notification import NotificationRead
from app.services.store import DocumentStore

router = APIRouter()


def _current_user_id(store: DocumentStore, user: dict):
    matches = store.find("users", {"email": user["email"]})
    return matches[0]["id"] if matches else None


@router.get("/notifications", response_model=List[NotificationRead])
def list_notifications(
    unread_only: bool = False,
    store: DocumentStore = Depends(get_store),
    user=Depends(auth_bearer),
):
    """Notifications of the calling user, newest first"""
    user_id = _current_user_id(store, user)
    if user_id is None:
        return []
    where = {"user": user_id}
    if unread_only:
        where["read"] = False
    return store.find("notifications", where, order_by="created_at", descending=True)


@router.post("/notifications/{notification_id}:read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: str,
    store: DocumentStore = Depends(get_store),
    user=Depends(auth_bearer),
):
    notification = store.find_by_id("notifications", notification_id)
    # Cada usuario solo ve sus propias notificaciones
    if notification is None or notification["user"] != _current_user_id(store, user):
        raise NotFoundError("Notification not found")
    return store.update("notifications", notification_id, {"read": True})
