"""
Notification inbox HTTP routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from familyhub.core.database import get_db
from familyhub.core.security import get_current_user
from familyhub.modules.families.models import User
from .service import NotificationService
from .schemas import NotificationResponse

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    unread: bool = False,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get the caller's notifications, newest first."""
    return NotificationService(db).list_for_user(user, unread_only=unread, limit=limit)


@router.post("/read-all")
def mark_all_read(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Mark all of the caller's notifications as read."""
    return {"updated": NotificationService(db).mark_all_read(user)}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Mark a notification as read."""
    return NotificationService(db).mark_read(user, notification_id)
