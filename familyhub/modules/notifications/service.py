"""
Notification service.
notify() is the sink used by the chore and reward workflows. It must never
abort the caller's transaction, so each write runs in its own SAVEPOINT and
failures are only logged.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from familyhub.exceptions import NotificationNotFoundException
from familyhub.modules.families.models import User
from familyhub.modules.notifications.models import Notification
from familyhub.modules.notifications.repository import NotificationRepository

logger = logging.getLogger("familyhub.notifications")


class NotificationService:
    """Service for in-app notifications"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def notify(
        self,
        family_id: Optional[int],
        user_id: Optional[int],
        type: str,
        title: str,
        message: str,
    ) -> Optional[Notification]:
        """
        Record a notification for a user.

        Returns the notification, or None when it could not be written.
        """
        if family_id is None or user_id is None:
            logger.debug(f"Skipping '{type}' notification without family/user")
            return None

        try:
            with self.db.begin_nested():
                notification = Notification(
                    family_id=family_id,
                    user_id=user_id,
                    type=type,
                    title=title,
                    message=message,
                    read=False,
                )
                self.repo.create(self.db, notification)
            return notification
        except Exception as e:
            logger.error(f"Failed to record '{type}' notification for user {user_id}: {e}")
            return None

    def list_for_user(self, user: User, unread_only: bool = False, limit: int = 50) -> List[Notification]:
        return self.repo.get_for_user(self.db, user.id, unread_only, limit)

    def mark_read(self, user: User, notification_id: int) -> Notification:
        """Mark one of the caller's notifications as read"""
        notification = self.repo.get_by_id(self.db, notification_id)
        # Other users' notifications look missing
        if not notification or notification.user_id != user.id:
            raise NotificationNotFoundException(notification_id)

        notification.read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_read(self, user: User) -> int:
        count = self.repo.mark_all_read(self.db, user.id)
        self.db.commit()
        return count
