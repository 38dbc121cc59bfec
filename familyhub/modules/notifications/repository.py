"""
Notification repository - Data access layer for Notification model.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from familyhub.modules.notifications.models import Notification


class NotificationRepository:
    """Repository for Notification data access"""

    @staticmethod
    def create(db: Session, notification: Notification) -> Notification:
        """Add notification to the current transaction"""
        db.add(notification)
        db.flush()
        return notification

    @staticmethod
    def get_by_id(db: Session, notification_id: int) -> Optional[Notification]:
        return db.query(Notification).filter(Notification.id == notification_id).first()

    @staticmethod
    def get_for_user(
        db: Session, user_id: int, unread_only: bool = False, limit: int = 50
    ) -> List[Notification]:
        """Get newest notifications for a recipient"""
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read == False)
        return query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit).all()

    @staticmethod
    def mark_all_read(db: Session, user_id: int) -> int:
        """Mark every unread notification of a user as read"""
        return db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.read == False
        ).update({Notification.read: True}, synchronize_session=False)
