"""
Streak repository - Data access layer for UserStreak model.
"""
from typing import Optional
from sqlalchemy.orm import Session

from familyhub.modules.streaks.models import UserStreak


class StreakRepository:
    """Repository for UserStreak data access"""

    @staticmethod
    def get_by_user(db: Session, user_id: int) -> Optional[UserStreak]:
        return db.query(UserStreak).filter(UserStreak.user_id == user_id).first()

    @staticmethod
    def create(db: Session, streak: UserStreak) -> UserStreak:
        db.add(streak)
        db.flush()
        return streak

    @staticmethod
    def update(db: Session, streak: UserStreak) -> UserStreak:
        """Flush pending changes; the version check happens here"""
        db.flush()
        return streak
