"""
Achievement repository - Data access layer for the catalog and unlocks.
"""
from typing import List
from sqlalchemy.orm import Session

from familyhub.modules.achievements.models import Achievement, UserAchievement
from familyhub.modules.chores.models import ChoreAssignment
from familyhub.shared.constants import ASSIGNMENT_STATUS_VERIFIED


class AchievementRepository:
    """Repository for Achievement and UserAchievement data access"""

    @staticmethod
    def get_active(db: Session) -> List[Achievement]:
        return db.query(Achievement).filter(Achievement.is_active == True).order_by(Achievement.id).all()

    @staticmethod
    def count(db: Session) -> int:
        return db.query(Achievement).count()

    @staticmethod
    def create(db: Session, achievement: Achievement) -> Achievement:
        db.add(achievement)
        db.flush()
        return achievement

    @staticmethod
    def get_unlocked(db: Session, user_id: int) -> List[UserAchievement]:
        return db.query(UserAchievement).filter(UserAchievement.user_id == user_id).all()

    @staticmethod
    def create_unlock(db: Session, unlock: UserAchievement) -> UserAchievement:
        db.add(unlock)
        db.flush()
        return unlock

    @staticmethod
    def count_verified_chores(db: Session, user_id: int) -> int:
        return db.query(ChoreAssignment).filter(
            ChoreAssignment.assigned_to == user_id,
            ChoreAssignment.status == ASSIGNMENT_STATUS_VERIFIED
        ).count()
