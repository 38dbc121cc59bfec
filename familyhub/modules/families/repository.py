"""
User repository - Data access layer for family members.
Balance changes are relative SQL updates, never read-modify-write.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from familyhub.modules.families.models import User
from familyhub.shared.constants import GUARDIAN_ROLES


class UserRepository:
    """Repository for User data access"""

    @staticmethod
    def get_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_family_member(db: Session, user_id: int, family_id: int) -> Optional[User]:
        """Get user only if they belong to the family"""
        return db.query(User).filter(
            User.id == user_id,
            User.family_id == family_id
        ).first()

    @staticmethod
    def get_family_members(db: Session, family_id: int) -> List[User]:
        return db.query(User).filter(User.family_id == family_id).order_by(User.id).all()

    @staticmethod
    def get_guardians(db: Session, family_id: int) -> List[User]:
        return db.query(User).filter(
            User.family_id == family_id,
            User.role.in_(GUARDIAN_ROLES)
        ).all()

    @staticmethod
    def get_all(db: Session) -> List[User]:
        return db.query(User).order_by(User.id).all()

    @staticmethod
    def increment_points(db: Session, user_id: int, amount: int) -> int:
        """
        Add amount to the cached balance as a single UPDATE.

        Returns:
            Number of rows updated
        """
        return db.query(User).filter(User.id == user_id).update(
            {User.gamification_points: User.gamification_points + amount},
            synchronize_session=False
        )

    @staticmethod
    def decrement_points_if_sufficient(db: Session, user_id: int, amount: int) -> int:
        """
        Subtract amount only if the balance covers it.

        Returns:
            1 if deducted, 0 if balance was insufficient
        """
        return db.query(User).filter(
            User.id == user_id,
            User.gamification_points >= amount
        ).update(
            {User.gamification_points: User.gamification_points - amount},
            synchronize_session=False
        )
