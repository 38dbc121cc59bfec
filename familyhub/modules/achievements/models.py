"""
Achievement catalog and UserAchievement database models.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint

from familyhub.core.database import Base
from familyhub.shared.date_utils import utcnow


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    category = Column(String, default="general")
    points = Column(Integer, default=0, nullable=False)  # Bonus on unlock
    rarity = Column(String, default="common")  # common, uncommon, rare, epic, legendary
    unlock_condition = Column(String, nullable=False)  # "type:threshold"
    color = Column(String, default="blue")
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)


class UserAchievement(Base):
    __tablename__ = "user_achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    achievement_id = Column(Integer, ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False)
    progress = Column(Integer, default=0)  # Percent
    unlocked_at = Column(DateTime, default=utcnow)
