"""
UserStreak database model.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from familyhub.core.database import Base
from familyhub.shared.date_utils import utcnow
from familyhub.shared.constants import STREAK_TYPE_DAILY


class UserStreak(Base):
    __tablename__ = "user_streaks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    current_streak = Column(Integer, default=0, nullable=False)  # Days
    longest_streak = Column(Integer, default=0, nullable=False)
    last_activity_date = Column(DateTime, nullable=True)
    streak_type = Column(String, default=STREAK_TYPE_DAILY)
    # Bumped on every UPDATE; a stale version aborts the flush
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __mapper_args__ = {"version_id_col": version}
