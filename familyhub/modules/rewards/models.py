"""
Reward store database models.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from familyhub.core.database import Base
from familyhub.shared.date_utils import utcnow
from familyhub.shared.constants import DEFAULT_REWARD_CATEGORY, REDEMPTION_STATUS_PENDING


class Reward(Base):
    __tablename__ = "rewards"

    id = Column(Integer, primary_key=True, index=True)
    family_id = Column(Integer, ForeignKey("families.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    points_cost = Column(Integer, nullable=False)
    category = Column(String, default=DEFAULT_REWARD_CATEGORY)
    icon = Column(String, nullable=True)
    stock_limit = Column(Integer, nullable=True)  # None = unlimited
    stock_remaining = Column(Integer, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow)


class RewardRedemption(Base):
    __tablename__ = "reward_redemptions"

    id = Column(Integer, primary_key=True, index=True)
    reward_id = Column(Integer, ForeignKey("rewards.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    points_spent = Column(Integer, nullable=False)
    status = Column(String, default=REDEMPTION_STATUS_PENDING, nullable=False)  # pending, fulfilled, cancelled
    notes = Column(String, nullable=True)
    redeemed_at = Column(DateTime, default=utcnow)
    fulfilled_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    fulfilled_at = Column(DateTime, nullable=True)

    reward = relationship("Reward", lazy="joined")
