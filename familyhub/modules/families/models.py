"""
Family and User database models.
Users are provisioned by the identity provider; only gamification fields are mutated here.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey

from familyhub.core.database import Base
from familyhub.shared.date_utils import utcnow
from familyhub.shared.constants import ROLE_MEMBER


class Family(Base):
    __tablename__ = "families"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    family_id = Column(Integer, ForeignKey("families.id", ondelete="CASCADE"), nullable=True, index=True)
    email = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=True)
    role = Column(String, default=ROLE_MEMBER, nullable=False)  # parent, admin, member, child

    # Gamification
    gamification_points = Column(Integer, default=0, nullable=False)  # Cached balance
    gamification_enabled = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=utcnow)
