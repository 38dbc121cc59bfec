"""
Chore and ChoreAssignment database models.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from familyhub.core.database import Base
from familyhub.shared.date_utils import utcnow
from familyhub.shared.constants import (
    ASSIGNMENT_STATUS_PENDING,
    DEFAULT_CHORE_POINTS,
    DEFAULT_CHORE_CATEGORY,
    DEFAULT_CHORE_DIFFICULTY,
)


class Chore(Base):
    __tablename__ = "chores"

    id = Column(Integer, primary_key=True, index=True)
    family_id = Column(Integer, ForeignKey("families.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    points = Column(Integer, default=DEFAULT_CHORE_POINTS, nullable=False)
    allowance_cents = Column(Integer, default=0, nullable=False)  # Minor currency units
    category = Column(String, default=DEFAULT_CHORE_CATEGORY)
    difficulty = Column(String, default=DEFAULT_CHORE_DIFFICULTY)  # easy, medium, hard
    estimated_minutes = Column(Integer, nullable=True)
    icon = Column(String, nullable=True)
    is_recurring = Column(Boolean, default=False)
    recurrence_pattern = Column(String, nullable=True)  # e.g. "daily", "weekly:1,3,5"
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class ChoreAssignment(Base):
    __tablename__ = "chore_assignments"

    id = Column(Integer, primary_key=True, index=True)
    # Deleting a chore leaves its assignments behind
    chore_id = Column(Integer, ForeignKey("chores.id", ondelete="SET NULL"), nullable=True, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    assigned_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    due_date = Column(DateTime, nullable=True)
    status = Column(String, default=ASSIGNMENT_STATUS_PENDING, nullable=False, index=True)
    notes = Column(String, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    verified_at = Column(DateTime, nullable=True)
    verified_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    chore = relationship("Chore", lazy="joined")
