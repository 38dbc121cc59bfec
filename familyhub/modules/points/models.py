"""
PointTransaction and AllowancePayment database models.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from familyhub.core.database import Base
from familyhub.shared.date_utils import utcnow
from familyhub.shared.constants import PAYMENT_METHOD_PENDING


class PointTransaction(Base):
    """Append-only ledger entry"""
    __tablename__ = "point_transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)  # Signed
    type = Column(String, nullable=False, index=True)  # chore_pending, chore_completed, ...
    description = Column(String, nullable=True)
    chore_assignment_id = Column(Integer, ForeignKey("chore_assignments.id"), nullable=True)
    reward_redemption_id = Column(Integer, ForeignKey("reward_redemptions.id"), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)  # Who authorized it
    created_at = Column(DateTime, default=utcnow)


class AllowancePayment(Base):
    """Money owed for a verified assignment, separate from the points ledger"""
    __tablename__ = "allowance_payments"

    id = Column(Integer, primary_key=True, index=True)
    family_id = Column(Integer, ForeignKey("families.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)
    chore_assignment_id = Column(Integer, ForeignKey("chore_assignments.id"), nullable=True, index=True)
    paid_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    payment_method = Column(String, default=PAYMENT_METHOD_PENDING)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
