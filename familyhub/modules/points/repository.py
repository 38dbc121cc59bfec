"""
Points repository - Data access layer for ledger and allowance models.
"""
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from familyhub.modules.points.models import PointTransaction, AllowancePayment


class PointTransactionRepository:
    """Repository for PointTransaction data access"""

    @staticmethod
    def create(db: Session, transaction: PointTransaction) -> PointTransaction:
        db.add(transaction)
        db.flush()
        return transaction

    @staticmethod
    def get_for_user(db: Session, user_id: int, limit: int = 50) -> List[PointTransaction]:
        """Get most recent transactions for user"""
        return db.query(PointTransaction).filter(
            PointTransaction.user_id == user_id
        ).order_by(PointTransaction.created_at.desc(), PointTransaction.id.desc()).limit(limit).all()

    @staticmethod
    def sum_for_user(db: Session, user_id: int, exclude_types: tuple = ()) -> int:
        """Sum of ledger amounts for user, optionally skipping some types"""
        query = db.query(func.coalesce(func.sum(PointTransaction.amount), 0)).filter(
            PointTransaction.user_id == user_id
        )
        if exclude_types:
            query = query.filter(PointTransaction.type.notin_(exclude_types))
        return int(query.scalar() or 0)


class AllowancePaymentRepository:
    """Repository for AllowancePayment data access"""

    @staticmethod
    def create(db: Session, payment: AllowancePayment) -> AllowancePayment:
        db.add(payment)
        db.flush()
        return payment
