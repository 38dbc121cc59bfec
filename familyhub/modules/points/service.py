"""
Points service - ledger writes, balance updates and point reporting.

The ledger (PointTransaction rows) and the cached balance
(User.gamification_points) are kept separately. Provisional chore_pending
entries go to the ledger only; every other entry also moves the balance.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from familyhub.exceptions import UserNotFoundException, ValidationException
from familyhub.modules.families.models import User
from familyhub.modules.families.repository import UserRepository
from familyhub.modules.points.models import PointTransaction
from familyhub.modules.points.repository import PointTransactionRepository
from familyhub.modules.points.schemas import (
    LeaderboardEntry,
    PointsSummaryResponse,
    PointTransactionResponse,
    ReconciliationResult,
)
from familyhub.modules.streaks.models import UserStreak
from familyhub.shared.constants import (
    LEADERBOARD_SORT_POINTS,
    LEADERBOARD_SORT_STREAK,
    UNSETTLED_TRANSACTION_TYPES,
)

logger = logging.getLogger("familyhub.points")


class PointsService:
    """Service for points ledger and balances"""

    def __init__(self, db: Session):
        self.db = db
        self.transaction_repo = PointTransactionRepository()
        self.user_repo = UserRepository()

    def record_transaction(
        self,
        user_id: int,
        amount: int,
        type: str,
        description: str,
        chore_assignment_id: Optional[int] = None,
        reward_redemption_id: Optional[int] = None,
        created_by: Optional[int] = None,
    ) -> PointTransaction:
        """Append a ledger entry without touching the balance"""
        transaction = PointTransaction(
            user_id=user_id,
            amount=amount,
            type=type,
            description=description,
            chore_assignment_id=chore_assignment_id,
            reward_redemption_id=reward_redemption_id,
            created_by=created_by,
        )
        return self.transaction_repo.create(self.db, transaction)

    def award_points(
        self,
        user_id: int,
        amount: int,
        type: str,
        description: str,
        chore_assignment_id: Optional[int] = None,
        created_by: Optional[int] = None,
    ) -> PointTransaction:
        """
        Append a ledger entry and add the amount to the user's balance.
        Nothing is committed here; the caller owns the transaction.
        """
        transaction = self.record_transaction(
            user_id=user_id,
            amount=amount,
            type=type,
            description=description,
            chore_assignment_id=chore_assignment_id,
            created_by=created_by,
        )
        if not self.user_repo.increment_points(self.db, user_id, amount):
            raise UserNotFoundException(user_id)
        logger.info(f"Awarded {amount} points to user {user_id} ({type})")
        return transaction

    def get_balance(self, user_id: int) -> int:
        user = self.user_repo.get_by_id(self.db, user_id)
        if not user:
            raise UserNotFoundException(user_id)
        self.db.refresh(user, attribute_names=["gamification_points"])
        return user.gamification_points or 0

    def get_summary(self, user: User, limit: int = 50) -> PointsSummaryResponse:
        """Get balance and recent ledger entries for a user"""
        transactions = self.transaction_repo.get_for_user(self.db, user.id, limit)
        return PointsSummaryResponse(
            total_points=self.get_balance(user.id),
            transactions=[PointTransactionResponse.model_validate(t) for t in transactions],
        )

    def get_leaderboard(self, user: User, family_id: int, sort_by: str = LEADERBOARD_SORT_POINTS) -> List[LeaderboardEntry]:
        """
        Rank family members by balance or current streak.

        Args:
            user: Caller (flagged in the result)
            family_id: Family to rank
            sort_by: "points" or "streak"
        """
        if sort_by not in (LEADERBOARD_SORT_POINTS, LEADERBOARD_SORT_STREAK):
            raise ValidationException("sort_by", "must be 'points' or 'streak'")

        rows = self.db.query(User, UserStreak).outerjoin(
            UserStreak, UserStreak.user_id == User.id
        ).filter(User.family_id == family_id).order_by(User.id).all()

        if sort_by == LEADERBOARD_SORT_STREAK:
            rows.sort(key=lambda r: r[1].current_streak if r[1] else 0, reverse=True)
        else:
            rows.sort(key=lambda r: r[0].gamification_points or 0, reverse=True)

        return [
            LeaderboardEntry(
                rank=index + 1,
                user_id=member.id,
                name=member.name,
                email=member.email,
                points=member.gamification_points or 0,
                current_streak=streak.current_streak if streak else 0,
                longest_streak=streak.longest_streak if streak else 0,
                is_current_user=member.id == user.id,
            )
            for index, (member, streak) in enumerate(rows)
        ]

    def reconcile(self, user: User) -> ReconciliationResult:
        """
        Compare the cached balance with the settled part of the ledger.
        Reports drift only; balances are never rewritten.
        """
        self.db.refresh(user, attribute_names=["gamification_points"])
        settled = self.transaction_repo.sum_for_user(
            self.db, user.id, exclude_types=UNSETTLED_TRANSACTION_TYPES
        )
        pending = self.transaction_repo.sum_for_user(self.db, user.id) - settled
        balance = user.gamification_points or 0
        return ReconciliationResult(
            user_id=user.id,
            balance=balance,
            settled_ledger_total=settled,
            pending_ledger_total=pending,
            drift=balance - settled,
        )

    def reconcile_all(self) -> List[ReconciliationResult]:
        """Reconcile every user and return those with drift"""
        drifted = []
        for user in self.user_repo.get_all(self.db):
            result = self.reconcile(user)
            if result.drift != 0:
                logger.warning(
                    f"Ledger drift for user {user.id}: balance={result.balance} "
                    f"settled={result.settled_ledger_total} drift={result.drift}"
                )
                drifted.append(result)
        return drifted
