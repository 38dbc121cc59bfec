"""
Reward store service - catalog, redemptions and fulfillment.
"""
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from familyhub.core.security import Relationship, authorize, require_family
from familyhub.exceptions import (
    PreconditionFailedException,
    RedemptionNotFoundException,
    RewardNotFoundException,
)
from familyhub.modules.families.models import User
from familyhub.modules.families.repository import UserRepository
from familyhub.modules.notifications.service import NotificationService
from familyhub.modules.points.service import PointsService
from familyhub.modules.rewards.models import Reward, RewardRedemption
from familyhub.modules.rewards.repository import RedemptionRepository, RewardRepository
from familyhub.modules.rewards.schemas import RedemptionCreate, RedemptionFulfill, RewardCreate
from familyhub.shared.constants import (
    NOTIFICATION_REWARD_CANCELLED,
    NOTIFICATION_REWARD_FULFILLED,
    NOTIFICATION_REWARD_REDEEMED,
    REDEMPTION_STATUS_CANCELLED,
    REDEMPTION_STATUS_FULFILLED,
    REDEMPTION_STATUS_PENDING,
    TRANSACTION_REWARD_REDEEMED,
)
from familyhub.shared.date_utils import utcnow

logger = logging.getLogger("familyhub.rewards")


class RewardService:
    """Service for the family reward store"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = RewardRepository()
        self.redemption_repo = RedemptionRepository()
        self.user_repo = UserRepository()
        self.points_service = PointsService(db)
        self.notification_service = NotificationService(db)

    def list_rewards(self, user: User, available_only: bool = False) -> List[Reward]:
        family_id = require_family(user)
        return self.repo.get_for_family(self.db, family_id, available_only)

    def create_reward(self, user: User, reward_data: RewardCreate) -> Reward:
        """Add a reward to the caller's family store (guardians only)"""
        family_id = require_family(user)
        authorize(user, family_id, Relationship.GUARDIAN, message="Only parents can manage rewards")

        reward = Reward(
            **reward_data.model_dump(),
            family_id=family_id,
            stock_remaining=reward_data.stock_limit,
            is_available=True,
            created_by=user.id,
        )
        try:
            self.repo.create(self.db, reward)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(reward)
        logger.info(f"User {user.id} created reward {reward.id} '{reward.title}' ({reward.points_cost} points)")
        return reward

    def redeem_reward(
        self,
        user: User,
        reward_id: int,
        data: Optional[RedemptionCreate] = None
    ) -> RewardRedemption:
        """
        Spend points on a reward.

        The balance is deducted with a conditional UPDATE so two concurrent
        redemptions can never take it below zero. Stock is taken the same way.

        Raises:
            RewardNotFoundException: Reward missing or not in caller's family
            PreconditionFailedException: Gamification disabled, unavailable, out of stock or not enough points
        """
        family_id = require_family(user)
        reward = self.repo.get_in_family(self.db, reward_id, family_id)
        if not reward:
            raise RewardNotFoundException(reward_id)
        authorize(user, reward.family_id, Relationship.MEMBER)

        if not user.gamification_enabled:
            raise PreconditionFailedException("Gamification is not enabled for this user")
        if not reward.is_available:
            raise PreconditionFailedException("This reward is no longer available")
        if reward.stock_remaining is not None and reward.stock_remaining <= 0:
            raise PreconditionFailedException("This reward is out of stock")

        balance = self.points_service.get_balance(user.id)
        insufficient = f"Not enough points. You need {reward.points_cost} but have {balance}"
        if balance < reward.points_cost:
            raise PreconditionFailedException(insufficient)

        redemption = RewardRedemption(
            reward_id=reward.id,
            user_id=user.id,
            points_spent=reward.points_cost,
            status=REDEMPTION_STATUS_PENDING,
            notes=data.notes if data else None,
        )
        try:
            self.redemption_repo.create(self.db, redemption)

            if not self.user_repo.decrement_points_if_sufficient(self.db, user.id, reward.points_cost):
                raise PreconditionFailedException(insufficient)
            self.points_service.record_transaction(
                user_id=user.id,
                amount=-reward.points_cost,
                type=TRANSACTION_REWARD_REDEEMED,
                description=f"Redeemed: {reward.title}",
                reward_redemption_id=redemption.id,
            )
            if not self.repo.take_stock(self.db, reward.id):
                raise PreconditionFailedException("This reward is out of stock")

            for guardian in self.user_repo.get_guardians(self.db, family_id):
                self.notification_service.notify(
                    family_id=family_id,
                    user_id=guardian.id,
                    type=NOTIFICATION_REWARD_REDEEMED,
                    title="Reward Redeemed",
                    message=f"{user.name or 'Someone'} redeemed: {reward.title}",
                )
            self.notification_service.notify(
                family_id=family_id,
                user_id=user.id,
                type=NOTIFICATION_REWARD_REDEEMED,
                title="Reward Claimed!",
                message=f"You redeemed {reward.title} for {reward.points_cost} points",
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(redemption)
        logger.info(f"User {user.id} redeemed reward {reward.id} for {reward.points_cost} points (redemption {redemption.id})")
        return redemption

    def list_redemptions(
        self,
        user: User,
        status: Optional[str] = None,
        user_id: Optional[int] = None
    ) -> List[RewardRedemption]:
        family_id = require_family(user)
        return self.redemption_repo.get_for_family(self.db, family_id, status, user_id)

    def fulfill_redemption(
        self,
        user: User,
        redemption_id: int,
        data: Optional[RedemptionFulfill] = None,
        now: Optional[datetime] = None
    ) -> RewardRedemption:
        """
        Mark a pending redemption fulfilled, or cancel it.
        Cancelling does not give the points back.
        """
        data = data or RedemptionFulfill()
        now = now or utcnow()

        redemption = self.redemption_repo.get_by_id(self.db, redemption_id)
        if not redemption or not redemption.reward or redemption.reward.family_id != user.family_id:
            raise RedemptionNotFoundException(redemption_id)
        reward = redemption.reward

        authorize(user, reward.family_id, Relationship.GUARDIAN, message="Only parents can fulfill rewards")
        if redemption.status != REDEMPTION_STATUS_PENDING:
            raise PreconditionFailedException("Redemption is not pending")

        new_status = REDEMPTION_STATUS_FULFILLED if data.fulfilled else REDEMPTION_STATUS_CANCELLED
        try:
            moved = self.redemption_repo.transition(self.db, redemption, REDEMPTION_STATUS_PENDING, {
                "status": new_status,
                "fulfilled_by": user.id,
                "fulfilled_at": now,
                "notes": data.notes or redemption.notes,
            })
            if not moved:
                raise PreconditionFailedException("Redemption is not pending")

            if data.fulfilled:
                self.notification_service.notify(
                    family_id=reward.family_id,
                    user_id=redemption.user_id,
                    type=NOTIFICATION_REWARD_FULFILLED,
                    title="Reward Fulfilled!",
                    message=f"Your reward is ready: {reward.title}",
                )
            else:
                self.notification_service.notify(
                    family_id=reward.family_id,
                    user_id=redemption.user_id,
                    type=NOTIFICATION_REWARD_CANCELLED,
                    title="Reward Cancelled",
                    message=f"Your redemption of {reward.title} was cancelled",
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(redemption)
        logger.info(f"Redemption {redemption.id} marked {new_status} by user {user.id}")
        return redemption
