"""
Reward repository - Data access layer for Reward and RewardRedemption models.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from familyhub.modules.rewards.models import Reward, RewardRedemption


class RewardRepository:
    """Repository for Reward data access"""

    @staticmethod
    def get_in_family(db: Session, reward_id: int, family_id: int) -> Optional[Reward]:
        return db.query(Reward).filter(
            Reward.id == reward_id,
            Reward.family_id == family_id
        ).first()

    @staticmethod
    def get_for_family(db: Session, family_id: int, available_only: bool = False) -> List[Reward]:
        """Get family rewards ordered by cost, cheapest first"""
        query = db.query(Reward).filter(Reward.family_id == family_id)
        if available_only:
            query = query.filter(Reward.is_available.is_(True))
        return query.order_by(Reward.points_cost, Reward.id).all()

    @staticmethod
    def create(db: Session, reward: Reward) -> Reward:
        db.add(reward)
        db.flush()
        return reward

    @staticmethod
    def take_stock(db: Session, reward_id: int) -> int:
        """
        Decrement remaining stock if any is left. Unlimited rewards
        (stock_remaining NULL) always succeed.

        Returns:
            Number of rows updated
        """
        limited = db.query(Reward).filter(
            Reward.id == reward_id,
            Reward.stock_remaining.isnot(None),
            Reward.stock_remaining > 0
        ).update(
            {Reward.stock_remaining: Reward.stock_remaining - 1},
            synchronize_session=False
        )
        if limited:
            return limited
        return db.query(Reward).filter(
            Reward.id == reward_id,
            Reward.stock_remaining.is_(None)
        ).count()


class RedemptionRepository:
    """Repository for RewardRedemption data access"""

    @staticmethod
    def get_by_id(db: Session, redemption_id: int) -> Optional[RewardRedemption]:
        return db.query(RewardRedemption).filter(RewardRedemption.id == redemption_id).first()

    @staticmethod
    def get_for_family(
        db: Session,
        family_id: int,
        status: Optional[str] = None,
        user_id: Optional[int] = None
    ) -> List[RewardRedemption]:
        """Get redemptions of a family's rewards, newest first"""
        query = db.query(RewardRedemption).join(
            Reward, RewardRedemption.reward_id == Reward.id
        ).filter(Reward.family_id == family_id)
        if status:
            query = query.filter(RewardRedemption.status == status)
        if user_id is not None:
            query = query.filter(RewardRedemption.user_id == user_id)
        return query.order_by(RewardRedemption.redeemed_at.desc(), RewardRedemption.id.desc()).all()

    @staticmethod
    def create(db: Session, redemption: RewardRedemption) -> RewardRedemption:
        db.add(redemption)
        db.flush()
        return redemption

    @staticmethod
    def transition(db: Session, redemption: RewardRedemption, from_status: str, values: dict) -> bool:
        """Conditional status change; False when the row left from_status"""
        updated = db.query(RewardRedemption).filter(
            RewardRedemption.id == redemption.id,
            RewardRedemption.status == from_status
        ).update(values, synchronize_session=False)
        if not updated:
            return False
        db.refresh(redemption)
        return True
