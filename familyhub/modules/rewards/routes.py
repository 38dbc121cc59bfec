"""
Reward store HTTP routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from familyhub.core.database import get_db
from familyhub.core.security import get_current_user
from familyhub.modules.families.models import User
from .service import RewardService
from .schemas import (
    RewardCreate,
    RewardResponse,
    RedemptionCreate,
    RedemptionFulfill,
    RedemptionResponse,
    RedemptionWithRewardResponse,
)

router = APIRouter(prefix="/api/gamification", tags=["rewards"])


@router.get("/rewards", response_model=List[RewardResponse])
def list_rewards(
    available_only: bool = Query(False, alias="availableOnly"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get the family reward store."""
    return RewardService(db).list_rewards(user, available_only)


@router.post("/rewards", response_model=RewardResponse, status_code=status.HTTP_201_CREATED)
def create_reward(
    reward: RewardCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Create a reward (parents only)."""
    return RewardService(db).create_reward(user, reward)


@router.post("/rewards/{reward_id}/redeem", response_model=RedemptionResponse, status_code=status.HTTP_201_CREATED)
def redeem_reward(
    reward_id: int,
    payload: Optional[RedemptionCreate] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Spend points on a reward."""
    return RewardService(db).redeem_reward(user, reward_id, payload)


@router.get("/redemptions", response_model=List[RedemptionWithRewardResponse])
def list_redemptions(
    status_filter: Optional[str] = Query(None, alias="status"),
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get the family's reward redemptions."""
    return RewardService(db).list_redemptions(user, status_filter, user_id)


@router.post("/redemptions/{redemption_id}/fulfill", response_model=RedemptionResponse)
def fulfill_redemption(
    redemption_id: int,
    payload: Optional[RedemptionFulfill] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Fulfill or cancel a pending redemption (parents only)."""
    return RewardService(db).fulfill_redemption(user, redemption_id, payload)
