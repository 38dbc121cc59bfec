from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from familyhub.shared.constants import DEFAULT_REWARD_CATEGORY


class RewardBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    points_cost: int = Field(..., gt=0)
    category: str = Field(default=DEFAULT_REWARD_CATEGORY, max_length=100)
    icon: Optional[str] = None
    stock_limit: Optional[int] = Field(None, ge=0)


class RewardCreate(RewardBase):
    pass


class RewardResponse(RewardBase):
    id: int
    family_id: int
    stock_remaining: Optional[int] = None
    is_available: bool
    created_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class RedemptionCreate(BaseModel):
    notes: Optional[str] = Field(None, max_length=1000)


class RedemptionFulfill(BaseModel):
    fulfilled: bool = True
    notes: Optional[str] = Field(None, max_length=1000)


class RedemptionResponse(BaseModel):
    id: int
    reward_id: int
    user_id: int
    points_spent: int
    status: str
    notes: Optional[str] = None
    redeemed_at: datetime
    fulfilled_by: Optional[int] = None
    fulfilled_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RedemptionWithRewardResponse(RedemptionResponse):
    reward: Optional[RewardResponse] = None
