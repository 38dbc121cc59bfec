from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional


class AchievementBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=500)
    icon: str = Field(..., min_length=1, max_length=100)
    category: str = Field(default="general", max_length=100)
    points: int = Field(default=0, ge=0)  # Bonus awarded on unlock
    rarity: str = Field(default="common", max_length=50)
    unlock_condition: str = Field(..., min_length=1, max_length=200)  # "type:threshold"
    color: str = Field(default="blue", max_length=50)


class AchievementCreate(AchievementBase):
    pass


class AchievementResponse(AchievementBase):
    id: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class AchievementStatusResponse(AchievementResponse):
    unlocked: bool = False
    unlocked_at: Optional[datetime] = None


class CheckAchievementsResponse(BaseModel):
    unlocked_count: int
    achievements: List[AchievementResponse]
