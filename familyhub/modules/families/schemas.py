from pydantic import BaseModel
from typing import Optional


class FamilyMemberResponse(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    role: str
    gamification_points: int = 0
    gamification_enabled: bool = True

    class Config:
        from_attributes = True


class MemberSettingsUpdate(BaseModel):
    gamification_enabled: Optional[bool] = None
