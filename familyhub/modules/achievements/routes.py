"""
Achievement HTTP routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from familyhub.core.database import get_db
from familyhub.core.security import get_current_user
from familyhub.modules.families.models import User
from .service import AchievementService
from .schemas import (
    AchievementCreate,
    AchievementResponse,
    AchievementStatusResponse,
    CheckAchievementsResponse,
)

router = APIRouter(prefix="/api/gamification/achievements", tags=["achievements"])


@router.get("", response_model=List[AchievementStatusResponse])
def list_achievements(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get all active achievements with the caller's unlock status."""
    return AchievementService(db).list_achievements(user)


@router.post("", response_model=AchievementResponse, status_code=status.HTTP_201_CREATED)
def create_achievement(
    achievement: AchievementCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Create a catalog achievement (admin only)."""
    return AchievementService(db).create_achievement(user, achievement)


@router.post("/check", response_model=CheckAchievementsResponse)
def check_achievements(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Unlock any achievements the caller now qualifies for."""
    return AchievementService(db).check_achievements(user)
