"""
Points HTTP routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from familyhub.core import config
from familyhub.core.database import get_db
from familyhub.core.security import get_current_user, require_family
from familyhub.modules.families.models import User
from familyhub.shared.constants import LEADERBOARD_SORT_POINTS
from .service import PointsService
from .schemas import PointsSummaryResponse, LeaderboardEntry

router = APIRouter(prefix="/api/gamification", tags=["points"])


@router.get("/points", response_model=PointsSummaryResponse)
def get_points(
    limit: int = Query(config.DEFAULT_TRANSACTION_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get the caller's balance and transaction history."""
    return PointsService(db).get_summary(user, limit)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def get_leaderboard(
    sort_by: str = Query(LEADERBOARD_SORT_POINTS, alias="sortBy"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get the family leaderboard sorted by points or streak."""
    family_id = require_family(user)
    return PointsService(db).get_leaderboard(user, family_id, sort_by)
