"""
Family HTTP routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from familyhub.core.database import get_db
from familyhub.core.security import get_current_user, require_family
from .models import User
from .repository import UserRepository
from .schemas import FamilyMemberResponse, MemberSettingsUpdate
from .service import FamilyService

router = APIRouter(prefix="/api/family", tags=["family"])


@router.get("/members", response_model=List[FamilyMemberResponse])
def get_family_members(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get all members of the caller's family."""
    family_id = require_family(user)
    return UserRepository.get_family_members(db, family_id)


@router.patch("/members/{member_id}/settings", response_model=FamilyMemberResponse)
def update_member_settings(
    member_id: int,
    settings: MemberSettingsUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Enable or disable gamification for a family member."""
    return FamilyService(db).update_member_settings(user, member_id, settings)
