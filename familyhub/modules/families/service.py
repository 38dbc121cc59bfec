"""
Family member service - per-member gamification settings.
"""
import logging
from sqlalchemy.orm import Session

from familyhub.core.security import Relationship, authorize, require_family
from familyhub.exceptions import UserNotFoundException
from familyhub.modules.families.models import User
from familyhub.modules.families.repository import UserRepository
from familyhub.modules.families.schemas import MemberSettingsUpdate

logger = logging.getLogger("familyhub.families")


class FamilyService:
    """Service for family members"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def update_member_settings(self, user: User, member_id: int, settings: MemberSettingsUpdate) -> User:
        """
        Change a member's gamification settings (guardians only).

        Raises:
            AuthorizationDeniedException: Caller is not a guardian
            UserNotFoundException: Member missing or in another family
        """
        family_id = require_family(user)
        authorize(user, family_id, Relationship.GUARDIAN, message="Only parents can update member settings")

        member = self.repo.get_family_member(self.db, member_id, family_id)
        if not member:
            raise UserNotFoundException(member_id)

        update_data = settings.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(member, key, value)

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(member)
        logger.info(f"User {user.id} updated settings of member {member_id}: {update_data}")
        return member
