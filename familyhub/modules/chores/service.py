"""
Chore services.
ChoreService manages the family chore catalog; AssignmentService hands chores
out and records completions. Verification lives in settlement.py.
"""
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from familyhub.core.security import Relationship, authorize, require_family
from familyhub.exceptions import (
    AssignmentNotFoundException,
    ChoreNotFoundException,
    PreconditionFailedException,
    UserNotFoundException,
    ValidationException,
)
from familyhub.modules.chores.models import Chore, ChoreAssignment
from familyhub.modules.chores.repository import AssignmentRepository, ChoreRepository
from familyhub.modules.chores.schemas import (
    AssignmentComplete,
    AssignmentCreate,
    ChoreCreate,
    ChoreUpdate,
)
from familyhub.modules.families.models import User
from familyhub.modules.families.repository import UserRepository
from familyhub.modules.notifications.service import NotificationService
from familyhub.modules.points.service import PointsService
from familyhub.shared.constants import (
    ASSIGNMENT_STATUS_COMPLETED,
    ASSIGNMENT_STATUS_PENDING,
    ASSIGNMENT_STATUSES,
    NOTIFICATION_CHORE_ASSIGNED,
    NOTIFICATION_CHORE_COMPLETED,
    TRANSACTION_CHORE_PENDING,
)
from familyhub.shared.date_utils import utcnow

logger = logging.getLogger("familyhub.chores")


class ChoreService:
    """Service for the chore catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ChoreRepository()

    def list_chores(self, user: User) -> List[Chore]:
        family_id = require_family(user)
        return self.repo.get_for_family(self.db, family_id)

    def create_chore(self, user: User, chore_data: ChoreCreate) -> Chore:
        """Create a chore in the caller's family (guardians only)"""
        family_id = require_family(user)
        authorize(user, family_id, Relationship.GUARDIAN, message="Only parents can manage chores")

        chore = Chore(**chore_data.model_dump(), family_id=family_id, created_by=user.id)
        chore = self.repo.create(self.db, chore)
        logger.info(f"User {user.id} created chore {chore.id} '{chore.title}'")
        return chore

    def update_chore(self, user: User, chore_id: int, chore_update: ChoreUpdate) -> Chore:
        """Partially update a chore of the caller's family"""
        family_id = require_family(user)
        authorize(user, family_id, Relationship.GUARDIAN, message="Only parents can manage chores")

        chore = self.repo.get_in_family(self.db, chore_id, family_id)
        if not chore:
            raise ChoreNotFoundException(chore_id)

        update_data = chore_update.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(chore, key, value)

        return self.repo.update(self.db, chore)

    def delete_chore(self, user: User, chore_id: int) -> None:
        """
        Delete a chore of the caller's family.
        Existing assignments are kept and keep their status.
        """
        family_id = require_family(user)
        authorize(user, family_id, Relationship.GUARDIAN, message="Only parents can manage chores")

        chore = self.repo.get_in_family(self.db, chore_id, family_id)
        if not chore:
            raise ChoreNotFoundException(chore_id)

        self.repo.delete(self.db, chore)
        logger.info(f"User {user.id} deleted chore {chore_id}")


class AssignmentService:
    """Service for chore assignments up to completion"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AssignmentRepository()
        self.chore_repo = ChoreRepository()
        self.user_repo = UserRepository()
        self.points_service = PointsService(db)
        self.notification_service = NotificationService(db)

    def list_assignments(
        self,
        user: User,
        assigned_to: Optional[int] = None,
        status: Optional[str] = None
    ) -> List[ChoreAssignment]:
        family_id = require_family(user)
        if status and status not in ASSIGNMENT_STATUSES:
            raise ValidationException("status", f"must be one of {', '.join(ASSIGNMENT_STATUSES)}")
        return self.repo.get_for_family(self.db, family_id, assigned_to, status)

    def create_assignment(self, user: User, chore_id: int, data: AssignmentCreate) -> ChoreAssignment:
        """
        Assign a chore to a member of the chore's family.

        Raises:
            ChoreNotFoundException: Chore missing or not in caller's family
            UserNotFoundException: Assignee not in the family
        """
        family_id = require_family(user)
        chore = self.chore_repo.get_in_family(self.db, chore_id, family_id)
        if not chore:
            raise ChoreNotFoundException(chore_id)
        authorize(user, chore.family_id, Relationship.MEMBER)

        assignee = self.user_repo.get_family_member(self.db, data.assigned_to, chore.family_id)
        if not assignee:
            raise UserNotFoundException(data.assigned_to, "Assignee not found in family")

        assignment = ChoreAssignment(
            chore_id=chore.id,
            assigned_to=assignee.id,
            assigned_by=user.id,
            due_date=data.due_date,
            notes=data.notes,
            status=ASSIGNMENT_STATUS_PENDING,
        )
        try:
            self.repo.create(self.db, assignment)
            self.notification_service.notify(
                family_id=chore.family_id,
                user_id=assignee.id,
                type=NOTIFICATION_CHORE_ASSIGNED,
                title="New Chore Assigned",
                message=f"You've been assigned: {chore.title}",
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(assignment)
        logger.info(f"Chore {chore.id} assigned to user {assignee.id} by user {user.id} (assignment {assignment.id})")
        return assignment

    def complete_assignment(
        self,
        user: User,
        assignment_id: int,
        data: Optional[AssignmentComplete] = None,
        now: Optional[datetime] = None
    ) -> ChoreAssignment:
        """
        Mark the caller's own pending assignment as completed.

        Records a provisional chore_pending ledger entry for the chore's
        points; the balance only changes when a guardian verifies.

        Raises:
            AssignmentNotFoundException: Assignment (or its chore) missing
            AuthorizationDeniedException: Caller is not the assignee
            PreconditionFailedException: Assignment is not pending
        """
        now = now or utcnow()
        notes = data.notes if data else None

        assignment = self.repo.get_by_id(self.db, assignment_id)
        if not assignment or not assignment.chore:
            raise AssignmentNotFoundException(assignment_id)
        chore = assignment.chore

        authorize(
            user, None, Relationship.SELF,
            subject_user_id=assignment.assigned_to,
            message="You can only complete your own assignments",
        )
        if assignment.status != ASSIGNMENT_STATUS_PENDING:
            raise PreconditionFailedException("Assignment is not pending")

        try:
            moved = self.repo.transition(self.db, assignment, ASSIGNMENT_STATUS_PENDING, {
                "status": ASSIGNMENT_STATUS_COMPLETED,
                "completed_at": now,
                "notes": notes or assignment.notes,
                "updated_at": now,
            })
            if not moved:
                raise PreconditionFailedException("Assignment is not pending")

            self.points_service.record_transaction(
                user_id=user.id,
                amount=chore.points,
                type=TRANSACTION_CHORE_PENDING,
                description=f"Completed: {chore.title} (pending verification)",
                chore_assignment_id=assignment.id,
            )

            if assignment.assigned_by:
                self.notification_service.notify(
                    family_id=user.family_id,
                    user_id=assignment.assigned_by,
                    type=NOTIFICATION_CHORE_COMPLETED,
                    title="Chore Completed",
                    message=f"{user.name or 'Someone'} completed: {chore.title}",
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(assignment)
        logger.info(f"User {user.id} completed assignment {assignment.id}")
        return assignment
