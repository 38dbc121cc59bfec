"""
Verification & settlement of completed chore assignments.

A guardian approves or rejects a completed assignment. Approval settles it in
a single database transaction:

1. status completed -> verified (conditional UPDATE)
2. chore_completed ledger entry, authorized by the verifier
3. relative increment of the assignee's balance
4. allowance payment record when the chore carries an allowance
5. daily streak update (versioned row)
6. notification to the assignee (SAVEPOINT, never fails the settlement)

Rejection only moves the status to rejected and notifies the assignee.
"""
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from familyhub.core.security import Relationship, authorize
from familyhub.exceptions import (
    AssignmentNotFoundException,
    ConcurrentUpdateException,
    PreconditionFailedException,
)
from familyhub.modules.chores.models import Chore, ChoreAssignment
from familyhub.modules.chores.repository import AssignmentRepository
from familyhub.modules.chores.schemas import AssignmentVerify
from familyhub.modules.families.models import User
from familyhub.modules.families.repository import UserRepository
from familyhub.modules.notifications.service import NotificationService
from familyhub.modules.points.models import AllowancePayment
from familyhub.modules.points.repository import AllowancePaymentRepository
from familyhub.modules.points.service import PointsService
from familyhub.modules.streaks.service import StreakService
from familyhub.shared.constants import (
    ASSIGNMENT_STATUS_COMPLETED,
    ASSIGNMENT_STATUS_REJECTED,
    ASSIGNMENT_STATUS_VERIFIED,
    NOTIFICATION_CHORE_REJECTED,
    NOTIFICATION_CHORE_VERIFIED,
    PAYMENT_METHOD_PENDING,
    TRANSACTION_CHORE_COMPLETED,
)
from familyhub.shared.date_utils import utcnow

logger = logging.getLogger("familyhub.settlement")


def format_cents(amount_cents: int) -> str:
    """500 -> "$5.00" """
    return f"${amount_cents / 100:.2f}"


class VerificationService:
    """Service for verifying and settling chore assignments"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AssignmentRepository()
        self.user_repo = UserRepository()
        self.allowance_repo = AllowancePaymentRepository()
        self.points_service = PointsService(db)
        self.streak_service = StreakService(db)
        self.notification_service = NotificationService(db)

    def verify_assignment(
        self,
        user: User,
        assignment_id: int,
        data: Optional[AssignmentVerify] = None,
        now: Optional[datetime] = None
    ) -> ChoreAssignment:
        """
        Approve or reject a completed assignment.

        Args:
            user: Verifying guardian
            assignment_id: Assignment to verify
            data: approved flag (default True) and optional notes
            now: Verification time (defaults to current UTC time)

        Returns:
            Updated assignment

        Raises:
            AssignmentNotFoundException: Assignment, chore or assignee missing
            AuthorizationDeniedException: Caller is not a guardian of the assignee's family
            PreconditionFailedException: Assignment is not completed
            ConcurrentUpdateException: Streak row changed underneath us
        """
        data = data or AssignmentVerify()
        now = now or utcnow()

        assignment = self.repo.get_by_id(self.db, assignment_id)
        if not assignment or not assignment.chore:
            raise AssignmentNotFoundException(assignment_id)
        assignee = self.user_repo.get_by_id(self.db, assignment.assigned_to)
        if not assignee:
            raise AssignmentNotFoundException(assignment_id)

        authorize(
            user, assignee.family_id, Relationship.GUARDIAN,
            message="Only parents can verify chores",
        )
        if assignment.status != ASSIGNMENT_STATUS_COMPLETED:
            raise PreconditionFailedException("Assignment must be completed before verification")

        if data.approved:
            self._settle(user, assignment, assignee, data.notes, now)
        else:
            self._reject(user, assignment, assignee, data.notes, now)

        return assignment

    def _move(self, assignment: ChoreAssignment, to_status: str, verifier: User, notes: Optional[str], now: datetime) -> None:
        moved = self.repo.transition(self.db, assignment, ASSIGNMENT_STATUS_COMPLETED, {
            "status": to_status,
            "verified_by": verifier.id,
            "verified_at": now,
            "notes": notes or assignment.notes,
            "updated_at": now,
        })
        if not moved:
            raise PreconditionFailedException("Assignment must be completed before verification")

    def _settle(self, verifier: User, assignment: ChoreAssignment, assignee: User, notes: Optional[str], now: datetime) -> None:
        chore: Chore = assignment.chore
        assignee_id = assignee.id
        try:
            self._move(assignment, ASSIGNMENT_STATUS_VERIFIED, verifier, notes, now)

            self.points_service.award_points(
                user_id=assignee.id,
                amount=chore.points,
                type=TRANSACTION_CHORE_COMPLETED,
                description=f"Verified: {chore.title}",
                chore_assignment_id=assignment.id,
                created_by=verifier.id,
            )

            if chore.allowance_cents > 0:
                self.allowance_repo.create(self.db, AllowancePayment(
                    family_id=assignee.family_id or verifier.family_id,
                    user_id=assignee.id,
                    amount_cents=chore.allowance_cents,
                    chore_assignment_id=assignment.id,
                    paid_by=verifier.id,
                    payment_method=PAYMENT_METHOD_PENDING,
                    notes=f"For completing: {chore.title}",
                ))

            try:
                self.streak_service.record_activity(assignee_id, now)
            except (StaleDataError, IntegrityError) as e:
                # The failed flush leaves the session unusable until rolled back
                self.db.rollback()
                logger.warning(f"Streak update for user {assignee_id} lost a race: {e}")
                raise ConcurrentUpdateException("Streak") from e

            allowance = f" and {format_cents(chore.allowance_cents)}" if chore.allowance_cents > 0 else ""
            self.notification_service.notify(
                family_id=assignee.family_id,
                user_id=assignee.id,
                type=NOTIFICATION_CHORE_VERIFIED,
                title="Chore Verified!",
                message=f"You earned {chore.points} points{allowance} for: {chore.title}",
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(assignment)
        logger.info(
            f"Assignment {assignment.id} verified by user {verifier.id}: "
            f"+{chore.points} points, allowance {chore.allowance_cents} cents to user {assignee.id}"
        )

    def _reject(self, verifier: User, assignment: ChoreAssignment, assignee: User, notes: Optional[str], now: datetime) -> None:
        chore: Chore = assignment.chore
        try:
            self._move(assignment, ASSIGNMENT_STATUS_REJECTED, verifier, notes, now)
            self.notification_service.notify(
                family_id=assignee.family_id,
                user_id=assignee.id,
                type=NOTIFICATION_CHORE_REJECTED,
                title="Chore Needs Work",
                message=f'Your completion of "{chore.title}" was rejected. {notes or ""}'.rstrip(),
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(assignment)
        logger.info(f"Assignment {assignment.id} rejected by user {verifier.id}")
