"""
Chore repository - Data access layer for Chore and ChoreAssignment models.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from familyhub.modules.chores.models import Chore, ChoreAssignment


class ChoreRepository:
    """Repository for Chore data access"""

    @staticmethod
    def get_in_family(db: Session, chore_id: int, family_id: int) -> Optional[Chore]:
        """Get chore only if it belongs to the family"""
        return db.query(Chore).filter(
            Chore.id == chore_id,
            Chore.family_id == family_id
        ).first()

    @staticmethod
    def get_for_family(db: Session, family_id: int) -> List[Chore]:
        """Get all chores of a family, newest first"""
        return db.query(Chore).filter(
            Chore.family_id == family_id
        ).order_by(Chore.created_at.desc(), Chore.id.desc()).all()

    @staticmethod
    def create(db: Session, chore: Chore) -> Chore:
        db.add(chore)
        db.commit()
        db.refresh(chore)
        return chore

    @staticmethod
    def update(db: Session, chore: Chore) -> Chore:
        db.commit()
        db.refresh(chore)
        return chore

    @staticmethod
    def delete(db: Session, chore: Chore) -> None:
        db.delete(chore)
        db.commit()


class AssignmentRepository:
    """Repository for ChoreAssignment data access"""

    @staticmethod
    def get_by_id(db: Session, assignment_id: int) -> Optional[ChoreAssignment]:
        return db.query(ChoreAssignment).filter(ChoreAssignment.id == assignment_id).first()

    @staticmethod
    def get_for_family(
        db: Session,
        family_id: int,
        assigned_to: Optional[int] = None,
        status: Optional[str] = None
    ) -> List[ChoreAssignment]:
        """Get assignments of a family's chores, newest first"""
        query = db.query(ChoreAssignment).join(
            Chore, ChoreAssignment.chore_id == Chore.id
        ).filter(Chore.family_id == family_id)
        if assigned_to is not None:
            query = query.filter(ChoreAssignment.assigned_to == assigned_to)
        if status:
            query = query.filter(ChoreAssignment.status == status)
        return query.order_by(ChoreAssignment.created_at.desc(), ChoreAssignment.id.desc()).all()

    @staticmethod
    def create(db: Session, assignment: ChoreAssignment) -> ChoreAssignment:
        db.add(assignment)
        db.flush()
        return assignment

    @staticmethod
    def transition(db: Session, assignment: ChoreAssignment, from_status: str, values: dict) -> bool:
        """
        Move an assignment out of from_status with a conditional UPDATE.

        Returns:
            False if the row was no longer in from_status
        """
        updated = db.query(ChoreAssignment).filter(
            ChoreAssignment.id == assignment.id,
            ChoreAssignment.status == from_status
        ).update(values, synchronize_session=False)
        if not updated:
            return False
        db.refresh(assignment)
        return True
