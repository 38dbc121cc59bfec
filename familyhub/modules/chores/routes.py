"""
Chore and assignment HTTP routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from familyhub.core.database import get_db
from familyhub.core.security import get_current_user
from familyhub.modules.families.models import User
from .service import ChoreService, AssignmentService
from .settlement import VerificationService
from .schemas import (
    ChoreCreate,
    ChoreUpdate,
    ChoreResponse,
    AssignmentCreate,
    AssignmentComplete,
    AssignmentVerify,
    AssignmentResponse,
    AssignmentWithChoreResponse,
)

router = APIRouter(prefix="/api/chores", tags=["chores"])


# ===== ASSIGNMENTS =====

@router.get("/assignments", response_model=List[AssignmentWithChoreResponse])
def list_assignments(
    assigned_to: Optional[int] = Query(None, alias="assignedTo"),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get all assignments for the caller's family."""
    return AssignmentService(db).list_assignments(user, assigned_to, status_filter)


@router.post("/assignments/{assignment_id}/complete", response_model=AssignmentResponse)
def complete_assignment(
    assignment_id: int,
    payload: Optional[AssignmentComplete] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Mark the caller's own assignment as completed."""
    return AssignmentService(db).complete_assignment(user, assignment_id, payload)


@router.post("/assignments/{assignment_id}/verify", response_model=AssignmentResponse)
def verify_assignment(
    assignment_id: int,
    payload: Optional[AssignmentVerify] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Approve (award points/allowance/streak) or reject a completed assignment."""
    return VerificationService(db).verify_assignment(user, assignment_id, payload)


# ===== CHORES =====

@router.get("", response_model=List[ChoreResponse])
def list_chores(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Get all chores for the caller's family."""
    return ChoreService(db).list_chores(user)


@router.post("", response_model=ChoreResponse, status_code=status.HTTP_201_CREATED)
def create_chore(
    chore: ChoreCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Create a new chore."""
    return ChoreService(db).create_chore(user, chore)


@router.patch("/{chore_id}", response_model=ChoreResponse)
def update_chore(
    chore_id: int,
    chore_update: ChoreUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Update a chore."""
    return ChoreService(db).update_chore(user, chore_id, chore_update)


@router.delete("/{chore_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_chore(
    chore_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Delete a chore. Its assignments are kept."""
    ChoreService(db).delete_chore(user, chore_id)


@router.post("/{chore_id}/assign", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
def assign_chore(
    chore_id: int,
    assignment: AssignmentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Assign a chore to a family member."""
    return AssignmentService(db).create_assignment(user, chore_id, assignment)
