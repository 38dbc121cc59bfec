from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from familyhub.shared.constants import (
    DEFAULT_CHORE_POINTS,
    DEFAULT_CHORE_CATEGORY,
    DEFAULT_CHORE_DIFFICULTY,
)


class ChoreBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    points: int = Field(default=DEFAULT_CHORE_POINTS, ge=0)
    allowance_cents: int = Field(default=0, ge=0)
    category: str = Field(default=DEFAULT_CHORE_CATEGORY, max_length=100)
    difficulty: str = Field(default=DEFAULT_CHORE_DIFFICULTY, pattern="^(easy|medium|hard)$")
    estimated_minutes: Optional[int] = Field(None, ge=0)
    icon: Optional[str] = None
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None


class ChoreCreate(ChoreBase):
    pass


class ChoreUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    points: Optional[int] = Field(None, ge=0)
    allowance_cents: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, max_length=100)
    difficulty: Optional[str] = Field(None, pattern="^(easy|medium|hard)$")
    estimated_minutes: Optional[int] = Field(None, ge=0)
    icon: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[str] = None


class ChoreResponse(ChoreBase):
    id: int
    family_id: int
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Assignment schemas
class AssignmentCreate(BaseModel):
    assigned_to: int
    due_date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)


class AssignmentComplete(BaseModel):
    notes: Optional[str] = Field(None, max_length=1000)


class AssignmentVerify(BaseModel):
    approved: bool = True
    notes: Optional[str] = Field(None, max_length=1000)


class AssignmentResponse(BaseModel):
    id: int
    chore_id: Optional[int] = None
    assigned_to: int
    assigned_by: Optional[int] = None
    due_date: Optional[datetime] = None
    status: str
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    verified_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AssignmentWithChoreResponse(AssignmentResponse):
    chore: Optional[ChoreResponse] = None
