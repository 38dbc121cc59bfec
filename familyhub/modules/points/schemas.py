from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional


class PointTransactionResponse(BaseModel):
    id: int
    user_id: int
    amount: int
    type: str
    description: Optional[str] = None
    chore_assignment_id: Optional[int] = None
    reward_redemption_id: Optional[int] = None
    created_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PointsSummaryResponse(BaseModel):
    total_points: int
    transactions: List[PointTransactionResponse]


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: int
    name: Optional[str] = None
    email: str
    points: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    is_current_user: bool = False


class ReconciliationResult(BaseModel):
    """Balance vs. ledger comparison for one user"""
    user_id: int
    balance: int
    settled_ledger_total: int  # Everything except chore_pending
    pending_ledger_total: int  # Provisional chore_pending entries
    drift: int                 # balance - settled_ledger_total
