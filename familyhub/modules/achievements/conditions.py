"""
Achievement unlock conditions.

Catalog rows store conditions as "type:threshold" strings. They are parsed
into UnlockCondition values of a closed set of kinds, each with its own
evaluator. Anything that does not parse is never satisfied.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional


class ConditionKind(str, Enum):
    CHORES_COMPLETED = "chores_completed"
    POINTS_EARNED = "points_earned"
    STREAK_DAYS = "streak_days"


@dataclass(frozen=True)
class UnlockCondition:
    kind: ConditionKind
    threshold: int


@dataclass(frozen=True)
class UserProgress:
    """Facts about a user that conditions are checked against"""
    total_verified_chores: int
    total_points: int
    current_streak: int


def _chores_completed(progress: UserProgress, threshold: int) -> bool:
    return progress.total_verified_chores >= threshold


def _points_earned(progress: UserProgress, threshold: int) -> bool:
    return progress.total_points >= threshold


def _streak_days(progress: UserProgress, threshold: int) -> bool:
    return progress.current_streak >= threshold


EVALUATORS: Dict[ConditionKind, Callable[[UserProgress, int], bool]] = {
    ConditionKind.CHORES_COMPLETED: _chores_completed,
    ConditionKind.POINTS_EARNED: _points_earned,
    ConditionKind.STREAK_DAYS: _streak_days,
}


def parse_condition(raw: Optional[str]) -> Optional[UnlockCondition]:
    """
    Parse "type:threshold".

    Returns:
        UnlockCondition, or None for unknown types and malformed thresholds
    """
    if not raw or ":" not in raw:
        return None
    kind_str, _, threshold_str = raw.partition(":")
    try:
        kind = ConditionKind(kind_str.strip())
        threshold = int(threshold_str.strip())
    except ValueError:
        return None
    return UnlockCondition(kind=kind, threshold=threshold)


def is_satisfied(condition: Optional[UnlockCondition], progress: UserProgress) -> bool:
    if condition is None:
        return False
    return EVALUATORS[condition.kind](progress, condition.threshold)
