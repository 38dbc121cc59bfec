"""
Streak service - daily activity streak tracking.
"""
import logging
from datetime import date, datetime
from typing import Optional
from sqlalchemy.orm import Session

from familyhub.modules.streaks.models import UserStreak
from familyhub.modules.streaks.repository import StreakRepository
from familyhub.shared.constants import STREAK_TYPE_DAILY
from familyhub.shared.date_utils import to_day, yesterday_of

logger = logging.getLogger("familyhub.streaks")


def compute_next_streak(current_streak: int, last_activity: Optional[datetime], now: datetime) -> int:
    """
    Calculate the streak length after activity at `now`.

    - last activity yesterday: streak continues (+1)
    - last activity today: unchanged, a day counts once
    - anything else: gap, restart at 1

    Args:
        current_streak: Stored streak length
        last_activity: Stored last activity timestamp
        now: Time of the new activity

    Returns:
        New streak length
    """
    last_day: Optional[date] = to_day(last_activity)
    today = to_day(now)

    if last_day == yesterday_of(now):
        return current_streak + 1
    if last_day != today:
        return 1
    return current_streak


class StreakService:
    """Service for user streaks"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = StreakRepository()

    def get_current_streak(self, user_id: int) -> int:
        streak = self.repo.get_by_user(self.db, user_id)
        return streak.current_streak if streak else 0

    def record_activity(self, user_id: int, now: datetime) -> UserStreak:
        """
        Update a user's daily streak for activity at `now`.

        Creates the row on first activity. Updates are versioned, so a
        concurrent update of the same row fails the flush with StaleDataError
        instead of double counting. Nothing is committed here.
        """
        streak = self.repo.get_by_user(self.db, user_id)

        if streak is None:
            streak = UserStreak(
                user_id=user_id,
                current_streak=1,
                longest_streak=1,
                last_activity_date=now,
                streak_type=STREAK_TYPE_DAILY,
            )
            self.repo.create(self.db, streak)
            logger.info(f"Started streak for user {user_id}")
            return streak

        new_streak = compute_next_streak(streak.current_streak, streak.last_activity_date, now)
        if new_streak != streak.current_streak:
            logger.info(f"Streak for user {user_id}: {streak.current_streak} -> {new_streak}")

        streak.current_streak = new_streak
        streak.longest_streak = max(new_streak, streak.longest_streak or 0)
        streak.last_activity_date = now
        self.repo.update(self.db, streak)
        return streak
