"""
Achievement service - catalog management and unlock evaluation.
"""
import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from familyhub.core.security import Relationship, authorize
from familyhub.modules.achievements.conditions import UserProgress, is_satisfied, parse_condition
from familyhub.modules.achievements.models import Achievement, UserAchievement
from familyhub.modules.achievements.repository import AchievementRepository
from familyhub.modules.achievements.schemas import (
    AchievementCreate,
    AchievementResponse,
    AchievementStatusResponse,
    CheckAchievementsResponse,
)
from familyhub.modules.families.models import User
from familyhub.modules.notifications.service import NotificationService
from familyhub.modules.points.service import PointsService
from familyhub.modules.streaks.service import StreakService
from familyhub.shared.constants import (
    DEFAULT_ACHIEVEMENTS,
    NOTIFICATION_ACHIEVEMENT_UNLOCKED,
    TRANSACTION_ACHIEVEMENT_UNLOCKED,
)

logger = logging.getLogger("familyhub.achievements")


class AchievementService:
    """Service for achievements"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AchievementRepository()
        self.points_service = PointsService(db)
        self.streak_service = StreakService(db)
        self.notification_service = NotificationService(db)

    def get_progress(self, user: User) -> UserProgress:
        """Collect the facts unlock conditions are evaluated against"""
        return UserProgress(
            total_verified_chores=self.repo.count_verified_chores(self.db, user.id),
            total_points=self.points_service.get_balance(user.id),
            current_streak=self.streak_service.get_current_streak(user.id),
        )

    def check_achievements(self, user: User) -> CheckAchievementsResponse:
        """
        Unlock every active achievement the user now qualifies for.

        Already unlocked achievements are skipped, so calling this repeatedly
        is safe. Each unlock (row, bonus points) is written in its own
        SAVEPOINT; losing a race on the unique (user, achievement) pair just
        means someone else unlocked it first.

        Returns:
            Newly unlocked achievements (possibly none; always none while
            gamification is disabled for the user)
        """
        if not user.gamification_enabled:
            return CheckAchievementsResponse(unlocked_count=0, achievements=[])

        catalog = self.repo.get_active(self.db)
        unlocked_ids = {ua.achievement_id for ua in self.repo.get_unlocked(self.db, user.id)}
        progress = self.get_progress(user)

        newly_unlocked: List[Achievement] = []
        for achievement in catalog:
            if achievement.id in unlocked_ids:
                continue
            if not is_satisfied(parse_condition(achievement.unlock_condition), progress):
                continue

            try:
                with self.db.begin_nested():
                    self.repo.create_unlock(self.db, UserAchievement(
                        user_id=user.id,
                        achievement_id=achievement.id,
                        progress=100,
                    ))
                    if achievement.points > 0:
                        self.points_service.award_points(
                            user_id=user.id,
                            amount=achievement.points,
                            type=TRANSACTION_ACHIEVEMENT_UNLOCKED,
                            description=f"Unlocked achievement: {achievement.name}",
                        )
            except IntegrityError:
                logger.info(f"Achievement {achievement.id} already unlocked for user {user.id}")
                continue

            bonus = f" (+{achievement.points} points)" if achievement.points > 0 else ""
            self.notification_service.notify(
                family_id=user.family_id,
                user_id=user.id,
                type=NOTIFICATION_ACHIEVEMENT_UNLOCKED,
                title="Achievement Unlocked!",
                message=f'You earned "{achievement.name}"{bonus}',
            )
            logger.info(f"User {user.id} unlocked achievement '{achievement.name}'")
            newly_unlocked.append(achievement)

        self.db.commit()
        return CheckAchievementsResponse(
            unlocked_count=len(newly_unlocked),
            achievements=[AchievementResponse.model_validate(a) for a in newly_unlocked],
        )

    def list_achievements(self, user: User) -> List[AchievementStatusResponse]:
        """Get active catalog with the caller's unlock status"""
        unlocked = {ua.achievement_id: ua for ua in self.repo.get_unlocked(self.db, user.id)}
        result = []
        for achievement in self.repo.get_active(self.db):
            unlock = unlocked.get(achievement.id)
            status = AchievementStatusResponse.model_validate(achievement)
            status.unlocked = unlock is not None
            status.unlocked_at = unlock.unlocked_at if unlock else None
            result.append(status)
        return result

    def create_achievement(self, user: User, data: AchievementCreate) -> Achievement:
        """Add an achievement to the catalog (admins only)"""
        authorize(user, None, Relationship.ADMIN)
        achievement = Achievement(**data.model_dump(), is_active=True)
        self.repo.create(self.db, achievement)
        self.db.commit()
        self.db.refresh(achievement)
        logger.info(f"Created achievement '{achievement.name}' ({achievement.unlock_condition})")
        return achievement

    def seed_defaults(self) -> int:
        """Seed the default catalog when it is empty"""
        if self.repo.count(self.db) > 0:
            return 0
        for entry in DEFAULT_ACHIEVEMENTS:
            self.repo.create(self.db, Achievement(**entry, is_active=True))
        self.db.commit()
        logger.info(f"Seeded {len(DEFAULT_ACHIEVEMENTS)} default achievements")
        return len(DEFAULT_ACHIEVEMENTS)
