"""
Import every model so they register with Base.metadata.
"""
from familyhub.modules.families.models import Family, User
from familyhub.modules.chores.models import Chore, ChoreAssignment
from familyhub.modules.points.models import PointTransaction, AllowancePayment
from familyhub.modules.streaks.models import UserStreak
from familyhub.modules.achievements.models import Achievement, UserAchievement
from familyhub.modules.rewards.models import Reward, RewardRedemption
from familyhub.modules.notifications.models import Notification

__all__ = [
    "Family",
    "User",
    "Chore",
    "ChoreAssignment",
    "PointTransaction",
    "AllowancePayment",
    "UserStreak",
    "Achievement",
    "UserAchievement",
    "Reward",
    "RewardRedemption",
    "Notification",
]
