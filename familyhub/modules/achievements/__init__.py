"""
Achievements module.
"""
from .service import AchievementService

__all__ = ["AchievementService"]
