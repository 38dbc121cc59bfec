"""
Streaks module.
"""
from .service import StreakService, compute_next_streak

__all__ = ["StreakService", "compute_next_streak"]
