"""
Family hub API: chores, points, streaks, achievements and rewards.
"""
__version__ = "1.0.0"
