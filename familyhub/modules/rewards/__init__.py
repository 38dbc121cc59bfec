"""
Rewards module: family reward store and redemptions.
"""
from .service import RewardService

__all__ = ["RewardService"]
