"""
Points module.
"""
from .service import PointsService

__all__ = ["PointsService"]
