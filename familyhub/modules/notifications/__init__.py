"""
Notifications module.
"""
from .service import NotificationService

__all__ = ["NotificationService"]
