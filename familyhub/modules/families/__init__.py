"""
Families module.
"""
from .models import Family, User
from .repository import UserRepository

__all__ = ["Family", "User", "UserRepository"]
