"""
Custom exceptions for the family hub application.
Each exception carries the HTTP status code it is reported with.
"""
from typing import Any, List, Optional


class FamilyHubException(Exception):
    """Base exception for family hub application"""
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationMissingException(FamilyHubException):
    """Raised when no caller identity could be resolved"""
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class AuthorizationDeniedException(FamilyHubException):
    """Raised when the caller lacks the role or relationship required"""
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundException(FamilyHubException):
    """Raised when a referenced entity does not exist"""
    status_code = 404


class ChoreNotFoundException(NotFoundException):
    """Raised when a chore is not found"""
    def __init__(self, chore_id: int):
        self.chore_id = chore_id
        super().__init__("Chore not found")


class AssignmentNotFoundException(NotFoundException):
    """Raised when a chore assignment is not found"""
    def __init__(self, assignment_id: int):
        self.assignment_id = assignment_id
        super().__init__("Assignment not found")


class UserNotFoundException(NotFoundException):
    """Raised when a user (or family membership) is not found"""
    def __init__(self, user_id: Optional[int], message: str = "User not found"):
        self.user_id = user_id
        super().__init__(message)


class FamilyNotFoundException(NotFoundException):
    """Raised when the caller does not belong to a family"""
    def __init__(self):
        super().__init__("No family found")


class RewardNotFoundException(NotFoundException):
    def __init__(self, reward_id: int):
        self.reward_id = reward_id
        super().__init__("Reward not found")


class RedemptionNotFoundException(NotFoundException):
    def __init__(self, redemption_id: int):
        self.redemption_id = redemption_id
        super().__init__("Redemption not found")


class NotificationNotFoundException(NotFoundException):
    def __init__(self, notification_id: int):
        self.notification_id = notification_id
        super().__init__("Notification not found")


class PreconditionFailedException(FamilyHubException):
    """Raised when an entity is in the wrong state for a transition"""
    status_code = 400


class ValidationException(FamilyHubException):
    """Raised when data validation fails"""
    status_code = 400

    def __init__(self, field: str, message: str, errors: Optional[List[Any]] = None):
        self.field = field
        self.errors = errors or [{"field": field, "message": message}]
        super().__init__(f"Validation error for {field}: {message}")


class ConcurrentUpdateException(FamilyHubException):
    """Raised when a concurrent writer changed a row we were updating"""
    status_code = 409

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} was modified concurrently, please retry")
