"""
Caller identity and authorization.

The upstream identity provider authenticates the user and forwards the
resolved user id in the X-User-Id header together with the shared API key.
Every role or ownership check goes through authorize().
"""
from enum import Enum
from typing import Optional

from fastapi import Depends, Header, HTTPException, Security, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from familyhub.core import config
from familyhub.core.database import get_db
from familyhub.exceptions import (
    AuthenticationMissingException,
    AuthorizationDeniedException,
    FamilyNotFoundException,
)
from familyhub.modules.families.models import User
from familyhub.shared.constants import GUARDIAN_ROLES, ROLE_ADMIN

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(api_key: str = Security(api_key_header)):
    """Verify API key for authentication"""
    if not api_key or api_key != config.API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API Key"
        )
    return api_key


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    _: str = Depends(verify_api_key),
) -> User:
    """Resolve the calling user from the identity header"""
    if not x_user_id:
        raise AuthenticationMissingException()
    try:
        user_id = int(x_user_id)
    except ValueError:
        raise AuthenticationMissingException()

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthenticationMissingException()
    return user


class Relationship(str, Enum):
    """What the caller must be relative to a resource"""
    MEMBER = "member"      # belongs to the resource's family
    GUARDIAN = "guardian"  # parent or admin of the resource's family
    ADMIN = "admin"        # admin role, family independent
    SELF = "self"          # is the subject user


def is_guardian(user: User) -> bool:
    return user.role in GUARDIAN_ROLES


def require_family(user: User) -> int:
    """Return the caller's family id, or fail when they have none"""
    if user.family_id is None:
        raise FamilyNotFoundException()
    return user.family_id


def authorize(
    caller: User,
    family_id: Optional[int],
    relationship: Relationship,
    subject_user_id: Optional[int] = None,
    message: Optional[str] = None,
) -> None:
    """
    Check that the caller holds the required relationship to a resource.

    Args:
        caller: Authenticated user
        family_id: Family owning the resource (ignored for ADMIN)
        relationship: Required relationship
        subject_user_id: User the resource belongs to (required for SELF)
        message: Error message override

    Raises:
        AuthorizationDeniedException: If the relationship does not hold
    """
    if relationship == Relationship.ADMIN:
        allowed = caller.role == ROLE_ADMIN
    elif relationship == Relationship.SELF:
        allowed = subject_user_id is not None and caller.id == subject_user_id
    else:
        in_family = family_id is not None and caller.family_id == family_id
        if relationship == Relationship.GUARDIAN:
            allowed = in_family and is_guardian(caller)
        else:
            allowed = in_family

    if not allowed:
        raise AuthorizationDeniedException(message or "Forbidden")
