"""
Shared API dependencies.

The surrounding application authenticates requests and forwards
the caller's username in the X-Admin-Username header. This module
turns that header into the acting admin User that every service
call receives explicitly.
"""

import logging

from fastapi import Depends, Header, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from studybuddy_admin.models.base import get_db
from studybuddy_admin.models.enums import Role
from studybuddy_admin.models.user import User

logger = logging.getLogger(__name__)


def get_current_admin(
    x_admin_username: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the acting admin for this request.

    401 when no known user is named, 403 when the user is not
    an admin or is currently not allowed to log in.
    """
    if not x_admin_username:
        raise HTTPException(status_code=401, detail="Not authenticated")

    admin = db.execute(
        select(User).where(User.username == x_admin_username)
    ).scalar_one_or_none()
    if not admin:
        raise HTTPException(status_code=401, detail="Not authenticated")

    if admin.role != Role.ADMIN or not admin.can_login():
        logger.warning("Rejected admin request from %s", x_admin_username)
        raise HTTPException(status_code=403, detail="Admin access required")

    return admin
