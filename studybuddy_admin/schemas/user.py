"""
Pydantic schemas for user moderation.

Every moderation request carries a non-empty reason; it is
stored verbatim in the audit log.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from studybuddy_admin.config import get_settings
from studybuddy_admin.models.enums import Role, UserStatus


# --- Request Schemas ---

class ReasonRequest(BaseModel):
    """Body for actions that only need a reason (ban, unban, restore, ...)."""
    reason: str = Field(min_length=1, max_length=1000)


class SuspendRequest(BaseModel):
    """
    Suspend a user for a number of days.

    A missing or non-positive number of days means an
    indefinite suspension. More days than an indefinite
    suspension lasts is rejected.
    """
    days: int | None = Field(
        default=None, le=get_settings().INDEFINITE_SUSPENSION_DAYS
    )
    reason: str = Field(min_length=1, max_length=1000)


class RoleUpdateRequest(BaseModel):
    role: Role
    reason: str = Field(min_length=1, max_length=1000)


class StatusUpdateRequest(BaseModel):
    """Enable (active=True) or disable (active=False) login."""
    active: bool
    reason: str = Field(min_length=1, max_length=1000)


# --- Response Schemas ---

class UserAdminResponse(BaseModel):
    """A user as seen from the admin console."""
    id: int
    username: str
    email: str
    role: Role
    is_active: bool
    suspended_until: datetime | None
    suspension_reason: str | None
    banned_at: datetime | None
    ban_reason: str | None
    is_deleted: bool
    deleted_at: datetime | None
    is_suspended: bool
    is_banned: bool
    status: UserStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
    success: bool = True
