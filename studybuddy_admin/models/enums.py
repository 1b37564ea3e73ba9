"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored. An invalid role or audit
action is caught at the database level, not just in Python
validation.
"""

import enum


class Role(str, enum.Enum):
    """Account role. Only ADMIN may use the moderation endpoints."""
    USER = "USER"
    EXPERT = "EXPERT"
    ADMIN = "ADMIN"


class AdminActionType(str, enum.Enum):
    """Every kind of privileged action recorded in the audit log."""
    SUSPEND = "SUSPEND"
    UNSUSPEND = "UNSUSPEND"
    BAN = "BAN"
    UNBAN = "UNBAN"
    SOFT_DELETE = "SOFT_DELETE"
    RESTORE = "RESTORE"
    PERMANENT_DELETE = "PERMANENT_DELETE"
    ROLE_CHANGE = "ROLE_CHANGE"
    DISABLE_LOGIN = "DISABLE_LOGIN"
    ENABLE_LOGIN = "ENABLE_LOGIN"
    COURSE_UPDATE = "COURSE_UPDATE"
    COURSE_ARCHIVE = "COURSE_ARCHIVE"
    COURSE_UNARCHIVE = "COURSE_UNARCHIVE"
    COURSE_DELETE = "COURSE_DELETE"
    COURSE_REMOVE_MEMBER = "COURSE_REMOVE_MEMBER"
    GROUP_DELETE = "GROUP_DELETE"


class AuditTargetType(str, enum.Enum):
    """Kind of record an audit entry points at."""
    USER = "USER"
    COURSE = "COURSE"
    GROUP = "GROUP"


class UserStatus(str, enum.Enum):
    """Single display label summarising a user's moderation state."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    BANNED = "BANNED"
    DELETED = "DELETED"
