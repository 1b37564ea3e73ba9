"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from studybuddy_admin.models.base import Base
from studybuddy_admin.models.enums import (
    Role,
    AdminActionType,
    AuditTargetType,
    UserStatus,
)
from studybuddy_admin.models.moderation_state import ModerationState, can_login
from studybuddy_admin.models.course import Course, course_students
from studybuddy_admin.models.study_group import StudyGroup
from studybuddy_admin.models.user import User
from studybuddy_admin.models.audit_log import AdminAuditLog

__all__ = [
    "Base",
    "Role",
    "AdminActionType",
    "AuditTargetType",
    "UserStatus",
    "ModerationState",
    "can_login",
    "Course",
    "course_students",
    "StudyGroup",
    "User",
    "AdminAuditLog",
]
