"""Business logic services."""

from studybuddy_admin.services.audit_service import AuditService, serialize_metadata
from studybuddy_admin.services.user_moderation_service import UserModerationService
from studybuddy_admin.services.content_moderation_service import (
    ContentModerationService,
)

__all__ = [
    "AuditService",
    "serialize_metadata",
    "UserModerationService",
    "ContentModerationService",
]
