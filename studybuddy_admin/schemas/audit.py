"""
Pydantic schemas for reading the admin audit log.
"""

from datetime import datetime

from pydantic import BaseModel

from studybuddy_admin.models.enums import AdminActionType, AuditTargetType


class AuditLogResponse(BaseModel):
    id: int
    admin_user_id: int
    action_type: AdminActionType
    target_type: AuditTargetType
    target_id: int
    reason: str
    metadata_json: str | None
    metadata_unserializable: bool
    created_at: datetime

    model_config = {"from_attributes": True}
