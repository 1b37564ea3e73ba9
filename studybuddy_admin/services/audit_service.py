"""
Audit service — the append-only trail of admin actions.

Every successful moderation action writes exactly one entry
through log_action(), in the same session as the change it
describes. The caller's transaction decides whether both land.
"""

import enum
import json
import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from studybuddy_admin.exceptions import MetadataSerializationError
from studybuddy_admin.models.audit_log import AdminAuditLog
from studybuddy_admin.models.enums import AdminActionType, AuditTargetType
from studybuddy_admin.models.user import User

logger = logging.getLogger(__name__)


def _encode_value(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def serialize_metadata(metadata: dict) -> str:
    """
    Encode audit metadata as a JSON object.

    Datetimes become ISO-8601 strings and enums their values.
    Anything else JSON cannot represent raises
    MetadataSerializationError.
    """
    try:
        return json.dumps(
            metadata,
            default=_encode_value,
            sort_keys=True,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise MetadataSerializationError(str(e)) from e


class AuditService:

    def __init__(self, db: Session):
        self.db = db

    def log_action(
        self,
        admin: User,
        action_type: AdminActionType,
        target_type: AuditTargetType,
        target_id: int,
        reason: str,
        metadata: dict | None = None,
    ) -> AdminAuditLog:
        """
        Append one audit entry for an admin action.

        If the metadata cannot be serialized the entry is still
        written, with no metadata and metadata_unserializable
        set, so the trail stays machine-parseable.
        """
        metadata_json = None
        unserializable = False
        if metadata:
            try:
                metadata_json = serialize_metadata(metadata)
            except MetadataSerializationError as e:
                logger.warning(
                    "Unserializable metadata for %s on %s %s: %s",
                    action_type.value, target_type.value, target_id, e,
                )
                unserializable = True

        entry = AdminAuditLog(
            admin_user_id=admin.id,
            action_type=action_type,
            target_type=target_type,
            target_id=target_id,
            reason=reason,
            metadata_json=metadata_json,
            metadata_unserializable=unserializable,
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def list_entries(
        self,
        target_type: AuditTargetType | None = None,
        target_id: int | None = None,
        admin_user_id: int | None = None,
        action_type: AdminActionType | None = None,
        limit: int = 100,
    ) -> list[AdminAuditLog]:
        """Return matching audit entries, newest first."""
        query = select(AdminAuditLog)
        if target_type is not None:
            query = query.where(AdminAuditLog.target_type == target_type)
        if target_id is not None:
            query = query.where(AdminAuditLog.target_id == target_id)
        if admin_user_id is not None:
            query = query.where(AdminAuditLog.admin_user_id == admin_user_id)
        if action_type is not None:
            query = query.where(AdminAuditLog.action_type == action_type)

        entries = self.db.execute(
            query.order_by(
                AdminAuditLog.created_at.desc(), AdminAuditLog.id.desc()
            ).limit(limit)
        ).scalars().all()
        return list(entries)
