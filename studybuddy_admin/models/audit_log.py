"""
Admin audit log model.

Records every privileged action for accountability and
forensic review. Every moderation action must be traceable
to the admin who performed it.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Text, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from studybuddy_admin.clock import utcnow
from studybuddy_admin.models.base import Base
from studybuddy_admin.models.enums import AdminActionType, AuditTargetType


class AdminAuditLog(Base):
    """
    Immutable record of an admin action.

    Audit logs are append-only. You never update or delete
    an audit record. admin_user_id and target_id are plain
    integers, not foreign keys, so entries outlive the
    permanent deletion of the users they mention.
    """

    __tablename__ = "admin_audit_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    admin_user_id: Mapped[int] = mapped_column(nullable=False, index=True)
    action_type: Mapped[AdminActionType] = mapped_column(
        SAEnum(
            AdminActionType,
            name="admin_action_type_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    target_type: Mapped[AuditTargetType] = mapped_column(
        SAEnum(
            AuditTargetType,
            name="audit_target_type_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    target_id: Mapped[int] = mapped_column(nullable=False, index=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    metadata_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Set when the action's metadata could not be encoded as JSON
    metadata_unserializable: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, index=True
    )

    def __repr__(self) -> str:
        return (
            f"<AdminAuditLog {self.action_type.value} "
            f"{self.target_type.value}:{self.target_id}>"
        )
