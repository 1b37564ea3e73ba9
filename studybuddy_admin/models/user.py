"""
User model.

Users are created at registration elsewhere in the application.
This backend only changes them through the moderation service,
which owns every write to the moderation columns below.
"""

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, Text, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studybuddy_admin.clock import utcnow
from studybuddy_admin.models.base import Base
from studybuddy_admin.models.course import course_students
from studybuddy_admin.models.enums import Role, UserStatus
from studybuddy_admin.models.moderation_state import ModerationState, can_login


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="role_enum", create_constraint=True),
        nullable=False,
        default=Role.USER,
    )

    # Moderation
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    suspended_until: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )
    suspension_reason: Mapped[str | None] = mapped_column(
        Text, nullable=True, default=None
    )
    banned_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )
    ban_reason: Mapped[str | None] = mapped_column(
        Text, nullable=True, default=None
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    courses: Mapped[list["Course"]] = relationship(
        secondary=course_students, back_populates="students"
    )

    @property
    def moderation_state(self) -> ModerationState:
        return ModerationState.from_user(self)

    @property
    def is_suspended(self) -> bool:
        return self.moderation_state.is_suspended()

    @property
    def is_banned(self) -> bool:
        return self.banned_at is not None

    @property
    def status(self) -> UserStatus:
        return self.moderation_state.status()

    def can_login(self, now: datetime | None = None) -> bool:
        return can_login(self.moderation_state, now)

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role.value})>"
