"""
Course model.

A course groups enrolled students and the study groups
formed around it. Admins can archive a course instead of
deleting it when it still has active groups.
"""

from datetime import datetime

from sqlalchemy import (
    Column, String, Boolean, DateTime, Text, ForeignKey, Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studybuddy_admin.clock import utcnow
from studybuddy_admin.models.base import Base


# Enrollment: many students per course, many courses per student
course_students = Table(
    "course_students",
    Base.metadata,
    Column("course_id", ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_archived: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    archived_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    students: Mapped[list["User"]] = relationship(
        secondary=course_students, back_populates="courses"
    )
    groups: Mapped[list["StudyGroup"]] = relationship(
        back_populates="course", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Course {self.code}>"
