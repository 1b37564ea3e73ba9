"""
Content moderation service — admin actions on courses and groups.

Same contract as the user moderation service: checks first,
then the change, then exactly one audit entry. The caller
controls the commit.
"""

import logging

from sqlalchemy.orm import Session

from studybuddy_admin.clock import utcnow
from studybuddy_admin.exceptions import (
    CourseNotFoundError,
    GroupNotFoundError,
    UserNotFoundError,
    InvalidStateError,
)
from studybuddy_admin.models.course import Course
from studybuddy_admin.models.enums import AdminActionType, AuditTargetType
from studybuddy_admin.models.study_group import StudyGroup
from studybuddy_admin.models.user import User
from studybuddy_admin.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class ContentModerationService:

    def __init__(self, db: Session):
        self.db = db
        self.audit_service = AuditService(db)

    def _get_course(self, course_id: int) -> Course:
        course = self.db.get(Course, course_id)
        if not course:
            raise CourseNotFoundError(course_id)
        return course

    def _log(
        self,
        acting_admin: User,
        action_type: AdminActionType,
        target_type: AuditTargetType,
        target_id: int,
        reason: str,
        metadata: dict | None = None,
    ) -> None:
        self.audit_service.log_action(
            acting_admin, action_type, target_type, target_id, reason, metadata
        )
        logger.info(
            "Admin %s performed %s on %s %s",
            acting_admin.id, action_type.value, target_type.value, target_id,
        )

    def update_course(
        self,
        acting_admin: User,
        course_id: int,
        name: str | None,
        description: str | None,
        reason: str,
    ) -> Course:
        """
        Update a course's name and/or description.

        Only fields that actually change are applied and
        recorded (old and new value) in the audit metadata.
        """
        course = self._get_course(course_id)

        metadata = {}
        if name is not None and name != course.name:
            metadata["oldName"] = course.name
            metadata["newName"] = name
            course.name = name
        if description is not None and description != course.description:
            metadata["oldDescription"] = course.description
            metadata["newDescription"] = description
            course.description = description
        self.db.flush()

        self._log(
            acting_admin, AdminActionType.COURSE_UPDATE,
            AuditTargetType.COURSE, course_id, reason, metadata,
        )
        return course

    def archive_course(
        self, acting_admin: User, course_id: int, reason: str
    ) -> Course:
        course = self._get_course(course_id)
        if course.is_archived:
            raise InvalidStateError("Course is already archived")

        course.is_archived = True
        course.archived_at = utcnow()
        self.db.flush()

        self._log(
            acting_admin, AdminActionType.COURSE_ARCHIVE,
            AuditTargetType.COURSE, course_id, reason,
        )
        return course

    def unarchive_course(
        self, acting_admin: User, course_id: int, reason: str
    ) -> Course:
        course = self._get_course(course_id)
        if not course.is_archived:
            raise InvalidStateError("Course is not archived")

        course.is_archived = False
        course.archived_at = None
        self.db.flush()

        self._log(
            acting_admin, AdminActionType.COURSE_UNARCHIVE,
            AuditTargetType.COURSE, course_id, reason,
        )
        return course

    def delete_course(
        self, acting_admin: User, course_id: int, reason: str
    ) -> None:
        """
        Permanently delete a course.

        Refused while any of its study groups is still active;
        archive the course instead.
        """
        course = self._get_course(course_id)

        active_groups = [g for g in course.groups if g.is_active]
        if active_groups:
            raise InvalidStateError(
                "Cannot delete course with active study groups. "
                "Archive the course instead."
            )

        self._log(
            acting_admin, AdminActionType.COURSE_DELETE,
            AuditTargetType.COURSE, course_id, reason,
            {"code": course.code, "name": course.name},
        )
        self.db.delete(course)
        self.db.flush()

    def remove_user_from_course(
        self,
        acting_admin: User,
        course_id: int,
        user_id: int,
        reason: str,
    ) -> None:
        course = self._get_course(course_id)
        user = self.db.get(User, user_id)
        if not user:
            raise UserNotFoundError(user_id)

        if user not in course.students:
            raise InvalidStateError("User is not enrolled in this course")

        course.students.remove(user)
        self.db.flush()

        self._log(
            acting_admin, AdminActionType.COURSE_REMOVE_MEMBER,
            AuditTargetType.COURSE, course_id, reason,
            {"userId": user.id, "username": user.username},
        )

    def delete_group(
        self, acting_admin: User, group_id: int, reason: str
    ) -> None:
        group = self.db.get(StudyGroup, group_id)
        if not group:
            raise GroupNotFoundError(group_id)

        self._log(
            acting_admin, AdminActionType.GROUP_DELETE,
            AuditTargetType.GROUP, group_id, reason,
            {"name": group.name, "courseId": group.course_id},
        )
        self.db.delete(group)
        self.db.flush()
