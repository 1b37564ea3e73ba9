"""
Tests for course and group moderation.
"""

import json

import pytest
from sqlalchemy import select

from studybuddy_admin.exceptions import (
    CourseNotFoundError,
    GroupNotFoundError,
    UserNotFoundError,
    InvalidStateError,
)
from studybuddy_admin.models import AdminAuditLog, Course, StudyGroup
from studybuddy_admin.models.base import transaction
from studybuddy_admin.services.content_moderation_service import (
    ContentModerationService,
)


def last_entry(db_session):
    return db_session.execute(
        select(AdminAuditLog).order_by(AdminAuditLog.id.desc()).limit(1)
    ).scalar_one()


class TestUpdateCourse:

    def test_records_only_changed_fields(self, db_session, admin, make_course):
        course = make_course()

        with transaction(db_session):
            updated = ContentModerationService(db_session).update_course(
                admin, course.id, "Intro to Computing", "Basics", "rename"
            )

        assert updated.name == "Intro to Computing"
        entry = last_entry(db_session)
        assert entry.action_type.value == "COURSE_UPDATE"
        assert entry.target_type.value == "COURSE"
        assert json.loads(entry.metadata_json) == {
            "oldName": "Intro to CS",
            "newName": "Intro to Computing",
        }

    def test_missing_course(self, db_session, admin):
        with pytest.raises(CourseNotFoundError):
            ContentModerationService(db_session).update_course(
                admin, 999, "x", None, "rename"
            )


class TestArchive:

    def test_archive_and_unarchive(self, db_session, admin, make_course):
        course = make_course()
        service = ContentModerationService(db_session)

        with transaction(db_session):
            service.archive_course(admin, course.id, "term ended")
        assert course.is_archived is True
        assert course.archived_at is not None

        with transaction(db_session):
            service.unarchive_course(admin, course.id, "offered again")
        assert course.is_archived is False
        assert course.archived_at is None

    def test_archive_twice_fails(self, db_session, admin, make_course, audit_count):
        course = make_course()
        service = ContentModerationService(db_session)
        with transaction(db_session):
            service.archive_course(admin, course.id, "term ended")

        with pytest.raises(InvalidStateError, match="already archived"):
            service.archive_course(admin, course.id, "again")
        assert audit_count() == 1

    def test_unarchive_active_course_fails(self, db_session, admin, make_course):
        course = make_course()

        with pytest.raises(InvalidStateError, match="not archived"):
            ContentModerationService(db_session).unarchive_course(
                admin, course.id, "huh"
            )


class TestDeleteCourse:

    def test_blocked_by_active_group(self, db_session, admin, make_course):
        course = make_course(groups=[("Night owls", True)])

        with pytest.raises(InvalidStateError, match="active study groups"):
            ContentModerationService(db_session).delete_course(
                admin, course.id, "cleanup"
            )

    def test_deletes_course_with_inactive_groups(
        self, db_session, admin, make_course
    ):
        course = make_course(groups=[("Old group", False)])
        course_id = course.id

        with transaction(db_session):
            ContentModerationService(db_session).delete_course(
                admin, course_id, "cleanup"
            )

        assert db_session.get(Course, course_id) is None
        assert db_session.execute(select(StudyGroup)).scalars().all() == []
        assert last_entry(db_session).action_type.value == "COURSE_DELETE"


class TestRemoveMember:

    def test_removes_enrolled_user(self, db_session, admin, member, make_course):
        course = make_course(students=[member])

        with transaction(db_session):
            ContentModerationService(db_session).remove_user_from_course(
                admin, course.id, member.id, "disruptive"
            )

        assert member not in course.students
        entry = last_entry(db_session)
        assert entry.action_type.value == "COURSE_REMOVE_MEMBER"
        assert json.loads(entry.metadata_json) == {
            "userId": member.id,
            "username": "carol",
        }

    def test_not_enrolled(self, db_session, admin, member, make_course):
        course = make_course()

        with pytest.raises(InvalidStateError, match="not enrolled"):
            ContentModerationService(db_session).remove_user_from_course(
                admin, course.id, member.id, "disruptive"
            )

    def test_missing_user(self, db_session, admin, make_course):
        course = make_course()

        with pytest.raises(UserNotFoundError):
            ContentModerationService(db_session).remove_user_from_course(
                admin, course.id, 999, "disruptive"
            )


class TestDeleteGroup:

    def test_deletes_group(self, db_session, admin, make_course):
        course = make_course(groups=[("Night owls", True)])
        group_id = course.groups[0].id

        with transaction(db_session):
            ContentModerationService(db_session).delete_group(
                admin, group_id, "spam group"
            )

        assert db_session.get(StudyGroup, group_id) is None
        entry = last_entry(db_session)
        assert entry.action_type.value == "GROUP_DELETE"
        assert entry.target_type.value == "GROUP"
        assert entry.target_id == group_id

    def test_missing_group(self, db_session, admin):
        with pytest.raises(GroupNotFoundError):
            ContentModerationService(db_session).delete_group(
                admin, 999, "spam group"
            )
