"""
Tests for audit metadata serialization and the audit sink.
"""

import json
from datetime import datetime

import pytest

from studybuddy_admin.exceptions import MetadataSerializationError
from studybuddy_admin.models import AdminActionType, AuditTargetType, Role
from studybuddy_admin.services.audit_service import (
    AuditService,
    serialize_metadata,
)


class TestSerializeMetadata:

    def test_plain_values(self):
        encoded = serialize_metadata({"userId": 7, "username": "carol"})
        assert json.loads(encoded) == {"userId": 7, "username": "carol"}

    def test_keys_are_sorted(self):
        assert serialize_metadata({"b": 1, "a": 2}) == '{"a": 2, "b": 1}'

    def test_datetimes_and_enums(self):
        encoded = serialize_metadata({
            "suspendedUntil": datetime(2026, 1, 2, 3, 4, 5),
            "newRole": Role.EXPERT,
        })
        assert json.loads(encoded) == {
            "suspendedUntil": "2026-01-02T03:04:05",
            "newRole": "EXPERT",
        }

    def test_unknown_type_raises(self):
        with pytest.raises(MetadataSerializationError):
            serialize_metadata({"blob": object()})

    def test_nan_raises(self):
        with pytest.raises(MetadataSerializationError):
            serialize_metadata({"score": float("nan")})


class TestLogAction:

    def test_writes_entry(self, db_session, admin):
        entry = AuditService(db_session).log_action(
            admin, AdminActionType.BAN, AuditTargetType.USER, 5, "abuse"
        )
        db_session.commit()

        assert entry.id is not None
        assert entry.admin_user_id == admin.id
        assert entry.reason == "abuse"
        assert entry.metadata_json is None
        assert entry.metadata_unserializable is False
        assert entry.created_at is not None

    def test_empty_metadata_stored_as_null(self, db_session, admin):
        entry = AuditService(db_session).log_action(
            admin, AdminActionType.COURSE_UPDATE, AuditTargetType.COURSE, 1,
            "nothing changed", {},
        )
        assert entry.metadata_json is None

    def test_unserializable_metadata_is_flagged(self, db_session, admin, caplog):
        entry = AuditService(db_session).log_action(
            admin, AdminActionType.ROLE_CHANGE, AuditTargetType.USER, 5,
            "odd", {"thing": object()},
        )
        db_session.commit()

        assert entry.id is not None
        assert entry.metadata_json is None
        assert entry.metadata_unserializable is True
        assert "Unserializable metadata" in caplog.text


class TestListEntries:

    def _seed(self, db_session, admin, other_admin):
        service = AuditService(db_session)
        service.log_action(admin, AdminActionType.BAN, AuditTargetType.USER, 10, "a")
        service.log_action(admin, AdminActionType.UNBAN, AuditTargetType.USER, 10, "b")
        service.log_action(
            other_admin, AdminActionType.COURSE_ARCHIVE, AuditTargetType.COURSE, 3, "c"
        )
        db_session.commit()
        return service

    def test_newest_first(self, db_session, admin, other_admin):
        service = self._seed(db_session, admin, other_admin)

        reasons = [e.reason for e in service.list_entries()]
        assert reasons == ["c", "b", "a"]

    def test_filters(self, db_session, admin, other_admin):
        service = self._seed(db_session, admin, other_admin)

        assert len(service.list_entries(target_type=AuditTargetType.USER)) == 2
        assert len(service.list_entries(target_id=3)) == 1
        assert len(service.list_entries(admin_user_id=other_admin.id)) == 1
        assert [
            e.reason
            for e in service.list_entries(action_type=AdminActionType.BAN)
        ] == ["a"]

    def test_limit(self, db_session, admin, other_admin):
        service = self._seed(db_session, admin, other_admin)
        assert len(service.list_entries(limit=2)) == 2
