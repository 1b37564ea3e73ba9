"""
Tests for the pure moderation state and login decision.

No database needed: ModerationState is a plain value.
"""

from datetime import datetime, timedelta

from studybuddy_admin.models import ModerationState, UserStatus, User, can_login
from studybuddy_admin.models.moderation_state import Ban, Deletion, Suspension

NOW = datetime(2026, 6, 1, 12, 0, 0)


def test_clean_state_can_login():
    assert can_login(ModerationState(), NOW) is True


def test_inactive_cannot_login():
    assert can_login(ModerationState(is_active=False), NOW) is False


def test_banned_cannot_login():
    state = ModerationState(ban=Ban(at=NOW - timedelta(days=1)))
    assert can_login(state, NOW) is False


def test_deleted_cannot_login():
    state = ModerationState(deletion=Deletion(at=NOW))
    assert can_login(state, NOW) is False


def test_active_suspension_blocks_login():
    state = ModerationState(suspension=Suspension(until=NOW + timedelta(hours=1)))
    assert state.is_suspended(NOW) is True
    assert can_login(state, NOW) is False


def test_expired_suspension_does_not_block():
    state = ModerationState(suspension=Suspension(until=NOW - timedelta(seconds=1)))
    assert state.is_suspended(NOW) is False
    assert can_login(state, NOW) is True


def test_suspension_ending_now_is_over():
    state = ModerationState(suspension=Suspension(until=NOW))
    assert state.is_suspended(NOW) is False


def test_ban_and_suspension_combine():
    state = ModerationState(
        suspension=Suspension(until=NOW + timedelta(days=1)),
        ban=Ban(at=NOW),
    )
    assert state.is_banned
    assert state.is_suspended(NOW)
    assert can_login(state, NOW) is False


class TestStatus:

    def test_deleted_wins(self):
        state = ModerationState(
            is_active=False,
            ban=Ban(at=NOW),
            deletion=Deletion(at=NOW),
        )
        assert state.status(NOW) == UserStatus.DELETED

    def test_banned_before_suspended(self):
        state = ModerationState(
            suspension=Suspension(until=NOW + timedelta(days=1)),
            ban=Ban(at=NOW),
        )
        assert state.status(NOW) == UserStatus.BANNED

    def test_suspended(self):
        state = ModerationState(suspension=Suspension(until=NOW + timedelta(days=1)))
        assert state.status(NOW) == UserStatus.SUSPENDED

    def test_inactive(self):
        assert ModerationState(is_active=False).status(NOW) == UserStatus.INACTIVE

    def test_active(self):
        assert ModerationState().status(NOW) == UserStatus.ACTIVE


def test_from_user_reads_every_axis():
    user = User(
        username="carol",
        email="carol@studybuddy.test",
        is_active=False,
        suspended_until=NOW + timedelta(days=2),
        suspension_reason="spam",
        banned_at=NOW,
        ban_reason="abuse",
        is_deleted=True,
        deleted_at=NOW,
    )

    state = ModerationState.from_user(user)

    assert state.is_active is False
    assert state.suspension == Suspension(NOW + timedelta(days=2), "spam")
    assert state.ban == Ban(NOW, "abuse")
    assert state.deletion == Deletion(NOW)


def test_from_user_without_restrictions():
    user = User(
        username="dan",
        email="dan@studybuddy.test",
        is_active=True,
        is_deleted=False,
    )

    state = ModerationState.from_user(user)

    assert state == ModerationState()
    assert user.can_login(NOW) is True
