"""
Moderation state of a user, as a plain value.

A user's restrictions live on independent axes: a suspension,
a ban, and a soft deletion can all hold at once, and is_active
is a separate gate an admin flips by hand. ModerationState
captures those axes without touching the database so that
login eligibility can be decided (and tested) in one place.
"""

from dataclasses import dataclass
from datetime import datetime

from studybuddy_admin.clock import utcnow
from studybuddy_admin.models.enums import UserStatus


@dataclass(frozen=True)
class Suspension:
    until: datetime
    reason: str | None = None


@dataclass(frozen=True)
class Ban:
    at: datetime
    reason: str | None = None


@dataclass(frozen=True)
class Deletion:
    at: datetime | None = None


@dataclass(frozen=True)
class ModerationState:
    """Snapshot of every moderation axis for one user."""

    is_active: bool = True
    suspension: Suspension | None = None
    ban: Ban | None = None
    deletion: Deletion | None = None

    @classmethod
    def from_user(cls, user) -> "ModerationState":
        suspension = None
        if user.suspended_until is not None:
            suspension = Suspension(user.suspended_until, user.suspension_reason)

        ban = None
        if user.banned_at is not None:
            ban = Ban(user.banned_at, user.ban_reason)

        deletion = Deletion(user.deleted_at) if user.is_deleted else None

        return cls(
            is_active=bool(user.is_active),
            suspension=suspension,
            ban=ban,
            deletion=deletion,
        )

    def is_suspended(self, now: datetime | None = None) -> bool:
        """A suspension only counts while its end date is in the future."""
        if self.suspension is None:
            return False
        return self.suspension.until > (now or utcnow())

    @property
    def is_banned(self) -> bool:
        return self.ban is not None

    @property
    def is_deleted(self) -> bool:
        return self.deletion is not None

    def status(self, now: datetime | None = None) -> UserStatus:
        if self.is_deleted:
            return UserStatus.DELETED
        if self.is_banned:
            return UserStatus.BANNED
        if self.is_suspended(now):
            return UserStatus.SUSPENDED
        if not self.is_active:
            return UserStatus.INACTIVE
        return UserStatus.ACTIVE


def can_login(state: ModerationState, now: datetime | None = None) -> bool:
    """
    Decide whether a user in this state may log in.

    Login requires the active flag and no blocking restriction:
    not banned, not currently suspended, not soft-deleted. An
    expired suspension no longer blocks.
    """
    return (
        state.is_active
        and not state.is_banned
        and not state.is_suspended(now)
        and not state.is_deleted
    )

