"""
User moderation service — guarded state transitions on users.

Each public method applies one moderation action to one user:
1. Checks every precondition (self-targeting, last admin, state)
2. Mutates the user
3. Appends exactly one audit entry
4. Flushes

A failed check raises before anything is written. The caller
wraps the call in transaction(), so the user change and its
audit entry commit together or not at all.

Lifting a ban or suspension never re-enables login on its own.
An admin has to call enable_login() explicitly.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from studybuddy_admin.clock import utcnow
from studybuddy_admin.config import get_settings
from studybuddy_admin.exceptions import (
    UserNotFoundError,
    SelfModificationError,
    SelfDemotionError,
    LastAdminError,
    InvalidStateError,
    TooSoonError,
    StillBannedError,
    StillSuspendedError,
)
from studybuddy_admin.models.enums import (
    Role,
    AdminActionType,
    AuditTargetType,
)
from studybuddy_admin.models.user import User
from studybuddy_admin.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class UserModerationService:
    """
    All moderation of user accounts passes through this service.

    The acting admin is passed explicitly to every operation;
    the service never looks up "who is calling" on its own.
    """

    def __init__(self, db: Session, grace_days: int | None = None):
        self.db = db
        self.audit_service = AuditService(db)
        if grace_days is None:
            grace_days = get_settings().PERMANENT_DELETE_GRACE_DAYS
        self.grace_days = grace_days

    # --- Guards ---

    def _get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    def _check_self_modification(
        self, acting_admin: User, user_id: int, action: str
    ) -> None:
        """Prevent an admin from locking themselves out."""
        if acting_admin.id == user_id:
            logger.warning(
                "Admin %s tried to %s their own account",
                acting_admin.id, action,
            )
            raise SelfModificationError(f"Cannot {action} your own account")

    def _count_functional_admins(self) -> int:
        """
        Count admins who are neither deleted nor banned.

        The rows are selected FOR UPDATE so a concurrent
        transaction acting on another admin waits for this one
        instead of reading the same count.
        """
        admin_ids = self.db.execute(
            select(User.id)
            .where(
                User.role == Role.ADMIN,
                User.is_deleted.is_(False),
                User.banned_at.is_(None),
            )
            .with_for_update()
        ).scalars().all()
        return len(admin_ids)

    def _check_last_admin(self, user: User) -> None:
        """Refuse any change that would leave no functional admin."""
        if user.role != Role.ADMIN:
            return
        if self._count_functional_admins() <= 1:
            logger.warning("Refused to modify last admin account %s", user.id)
            raise LastAdminError("Cannot modify the last admin account")

    def _log(
        self,
        acting_admin: User,
        action_type: AdminActionType,
        user_id: int,
        reason: str,
        metadata: dict | None = None,
    ) -> None:
        self.audit_service.log_action(
            acting_admin,
            action_type,
            AuditTargetType.USER,
            user_id,
            reason,
            metadata,
        )
        logger.info(
            "Admin %s performed %s on user %s",
            acting_admin.id, action_type.value, user_id,
        )

    # --- Restrictions ---

    def suspend_user(
        self,
        acting_admin: User,
        user_id: int,
        suspended_until: datetime,
        reason: str,
    ) -> User:
        """
        Suspend a user until the given time.

        is_active is left alone: the suspension blocks login by
        itself while it lasts, and stops blocking once it expires.
        """
        self._check_self_modification(acting_admin, user_id, "suspend")
        user = self._get_user(user_id)

        user.suspended_until = suspended_until
        user.suspension_reason = reason
        self.db.flush()

        self._log(
            acting_admin, AdminActionType.SUSPEND, user_id, reason,
            {"suspendedUntil": suspended_until},
        )
        return user

    def ban_user(self, acting_admin: User, user_id: int, reason: str) -> User:
        """Ban a user and disable their login."""
        self._check_self_modification(acting_admin, user_id, "ban")
        user = self._get_user(user_id)
        self._check_last_admin(user)

        user.banned_at = utcnow()
        user.ban_reason = reason
        user.is_active = False
        self.db.flush()

        self._log(acting_admin, AdminActionType.BAN, user_id, reason)
        return user

    def unsuspend_user(
        self, acting_admin: User, user_id: int, reason: str
    ) -> User:
        """
        Remove a suspension.

        Only the suspension fields change. A user disabled via
        disable_login() stays disabled.
        """
        user = self._get_user(user_id)

        user.suspended_until = None
        user.suspension_reason = None
        self.db.flush()

        self._log(acting_admin, AdminActionType.UNSUSPEND, user_id, reason)
        return user

    def unban_user(self, acting_admin: User, user_id: int, reason: str) -> User:
        """
        Remove a ban.

        Only the ban fields change. Unbanning a user who is not
        banned is allowed and still recorded.
        """
        user = self._get_user(user_id)

        user.banned_at = None
        user.ban_reason = None
        self.db.flush()

        self._log(acting_admin, AdminActionType.UNBAN, user_id, reason)
        return user

    # --- Deletion ---

    def soft_delete_user(
        self, acting_admin: User, user_id: int, reason: str
    ) -> User:
        """Hide a user and start the permanent deletion grace period."""
        self._check_self_modification(acting_admin, user_id, "delete")
        user = self._get_user(user_id)
        self._check_last_admin(user)

        user.is_deleted = True
        user.deleted_at = utcnow()
        user.is_active = False
        self.db.flush()

        self._log(acting_admin, AdminActionType.SOFT_DELETE, user_id, reason)
        return user

    def restore_user(self, acting_admin: User, user_id: int, reason: str) -> User:
        """
        Undo a soft delete.

        Login is re-enabled only when no ban or active suspension
        is still in place.
        """
        user = self._get_user(user_id)
        if not user.is_deleted:
            raise InvalidStateError("User is not deleted")

        user.is_deleted = False
        user.deleted_at = None
        if not user.is_banned and not user.is_suspended:
            user.is_active = True
        self.db.flush()

        self._log(acting_admin, AdminActionType.RESTORE, user_id, reason)
        return user

    def permanent_delete_user(
        self, acting_admin: User, user_id: int, reason: str
    ) -> None:
        """
        Remove a soft-deleted user for good.

        Only allowed once the grace period since soft deletion
        has fully elapsed. The audit entry is written before the
        row is removed.
        """
        self._check_self_modification(
            acting_admin, user_id, "permanently delete"
        )
        user = self._get_user(user_id)
        self._check_last_admin(user)

        if not user.is_deleted:
            raise InvalidStateError(
                "User must be soft deleted before permanent deletion"
            )

        cutoff = utcnow() - timedelta(days=self.grace_days)
        if user.deleted_at is not None and user.deleted_at > cutoff:
            raise TooSoonError(
                f"Cannot permanently delete user until {self.grace_days} "
                f"days after soft deletion"
            )

        self._log(
            acting_admin, AdminActionType.PERMANENT_DELETE, user_id, reason,
            {"username": user.username, "email": user.email},
        )
        self.db.delete(user)
        self.db.flush()

    # --- Role and login ---

    def update_user_role(
        self,
        acting_admin: User,
        user_id: int,
        new_role: Role,
        reason: str,
    ) -> User:
        """Change a user's role, guarding against losing all admins."""
        user = self._get_user(user_id)
        demoting_admin = user.role == Role.ADMIN and new_role != Role.ADMIN

        if demoting_admin and acting_admin.id == user_id:
            logger.warning("Admin %s tried to remove their own admin role", user_id)
            raise SelfDemotionError("Cannot remove your own admin role")

        if demoting_admin:
            self._check_last_admin(user)

        old_role = user.role
        user.role = new_role
        self.db.flush()

        self._log(
            acting_admin, AdminActionType.ROLE_CHANGE, user_id, reason,
            {"oldRole": old_role, "newRole": new_role},
        )
        return user

    def disable_login(self, acting_admin: User, user_id: int, reason: str) -> User:
        """Turn off login without a ban or suspension."""
        self._check_self_modification(acting_admin, user_id, "disable login for")
        user = self._get_user(user_id)

        user.is_active = False
        self.db.flush()

        self._log(acting_admin, AdminActionType.DISABLE_LOGIN, user_id, reason)
        return user

    def enable_login(self, acting_admin: User, user_id: int, reason: str) -> User:
        """
        Turn login back on.

        Refused while the user is banned or suspended; those
        restrictions must be lifted first.
        """
        user = self._get_user(user_id)

        if user.is_banned:
            raise StillBannedError(
                "Cannot enable login for banned user. Unban first."
            )
        if user.is_suspended:
            raise StillSuspendedError(
                "Cannot enable login for suspended user. Unsuspend first."
            )

        user.is_active = True
        self.db.flush()

        self._log(acting_admin, AdminActionType.ENABLE_LOGIN, user_id, reason)
        return user

    # --- Queries ---

    def get_user(self, user_id: int) -> User:
        """Get a user by ID, including soft-deleted users."""
        return self._get_user(user_id)

    def list_users(self, include_deleted: bool = False) -> list[User]:
        """List users, hiding soft-deleted ones unless asked."""
        query = select(User).order_by(User.id)
        if not include_deleted:
            query = query.where(User.is_deleted.is_(False))
        return list(self.db.execute(query).scalars().all())
