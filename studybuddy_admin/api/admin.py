"""
Admin moderation API endpoints.

The API layer is thin: it resolves the acting admin, runs one
service call inside a transaction, and turns moderation errors
into HTTP responses. All rules live in the services.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from studybuddy_admin.api.deps import get_current_admin
from studybuddy_admin.clock import utcnow
from studybuddy_admin.config import get_settings
from studybuddy_admin.exceptions import ModerationError
from studybuddy_admin.models.base import get_db, transaction
from studybuddy_admin.models.enums import AdminActionType, AuditTargetType
from studybuddy_admin.models.user import User
from studybuddy_admin.services.audit_service import AuditService
from studybuddy_admin.services.content_moderation_service import (
    ContentModerationService,
)
from studybuddy_admin.services.user_moderation_service import (
    UserModerationService,
)
from studybuddy_admin.schemas.audit import AuditLogResponse
from studybuddy_admin.schemas.course import CourseUpdateRequest, CourseResponse
from studybuddy_admin.schemas.user import (
    ReasonRequest,
    SuspendRequest,
    RoleUpdateRequest,
    StatusUpdateRequest,
    UserAdminResponse,
    MessageResponse,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


def _http_error(error: ModerationError) -> HTTPException:
    return HTTPException(
        status_code=error.status_code,
        detail={"kind": error.kind, "message": str(error)},
    )


# --- User Queries ---

@router.get("/users", response_model=list[UserAdminResponse])
def list_users(
    include_deleted: bool = False,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """List users. Soft-deleted users are hidden unless requested."""
    return UserModerationService(db).list_users(include_deleted)


@router.get("/users/{user_id}", response_model=UserAdminResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        return UserModerationService(db).get_user(user_id)
    except ModerationError as e:
        raise _http_error(e)


# --- User Moderation ---

@router.put("/users/{user_id}/role", response_model=UserAdminResponse)
def update_user_role(
    user_id: int,
    request: RoleUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = UserModerationService(db)
    try:
        with transaction(db):
            user = service.update_user_role(
                admin, user_id, request.role, request.reason
            )
    except ModerationError as e:
        raise _http_error(e)
    return user


@router.put("/users/{user_id}/status", response_model=UserAdminResponse)
def update_user_status(
    user_id: int,
    request: StatusUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Enable or disable login without a ban or suspension."""
    service = UserModerationService(db)
    try:
        with transaction(db):
            if request.active:
                user = service.enable_login(admin, user_id, request.reason)
            else:
                user = service.disable_login(admin, user_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return user


@router.post("/users/{user_id}/suspend", response_model=UserAdminResponse)
def suspend_user(
    user_id: int,
    request: SuspendRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Suspend a user for a number of days, or indefinitely."""
    days = request.days
    if days is None or days <= 0:
        days = get_settings().INDEFINITE_SUSPENSION_DAYS
    suspended_until = utcnow() + timedelta(days=days)

    service = UserModerationService(db)
    try:
        with transaction(db):
            user = service.suspend_user(
                admin, user_id, suspended_until, request.reason
            )
    except ModerationError as e:
        raise _http_error(e)
    return user


@router.post("/users/{user_id}/unsuspend", response_model=UserAdminResponse)
def unsuspend_user(
    user_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = UserModerationService(db)
    try:
        with transaction(db):
            user = service.unsuspend_user(admin, user_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return user


@router.post("/users/{user_id}/ban", response_model=UserAdminResponse)
def ban_user(
    user_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = UserModerationService(db)
    try:
        with transaction(db):
            user = service.ban_user(admin, user_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return user


@router.post("/users/{user_id}/unban", response_model=UserAdminResponse)
def unban_user(
    user_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = UserModerationService(db)
    try:
        with transaction(db):
            user = service.unban_user(admin, user_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return user


@router.post("/users/{user_id}/soft-delete", response_model=UserAdminResponse)
def soft_delete_user(
    user_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = UserModerationService(db)
    try:
        with transaction(db):
            user = service.soft_delete_user(admin, user_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return user


@router.post("/users/{user_id}/restore", response_model=UserAdminResponse)
def restore_user(
    user_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = UserModerationService(db)
    try:
        with transaction(db):
            user = service.restore_user(admin, user_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return user


@router.delete("/users/{user_id}", response_model=MessageResponse)
def permanent_delete_user(
    user_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Permanently delete a user soft-deleted at least 30 days ago."""
    service = UserModerationService(db)
    try:
        with transaction(db):
            service.permanent_delete_user(admin, user_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return MessageResponse(message="User permanently deleted successfully")


# --- Course and Group Moderation ---

@router.put("/courses/{course_id}", response_model=CourseResponse)
def update_course(
    course_id: int,
    request: CourseUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = ContentModerationService(db)
    try:
        with transaction(db):
            course = service.update_course(
                admin, course_id, request.name, request.description,
                request.reason,
            )
    except ModerationError as e:
        raise _http_error(e)
    return course


@router.post("/courses/{course_id}/archive", response_model=CourseResponse)
def archive_course(
    course_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = ContentModerationService(db)
    try:
        with transaction(db):
            course = service.archive_course(admin, course_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return course


@router.post("/courses/{course_id}/unarchive", response_model=CourseResponse)
def unarchive_course(
    course_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = ContentModerationService(db)
    try:
        with transaction(db):
            course = service.unarchive_course(admin, course_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return course


@router.delete("/courses/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = ContentModerationService(db)
    try:
        with transaction(db):
            service.delete_course(admin, course_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return MessageResponse(message="Course deleted successfully")


@router.delete(
    "/courses/{course_id}/members/{user_id}",
    response_model=MessageResponse,
)
def remove_course_member(
    course_id: int,
    user_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = ContentModerationService(db)
    try:
        with transaction(db):
            service.remove_user_from_course(
                admin, course_id, user_id, request.reason
            )
    except ModerationError as e:
        raise _http_error(e)
    return MessageResponse(message="User removed from course")


@router.delete("/groups/{group_id}", response_model=MessageResponse)
def delete_group(
    group_id: int,
    request: ReasonRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    service = ContentModerationService(db)
    try:
        with transaction(db):
            service.delete_group(admin, group_id, request.reason)
    except ModerationError as e:
        raise _http_error(e)
    return MessageResponse(message="Group deleted successfully")


# --- Audit Log ---

@router.get("/audit-logs", response_model=list[AuditLogResponse])
def list_audit_logs(
    target_type: AuditTargetType | None = None,
    target_id: int | None = None,
    admin_user_id: int | None = None,
    action_type: AdminActionType | None = None,
    limit: int = 100,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Read the audit trail, newest first."""
    return AuditService(db).list_entries(
        target_type=target_type,
        target_id=target_id,
        admin_user_id=admin_user_id,
        action_type=action_type,
        limit=min(max(limit, 1), 500),
    )
