"""Initial schema: users, courses, study groups, admin audit log

Revision ID: 0001
Revises:
Create Date: 2026-10-16 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = ("USER", "EXPERT", "ADMIN")
ACTION_TYPES = (
    "SUSPEND", "UNSUSPEND", "BAN", "UNBAN", "SOFT_DELETE", "RESTORE",
    "PERMANENT_DELETE", "ROLE_CHANGE", "DISABLE_LOGIN", "ENABLE_LOGIN",
    "COURSE_UPDATE", "COURSE_ARCHIVE", "COURSE_UNARCHIVE", "COURSE_DELETE",
    "COURSE_REMOVE_MEMBER", "GROUP_DELETE",
)
TARGET_TYPES = ("USER", "COURSE", "GROUP")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column(
            "role",
            sa.Enum(*ROLES, name="role_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("suspended_until", sa.DateTime(), nullable=True),
        sa.Column("suspension_reason", sa.Text(), nullable=True),
        sa.Column("banned_at", sa.DateTime(), nullable=True),
        sa.Column("ban_reason", sa.Text(), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_is_deleted", "users", ["is_deleted"])

    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(20), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_archived", sa.Boolean(), nullable=False),
        sa.Column("archived_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "course_students",
        sa.Column(
            "course_id",
            sa.Integer(),
            sa.ForeignKey("courses.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "study_groups",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column(
            "course_id",
            sa.Integer(),
            sa.ForeignKey("courses.id"),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_study_groups_course_id", "study_groups", ["course_id"])

    op.create_table(
        "admin_audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("admin_user_id", sa.Integer(), nullable=False),
        sa.Column(
            "action_type",
            sa.Enum(
                *ACTION_TYPES,
                name="admin_action_type_enum",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column(
            "target_type",
            sa.Enum(
                *TARGET_TYPES,
                name="audit_target_type_enum",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("metadata_json", sa.Text(), nullable=True),
        sa.Column("metadata_unserializable", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_admin_audit_log_admin_user_id", "admin_audit_log", ["admin_user_id"]
    )
    op.create_index(
        "ix_admin_audit_log_target_id", "admin_audit_log", ["target_id"]
    )
    op.create_index(
        "ix_admin_audit_log_created_at", "admin_audit_log", ["created_at"]
    )


def downgrade() -> None:
    op.drop_table("admin_audit_log")
    op.drop_table("study_groups")
    op.drop_table("course_students")
    op.drop_table("courses")
    op.drop_table("users")
    sa.Enum(name="admin_action_type_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="audit_target_type_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="role_enum").drop(op.get_bind(), checkfirst=True)
