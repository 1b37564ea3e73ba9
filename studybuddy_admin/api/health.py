"""
Health check endpoint.

Reports database connectivity and whether at least one
functional admin exists. An empty admin pool means nobody can
moderate the platform, which monitoring should surface.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from studybuddy_admin.models.base import get_db
from studybuddy_admin.models.enums import Role
from studybuddy_admin.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    db_status = "healthy"
    admin_count = None
    try:
        db.execute(text("SELECT 1"))
        admin_count = db.execute(
            select(func.count(User.id)).where(
                User.role == Role.ADMIN,
                User.is_deleted.is_(False),
                User.banned_at.is_(None),
            )
        ).scalar_one()
    except SQLAlchemyError as e:
        logger.error("Health check database query failed: %s", e)
        db_status = "unhealthy"

    healthy = db_status == "healthy" and bool(admin_count)
    return {
        "status": "healthy" if healthy else "degraded",
        "service": "studybuddy-admin",
        "database": db_status,
        "functional_admins": admin_count,
    }
