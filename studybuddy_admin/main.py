"""
StudyBuddy Admin — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from studybuddy_admin.config import configure_logging, get_settings
from studybuddy_admin.api.admin import router as admin_router
from studybuddy_admin.api.health import router as health_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Admin moderation backend for the StudyBuddy platform",
)

# Register routers
app.include_router(health_router)
app.include_router(admin_router)
