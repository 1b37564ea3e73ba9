"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before and dropped
after every test, so no test data persists.
"""

import os

# Must be set before the application modules read their settings.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from studybuddy_admin.main import app
from studybuddy_admin.models import (
    AdminAuditLog,
    Base,
    Course,
    Role,
    StudyGroup,
    User,
)
from studybuddy_admin.models.base import get_db


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def make_user(db_session):
    """Factory that persists a user and returns it."""
    def _make_user(username, role=Role.USER, **fields):
        user = User(
            username=username,
            email=f"{username}@studybuddy.test",
            role=role,
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("alice", role=Role.ADMIN)


@pytest.fixture
def other_admin(make_user):
    return make_user("bob", role=Role.ADMIN)


@pytest.fixture
def member(make_user):
    return make_user("carol")


@pytest.fixture
def make_course(db_session):
    """Factory that persists a course, optionally with students and groups."""
    def _make_course(code="CS101", name="Intro to CS", students=(), groups=()):
        course = Course(code=code, name=name, description="Basics")
        course.students.extend(students)
        for group_name, active in groups:
            course.groups.append(StudyGroup(name=group_name, is_active=active))
        db_session.add(course)
        db_session.commit()
        return course
    return _make_course


@pytest.fixture
def audit_count(db_session):
    """Return a callable counting audit entries currently stored."""
    def _count():
        return db_session.execute(
            select(func.count(AdminAuditLog.id))
        ).scalar_one()
    return _count


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    We override the get_db dependency so the FastAPI app
    uses our test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
