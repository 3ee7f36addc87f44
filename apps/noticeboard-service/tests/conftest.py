import os
from datetime import datetime, timedelta, UTC

os.environ.setdefault("PYTEST_RUNNING", "1")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from noticeboard.db import models, schemas
from noticeboard.db.repositories import directory as repo_directory
from noticeboard.utils.audiences import KIND_NOTICE
from noticeboard.utils.feature_flags import refresh_feature_flag_cache

BASE_DATE = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)

_GLOBAL_SESSION = None


@pytest.fixture
def _engine():
    # Fresh in-memory database per test; StaticPool keeps the schema on one connection
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    models.Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(_engine):
    session = sessionmaker(bind=_engine, autoflush=False, autocommit=False)()
    global _GLOBAL_SESSION
    _GLOBAL_SESSION = session
    try:
        yield session
    finally:
        _GLOBAL_SESSION = None
        session.close()


@pytest.fixture(autouse=True)
def _fresh_feature_flags():
    refresh_feature_flag_cache()
    yield
    refresh_feature_flag_cache()


# FastAPI dependency override so app endpoints share the test session
import noticeboard.db.database as db_module
from fastapi.testclient import TestClient
from noticeboard.api.main import app


def _override_get_db():
    if _GLOBAL_SESSION is not None:
        yield _GLOBAL_SESSION
        return
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[db_module.get_db] = _override_get_db


@pytest.fixture
def client(db_session):
    return TestClient(app)


# === Schema builders for pure engine tests ===

def _build_user(user_id, role, name=None, teacher_id=None, section_id=None):
    return schemas.User(
        id=user_id,
        name=name or user_id,
        role=role,
        teacher_id=teacher_id,
        section_id=section_id,
    )


def _build_section(section_id, name="A", class_teacher_id=None, subject_name=None):
    return schemas.Section(
        id=section_id,
        name=name,
        class_teacher_id=class_teacher_id,
        subject_name=subject_name,
    )


def _build_notice(
    notice_id,
    target,
    author_id="admin-1",
    kind=KIND_NOTICE,
    minutes=0,
    reactions=(),
    title=None,
):
    return schemas.Notice(
        id=notice_id,
        title=title or f"Notice {notice_id}",
        content="Body",
        date=BASE_DATE + timedelta(minutes=minutes),
        author_id=author_id,
        target=target,
        kind=kind,
        reactions=tuple(schemas.Reaction(user_id=u, type=t) for u, t in reactions),
    )


@pytest.fixture
def make_user():
    return _build_user


@pytest.fixture
def make_section():
    return _build_section


@pytest.fixture
def make_notice():
    return _build_notice


# === Seeded school directory ===

@pytest.fixture
def school(db_session):
    """
    One user per role plus three sections:
    S1 (class teacher T1), S2 (T1 teaches via timetable) and S3 (unrelated).
    """
    users = {
        "admin": schemas.UserCreate(id="admin-1", name="Principal Skinner", role="Admin"),
        "teacher": schemas.UserCreate(id="teacher-1", name="Edna Krabappel", role="Teacher", teacher_id="T1"),
        "other_teacher": schemas.UserCreate(id="teacher-2", name="Dewey Largo", role="Teacher", teacher_id="T2"),
        "student": schemas.UserCreate(id="student-1", name="Bart Simpson", role="Student", section_id="S1"),
        "outsider": schemas.UserCreate(id="student-2", name="Nelson Muntz", role="Student", section_id="S3"),
        "accountant": schemas.UserCreate(id="acct-1", name="Ned Books", role="Accountant"),
    }
    created = {key: repo_directory.create_user(db_session, u) for key, u in users.items()}

    for section in (
        schemas.SectionCreate(id="S1", name="A", subject_name="Mathematics", class_teacher_id="T1"),
        schemas.SectionCreate(id="S2", name="B", subject_name="History", class_teacher_id="T9"),
        schemas.SectionCreate(id="S3", name="C", subject_name="Music", class_teacher_id="T2"),
    ):
        repo_directory.create_section(db_session, section)
    repo_directory.create_timetable_entry(
        db_session, schemas.TimetableEntryCreate(teacher_id="T1", section_id="S2")
    )
    return {key: repo_directory.user_to_schema(u) for key, u in created.items()}
