"""
Directory repository functions.

Users, sections and timetable entries, plus the full read snapshot the
visibility engine consumes.
"""
from __future__ import annotations

from typing import Optional, List
from sqlalchemy.orm import Session, selectinload

from noticeboard.db import models, schemas
from noticeboard.db.repositories import notices as repo_notices


def user_to_schema(db_user: models.User) -> schemas.User:
    return schemas.User(
        id=db_user.id,
        name=db_user.name,
        role=db_user.role,
        email=db_user.email,
        teacher_id=db_user.teacher_id,
        section_id=db_user.section_id,
    )


def section_to_schema(db_section: models.Section) -> schemas.Section:
    return schemas.Section(
        id=db_section.id,
        name=db_section.name,
        subject_id=db_section.subject_id,
        subject_name=db_section.subject_name,
        department_id=db_section.department_id,
        class_teacher_id=db_section.class_teacher_id,
    )


def timetable_entry_to_schema(db_entry: models.TimetableEntry) -> schemas.TimetableEntry:
    return schemas.TimetableEntry(
        id=db_entry.id,
        teacher_id=db_entry.teacher_id,
        section_id=db_entry.section_id,
    )


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    db_user = models.User(
        name=user.name,
        role=user.role,
        email=user.email,
        teacher_id=user.teacher_id,
        section_id=user.section_id,
    )
    if user.id:
        db_user.id = user.id
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_user(db: Session, user_id: str) -> Optional[models.User]:
    if not user_id:
        return None
    return db.query(models.User).filter(models.User.id == user_id).first()


def list_users(db: Session) -> List[models.User]:
    return db.query(models.User).order_by(models.User.created_at, models.User.id).all()


def create_section(db: Session, section: schemas.SectionCreate) -> models.Section:
    db_section = models.Section(
        name=section.name,
        subject_id=section.subject_id,
        subject_name=section.subject_name,
        department_id=section.department_id,
        class_teacher_id=section.class_teacher_id,
    )
    if section.id:
        db_section.id = section.id
    db.add(db_section)
    db.commit()
    db.refresh(db_section)
    return db_section


def list_sections(db: Session) -> List[models.Section]:
    return db.query(models.Section).order_by(models.Section.created_at, models.Section.id).all()


def create_timetable_entry(db: Session, entry: schemas.TimetableEntryCreate) -> models.TimetableEntry:
    db_entry = models.TimetableEntry(teacher_id=entry.teacher_id, section_id=entry.section_id)
    db.add(db_entry)
    db.commit()
    db.refresh(db_entry)
    return db_entry


def list_timetable_entries(db: Session) -> List[models.TimetableEntry]:
    return db.query(models.TimetableEntry).order_by(models.TimetableEntry.created_at, models.TimetableEntry.id).all()


def fetch_snapshot(db: Session) -> schemas.Snapshot:
    """
    Read every notice, user, section and timetable entry into a frozen snapshot.

    Notices come back in insertion order; date ordering is left to the
    visibility engine so ties keep that order.
    """
    db_notices = (
        db.query(models.Notice)
        .options(selectinload(models.Notice.reactions))
        .order_by(models.Notice.created_at, models.Notice.id)
        .all()
    )
    return schemas.Snapshot(
        notices=tuple(repo_notices.notice_to_schema(n) for n in db_notices),
        users=tuple(user_to_schema(u) for u in list_users(db)),
        sections=tuple(section_to_schema(s) for s in list_sections(db)),
        timetable_entries=tuple(timetable_entry_to_schema(e) for e in list_timetable_entries(db)),
    )
