"""
Notice repository functions.

Implements notice CRUD and the per-(notice, user) reaction upsert. Deleting a
notice removes its reactions with it.
"""
from __future__ import annotations

from typing import Optional, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from noticeboard.db import models, schemas
from noticeboard.db.models.base import new_id, now_utc


def reaction_to_schema(db_reaction: models.NoticeReaction) -> schemas.Reaction:
    return schemas.Reaction(user_id=db_reaction.user_id, type=db_reaction.type)


def notice_to_schema(db_notice: models.Notice) -> schemas.Notice:
    return schemas.Notice(
        id=db_notice.id,
        title=db_notice.title,
        content=db_notice.content,
        date=db_notice.date,
        author_id=db_notice.author_id,
        target=db_notice.target,
        kind=db_notice.kind,
        message_type=db_notice.message_type,
        reactions=tuple(reaction_to_schema(r) for r in db_notice.reactions),
        created_at=db_notice.created_at,
        updated_at=db_notice.updated_at,
    )


def create_notice(db: Session, notice: schemas.NoticeCreate) -> models.Notice:
    db_notice = models.Notice(
        title=notice.title,
        content=notice.content,
        target=notice.target,
        author_id=notice.author_id,
        kind=notice.kind,
        message_type=notice.message_type,
        date=notice.date or now_utc(),
    )
    db.add(db_notice)
    db.commit()
    db.refresh(db_notice)
    return db_notice


def get_notice(db: Session, notice_id: str) -> Optional[models.Notice]:
    if not notice_id:
        return None
    return (
        db.query(models.Notice)
        .options(selectinload(models.Notice.reactions))
        .filter(models.Notice.id == notice_id)
        .first()
    )


def list_notices(db: Session, skip: int = 0, limit: Optional[int] = None) -> List[models.Notice]:
    q = (
        db.query(models.Notice)
        .options(selectinload(models.Notice.reactions))
        .order_by(models.Notice.date.desc())
        .offset(skip)
    )
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def update_notice(db: Session, notice_id: str, notice: schemas.NoticeUpdate) -> Optional[models.Notice]:
    db_notice = get_notice(db, notice_id)
    if db_notice:
        for key, value in notice.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(db_notice, key, value)
        db.commit()
        db.refresh(db_notice)
    return db_notice


def delete_notice(db: Session, notice_id: str) -> Optional[models.Notice]:
    if notice_id is None:
        return None
    try:
        db_notice = get_notice(db, notice_id)
        if db_notice:
            db.delete(db_notice)
            db.commit()
        return db_notice
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete notice {notice_id}: {str(e)}")


def _get_reaction(db: Session, notice_id: str, user_id: str) -> Optional[models.NoticeReaction]:
    return db.query(models.NoticeReaction).filter(
        models.NoticeReaction.notice_id == notice_id,
        models.NoticeReaction.user_id == user_id,
    ).first()


def _dialect_insert(db: Session):
    name = db.get_bind().dialect.name
    if name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    if name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    return None


def upsert_reaction(db: Session, notice_id: str, user_id: str, reaction_type: str) -> None:
    """Insert or replace the reaction of ``user_id`` on ``notice_id`` in one statement."""
    now = now_utc()
    insert = _dialect_insert(db)
    if insert is not None:
        stmt = insert(models.NoticeReaction).values(
            id=new_id(),
            notice_id=notice_id,
            user_id=user_id,
            type=reaction_type,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["notice_id", "user_id"],
            set_={"type": stmt.excluded["type"], "updated_at": now},
        )
        db.execute(stmt)
        db.commit()
        return

    # Other dialects: insert under a savepoint and update whichever row won a race
    existing = _get_reaction(db, notice_id, user_id)
    if existing is None:
        try:
            with db.begin_nested():
                db.add(models.NoticeReaction(notice_id=notice_id, user_id=user_id, type=reaction_type))
        except IntegrityError:
            existing = _get_reaction(db, notice_id, user_id)
    if existing is not None:
        existing.type = reaction_type
        existing.updated_at = now
    db.commit()


def remove_reaction(db: Session, notice_id: str, user_id: str) -> bool:
    deleted = db.query(models.NoticeReaction).filter(
        models.NoticeReaction.notice_id == notice_id,
        models.NoticeReaction.user_id == user_id,
    ).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)
