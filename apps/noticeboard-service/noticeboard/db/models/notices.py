from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc, new_id


class Notice(Base):
    __tablename__ = 'notices'

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)
    # Publication time; created_at/updated_at are storage bookkeeping
    date = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    author_id = Column(String(36), nullable=False)
    target = Column(String(100), nullable=False)
    kind = Column(String(20), nullable=False, default='notice')
    message_type = Column(String(10), nullable=False, default='text')
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    reactions = relationship(
        "NoticeReaction",
        back_populates="notice",
        cascade="all, delete-orphan",
        order_by="[NoticeReaction.created_at, NoticeReaction.id]",
    )

    __table_args__ = (
        Index('idx_notices_date', 'date'),
        Index('idx_notices_author_id', 'author_id'),
        Index('idx_notices_target', 'target'),
        CheckConstraint("kind in ('notice','private_message')", name='ck_notices_kind'),
        CheckConstraint("message_type in ('text','image','audio')", name='ck_notices_message_type'),
    )


class NoticeReaction(Base):
    __tablename__ = 'notice_reactions'

    id = Column(String(36), primary_key=True, default=new_id)
    notice_id = Column(String(36), ForeignKey('notices.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(String(36), nullable=False)
    type = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    notice = relationship("Notice", back_populates="reactions")

    __table_args__ = (
        Index('idx_notice_reactions_unique', 'notice_id', 'user_id', unique=True),
        CheckConstraint("type in ('like','heart','haha','crying')", name='ck_notice_reactions_type'),
    )
