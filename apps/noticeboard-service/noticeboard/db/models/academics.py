from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from .base import Base, now_utc, new_id


class Section(Base):
    __tablename__ = 'sections'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    subject_id = Column(String(36), nullable=True)
    subject_name = Column(String(200), nullable=True)
    department_id = Column(String(36), nullable=True)
    class_teacher_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    __table_args__ = (
        Index('idx_sections_class_teacher_id', 'class_teacher_id'),
    )


class TimetableEntry(Base):
    __tablename__ = 'timetable_entries'
    id = Column(String(36), primary_key=True, default=new_id)
    teacher_id = Column(String(36), nullable=False)
    section_id = Column(String(36), ForeignKey('sections.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    __table_args__ = (
        Index('idx_timetable_entries_teacher_id', 'teacher_id'),
    )
