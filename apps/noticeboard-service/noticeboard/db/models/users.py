from sqlalchemy import Column, String, DateTime, Index
from .base import Base, now_utc, new_id


class User(Base):
    __tablename__ = 'users'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=True, unique=True)
    # Admin | Teacher | Student | Accountant | Librarian | other staff roles
    role = Column(String(50), nullable=False)
    # Teacher record the user acts as; section assignments reference this id
    teacher_id = Column(String(36), nullable=True)
    # Students only
    section_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_users_role', 'role'),
        Index('idx_users_teacher_id', 'teacher_id'),
    )
