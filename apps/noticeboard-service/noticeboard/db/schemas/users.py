from typing import Optional

from .base import DocumentModel, FrozenDocumentModel


class UserBase(DocumentModel):
    name: str
    role: str
    email: Optional[str] = None
    teacher_id: Optional[str] = None
    section_id: Optional[str] = None


class UserCreate(UserBase):
    id: Optional[str] = None


class User(FrozenDocumentModel):
    id: str
    name: str
    role: str
    email: Optional[str] = None
    teacher_id: Optional[str] = None
    section_id: Optional[str] = None
