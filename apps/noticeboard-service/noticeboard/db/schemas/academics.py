from typing import Optional

from .base import DocumentModel, FrozenDocumentModel


class SectionCreate(DocumentModel):
    id: Optional[str] = None
    name: str
    subject_id: Optional[str] = None
    subject_name: Optional[str] = None
    department_id: Optional[str] = None
    class_teacher_id: Optional[str] = None


class Section(FrozenDocumentModel):
    id: str
    name: str
    subject_id: Optional[str] = None
    subject_name: Optional[str] = None
    department_id: Optional[str] = None
    class_teacher_id: Optional[str] = None


class TimetableEntryCreate(DocumentModel):
    teacher_id: str
    section_id: str


class TimetableEntry(FrozenDocumentModel):
    id: Optional[str] = None
    teacher_id: Optional[str] = None
    section_id: Optional[str] = None
