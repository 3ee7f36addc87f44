"""
Section membership derivation for teachers.

A teacher may act on a section when they are its class teacher or when a
timetable entry schedules them there.
"""
from typing import Dict, FrozenSet, Iterable, List, Optional

from noticeboard.db import schemas


def class_teacher_sections(
    teacher_id: Optional[str],
    sections: Iterable[schemas.Section],
) -> List[schemas.Section]:
    """Sections whose class teacher is ``teacher_id``, in input order."""
    if not teacher_id:
        return []
    return [section for section in sections if section.class_teacher_id == teacher_id]


def accessible_sections(
    teacher_id: Optional[str],
    sections: Iterable[schemas.Section],
    timetable_entries: Iterable[schemas.TimetableEntry],
) -> FrozenSet[str]:
    """Union of class-teacher sections and timetable-assigned sections for ``teacher_id``."""
    if not teacher_id:
        return frozenset()

    section_ids = {section.id for section in class_teacher_sections(teacher_id, sections)}
    for entry in timetable_entries:
        if entry.teacher_id == teacher_id and entry.section_id:
            section_ids.add(entry.section_id)
    return frozenset(section_ids)


class SectionMembershipIndex:
    """Memoised ``accessible_sections`` over one snapshot."""

    def __init__(
        self,
        sections: Iterable[schemas.Section] = (),
        timetable_entries: Iterable[schemas.TimetableEntry] = (),
    ):
        self._sections = tuple(sections)
        self._timetable_entries = tuple(timetable_entries)
        self._cache: Dict[str, FrozenSet[str]] = {}

    @classmethod
    def from_snapshot(cls, snapshot: schemas.Snapshot) -> "SectionMembershipIndex":
        return cls(snapshot.sections, snapshot.timetable_entries)

    @property
    def sections(self):
        return self._sections

    def sections_for(self, teacher_id: Optional[str]) -> FrozenSet[str]:
        if not teacher_id:
            return frozenset()
        cached = self._cache.get(teacher_id)
        if cached is None:
            cached = accessible_sections(teacher_id, self._sections, self._timetable_entries)
            self._cache[teacher_id] = cached
        return cached
