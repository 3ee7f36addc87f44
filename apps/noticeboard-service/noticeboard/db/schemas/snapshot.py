from typing import Tuple

from .base import FrozenDocumentModel
from .academics import Section, TimetableEntry
from .notices import Notice
from .users import User


class Snapshot(FrozenDocumentModel):
    """Read-only view of everything the visibility engine needs for one request."""
    notices: Tuple[Notice, ...] = ()
    users: Tuple[User, ...] = ()
    sections: Tuple[Section, ...] = ()
    timetable_entries: Tuple[TimetableEntry, ...] = ()
