"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc` and all ORM classes from one import location.
"""

from .base import Base, now_utc, new_id  # re-export

from .users import User
from .academics import Section, TimetableEntry
from .notices import Notice, NoticeReaction

__all__ = [
    # base
    "Base",
    "now_utc",
    "new_id",
    # directory
    "User",
    "Section",
    "TimetableEntry",
    # notices
    "Notice",
    "NoticeReaction",
]
