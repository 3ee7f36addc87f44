"""
Domain-split Pydantic schemas with a single aggregator.

Import order: base/simple types first to satisfy forward refs.
"""

from .base import DocumentModel, FrozenDocumentModel
from .users import UserBase, UserCreate, User
from .academics import SectionCreate, Section, TimetableEntryCreate, TimetableEntry
from .notices import Reaction, ReactionCreate, NoticeCreate, NoticeUpdate, Notice
from .snapshot import Snapshot
from .feed import ReactionSummary, FeedItem, NoticeFeed, ComposeOption, ComposeTargets

__all__ = [
    # base
    "DocumentModel",
    "FrozenDocumentModel",
    # users
    "UserBase",
    "UserCreate",
    "User",
    # academics
    "SectionCreate",
    "Section",
    "TimetableEntryCreate",
    "TimetableEntry",
    # notices
    "Reaction",
    "ReactionCreate",
    "NoticeCreate",
    "NoticeUpdate",
    "Notice",
    # snapshot/feed
    "Snapshot",
    "ReactionSummary",
    "FeedItem",
    "NoticeFeed",
    "ComposeOption",
    "ComposeTargets",
]
