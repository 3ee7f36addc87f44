"""
Notice vocabulary constants and helpers.

Centralized definitions for broadcast scopes, notice kinds, message types and
reaction types to eliminate string literals scattered across the codebase.
"""

from typing import FrozenSet, Tuple
from enum import Enum

# Broadcast scope literals accepted as notice targets
SCOPE_ALL = "All"
SCOPE_STAFF = "Staff"
SCOPE_TEACHER = "Teacher"
SCOPE_STUDENT = "Student"

# Ordered for display in the composer
BROADCAST_SCOPES: Tuple[str, ...] = (SCOPE_ALL, SCOPE_STAFF, SCOPE_TEACHER, SCOPE_STUDENT)
ALL_BROADCAST_SCOPES: FrozenSet[str] = frozenset(BROADCAST_SCOPES)

# Targets of the form section_<id> address one class section
SECTION_TARGET_PREFIX = "section_"

# Notice kinds
KIND_NOTICE = "notice"
KIND_PRIVATE_MESSAGE = "private_message"

# Message payload types; orthogonal to visibility
MESSAGE_TEXT = "text"
MESSAGE_IMAGE = "image"
MESSAGE_AUDIO = "audio"

# Reaction types, in display order
REACTION_LIKE = "like"
REACTION_HEART = "heart"
REACTION_HAHA = "haha"
REACTION_CRYING = "crying"
REACTION_TYPES: Tuple[str, ...] = (REACTION_LIKE, REACTION_HEART, REACTION_HAHA, REACTION_CRYING)


def is_broadcast_scope(value: str) -> bool:
    """Return True if the provided value is one of the broadcast scope literals."""
    return value in ALL_BROADCAST_SCOPES


def is_valid_reaction_type(value: str) -> bool:
    """Return True if the provided value is a supported reaction type."""
    return value in REACTION_TYPES


class NoticeKindEnum(str, Enum):
    """Enum for notice kinds used in schemas and validation."""
    notice = KIND_NOTICE
    private_message = KIND_PRIVATE_MESSAGE


class MessageTypeEnum(str, Enum):
    """Enum for message payload types."""
    text = MESSAGE_TEXT
    image = MESSAGE_IMAGE
    audio = MESSAGE_AUDIO


class ReactionTypeEnum(str, Enum):
    """Enum for reaction types."""
    like = REACTION_LIKE
    heart = REACTION_HEART
    haha = REACTION_HAHA
    crying = REACTION_CRYING
