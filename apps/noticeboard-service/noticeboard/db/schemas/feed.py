from typing import Dict, List, Optional

from .base import FrozenDocumentModel
from .notices import Notice


class ReactionSummary(FrozenDocumentModel):
    counts: Dict[str, int]
    reactor_names: Dict[str, List[str]]
    viewer_reaction: Optional[str] = None


class FeedItem(FrozenDocumentModel):
    notice: Notice
    author_name: str
    audience_label: str
    reactions: Optional[ReactionSummary] = None
    can_delete: bool = False


class NoticeFeed(FrozenDocumentModel):
    items: List[FeedItem]
    total: int
    is_empty: bool
    empty_message: Optional[str] = None


class ComposeOption(FrozenDocumentModel):
    value: str
    label: str


class ComposeTargets(FrozenDocumentModel):
    broadcasts: List[ComposeOption] = []
    my_sections: List[ComposeOption] = []
    direct_messages: List[ComposeOption] = []
