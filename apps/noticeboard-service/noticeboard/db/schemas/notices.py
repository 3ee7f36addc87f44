from datetime import datetime
from typing import Optional, Tuple

from pydantic import AliasChoices, Field

from noticeboard.utils.audiences import MessageTypeEnum, NoticeKindEnum, ReactionTypeEnum
from .base import DocumentModel, FrozenDocumentModel


class Reaction(FrozenDocumentModel):
    user_id: str
    type: ReactionTypeEnum


class ReactionCreate(DocumentModel):
    type: str


class NoticeCreate(DocumentModel):
    # Presence is checked by the service so callers get MissingField, not a schema error
    title: Optional[str] = None
    content: Optional[str] = None
    target: Optional[str] = None
    author_id: Optional[str] = None
    kind: Optional[NoticeKindEnum] = Field(default=None, validation_alias=AliasChoices("kind", "type"))
    message_type: MessageTypeEnum = MessageTypeEnum.text
    date: Optional[datetime] = None


class NoticeUpdate(DocumentModel):
    title: Optional[str] = None
    content: Optional[str] = None
    message_type: Optional[MessageTypeEnum] = None


class Notice(FrozenDocumentModel):
    id: str
    title: str
    content: str
    date: datetime
    author_id: str
    target: str
    kind: NoticeKindEnum = Field(
        default=NoticeKindEnum.notice,
        validation_alias=AliasChoices("kind", "type"),
    )
    message_type: MessageTypeEnum = MessageTypeEnum.text
    reactions: Tuple[Reaction, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
