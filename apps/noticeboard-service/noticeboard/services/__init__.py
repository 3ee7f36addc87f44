"""Business logic services package with public service helpers."""

from .notice_service import NoticeService, EMPTY_FEED_MESSAGE

__all__ = [
    "NoticeService",
    "EMPTY_FEED_MESSAGE",
]
