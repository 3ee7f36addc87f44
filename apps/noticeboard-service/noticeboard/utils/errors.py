"""
Error taxonomy for the notice engine.

Classification and visibility problems are resolved locally by the engine;
creation and mutation problems propagate to the caller as these exceptions.
"""
from typing import Optional


class NoticeboardError(ValueError):
    """Base class for notice engine errors."""


class InvalidTarget(NoticeboardError):
    """An addressing token cannot be classified into an audience."""

    def __init__(self, target, reason: Optional[str] = None):
        self.target = target
        message = reason or f"Invalid notice target: {target!r}"
        super().__init__(message)


class MissingField(NoticeboardError):
    """A required notice field is absent or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required")


class NotReactable(NoticeboardError):
    """Reactions were attempted on an item that does not accept them."""

    def __init__(self, notice_id=None, kind: Optional[str] = None):
        self.notice_id = notice_id
        self.kind = kind
        super().__init__(f"Notice {notice_id} of kind '{kind}' does not accept reactions")


class UnknownRole(NoticeboardError):
    """A viewer role is missing from the visibility decision table."""

    def __init__(self, role):
        self.role = role
        super().__init__(f"Unknown role: {role}")


class NotPermitted(NoticeboardError):
    """The viewer may not perform the requested action."""

    def __init__(self, action: str, reason: Optional[str] = None):
        self.action = action
        super().__init__(reason or f"Not allowed to {action}")
