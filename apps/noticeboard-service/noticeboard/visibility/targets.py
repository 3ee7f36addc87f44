"""
Addressing token classification.

A notice ``target`` is classified once into a closed ``Audience`` variant and
consumed as that variant everywhere else, so the ``section_`` prefix
convention is only parsed here.
"""
from dataclasses import dataclass
from typing import AbstractSet, Mapping, Optional, Union

from noticeboard.utils.audiences import (
    KIND_NOTICE,
    KIND_PRIVATE_MESSAGE,
    SCOPE_ALL,
    SCOPE_STAFF,
    SCOPE_STUDENT,
    SCOPE_TEACHER,
    SECTION_TARGET_PREFIX,
    is_broadcast_scope,
)
from noticeboard.utils.errors import InvalidTarget


@dataclass(frozen=True)
class Broadcast:
    scope: str


@dataclass(frozen=True)
class SectionScoped:
    section_id: str


@dataclass(frozen=True)
class Direct:
    user_id: str


Audience = Union[Broadcast, SectionScoped, Direct]

_BROADCAST_LABELS = {
    SCOPE_ALL: "Public Notice",
    SCOPE_STAFF: "For Staff",
    SCOPE_TEACHER: "For Teachers",
    SCOPE_STUDENT: "For Students",
}


def classify(target) -> Audience:
    """
    Classify an addressing token.

    Raises:
        InvalidTarget: If ``target`` is empty or not a string
    """
    if not isinstance(target, str):
        raise InvalidTarget(target, f"Notice target must be a string, got {type(target).__name__}")
    if not target:
        raise InvalidTarget(target, "Notice target is empty")

    if target.startswith(SECTION_TARGET_PREFIX):
        return SectionScoped(target[len(SECTION_TARGET_PREFIX):])
    if is_broadcast_scope(target):
        return Broadcast(target)
    return Direct(target)


def format_target(audience: Audience) -> str:
    """Inverse of ``classify``."""
    if isinstance(audience, SectionScoped):
        return f"{SECTION_TARGET_PREFIX}{audience.section_id}"
    if isinstance(audience, Broadcast):
        return audience.scope
    if isinstance(audience, Direct):
        return audience.user_id
    raise InvalidTarget(audience, f"Unsupported audience: {audience!r}")


def is_section_addressed(audience: Audience, viewer_section_ids: AbstractSet[str]) -> bool:
    """Return True if ``audience`` is section-scoped to one of ``viewer_section_ids``."""
    return isinstance(audience, SectionScoped) and audience.section_id in viewer_section_ids


def kind_for_audience(audience: Audience) -> str:
    """Direct audiences carry private messages; everything else is a notice."""
    return KIND_PRIVATE_MESSAGE if isinstance(audience, Direct) else KIND_NOTICE


def audience_label(
    audience: Audience,
    users_by_id: Optional[Mapping[str, object]] = None,
    sections_by_id: Optional[Mapping[str, object]] = None,
) -> str:
    """Human-readable ribbon text for a notice audience."""
    if isinstance(audience, Broadcast):
        return _BROADCAST_LABELS.get(audience.scope, "Notice")
    if isinstance(audience, SectionScoped):
        section = (sections_by_id or {}).get(audience.section_id)
        if section is None:
            return "Section Notice"
        return f"For {section_display_name(section)}"
    recipient = (users_by_id or {}).get(audience.user_id)
    name = getattr(recipient, "name", None)
    return f"Private to {name or 'user'}"


def section_display_name(section) -> str:
    """``<subject> - Sec <name>``, or ``Sec <name>`` when the subject is unknown."""
    subject = getattr(section, "subject_name", None)
    if subject:
        return f"{subject} - Sec {section.name}"
    return f"Sec {section.name}"
