"""
Notice visibility engine.

Pure, synchronous functions over an in-memory snapshot: target
classification, teacher section membership, per-viewer visibility, ordering
and reaction aggregation.
"""

from .targets import (
    Audience,
    Broadcast,
    SectionScoped,
    Direct,
    classify,
    format_target,
    is_section_addressed,
    kind_for_audience,
    audience_label,
)
from .membership import SectionMembershipIndex, accessible_sections, class_teacher_sections
from .ordering import order_notices
from .policy import is_visible, visible_notices, can_delete_notice, can_edit_notice, can_publish_to
from .reactions import ReactionAggregator

__all__ = [
    "Audience",
    "Broadcast",
    "SectionScoped",
    "Direct",
    "classify",
    "format_target",
    "is_section_addressed",
    "kind_for_audience",
    "audience_label",
    "SectionMembershipIndex",
    "accessible_sections",
    "class_teacher_sections",
    "order_notices",
    "is_visible",
    "visible_notices",
    "can_delete_notice",
    "can_edit_notice",
    "can_publish_to",
    "ReactionAggregator",
]
