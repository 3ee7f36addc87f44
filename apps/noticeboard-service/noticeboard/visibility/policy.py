"""
Notice visibility decisions.

``is_visible`` is a short-circuit decision over one (notice, viewer) pair:
authorship, then direct recipients, then the audience of public notices
checked against the role decision table and section membership. Malformed
notices resolve to "not visible" instead of raising.
"""
import logging
from typing import Iterable, List, Optional

from noticeboard.db import schemas
from noticeboard.utils.audiences import KIND_NOTICE, KIND_PRIVATE_MESSAGE
from noticeboard.utils.errors import InvalidTarget
from noticeboard.utils.roles import (
    ROLE_TEACHER,
    SECTION_ROLES,
    resolve_role_policy,
    role_allows_broadcast,
    role_allows_moderation,
)
from .membership import SectionMembershipIndex
from .ordering import order_notices
from .targets import Audience, Broadcast, SectionScoped, classify, is_section_addressed

logger = logging.getLogger(__name__)


def viewer_section_ids(viewer: schemas.User, membership: SectionMembershipIndex):
    """Section ids the viewer belongs to for the purpose of section-scoped notices."""
    if viewer.role not in SECTION_ROLES:
        return frozenset()
    if viewer.role == ROLE_TEACHER:
        return membership.sections_for(viewer.teacher_id)
    return frozenset({viewer.section_id}) if viewer.section_id else frozenset()


def is_visible(
    notice: schemas.Notice,
    viewer: schemas.User,
    membership: Optional[SectionMembershipIndex] = None,
) -> bool:
    """Return True if ``notice`` belongs in ``viewer``'s feed."""
    if notice.author_id and notice.author_id == viewer.id:
        return True

    if notice.kind == KIND_PRIVATE_MESSAGE:
        return bool(viewer.id) and notice.target == viewer.id

    if notice.kind != KIND_NOTICE:
        return False

    try:
        audience = classify(notice.target)
    except InvalidTarget as exc:
        logger.debug("notice_unclassifiable: notice_id=%s error=%s", notice.id, exc)
        return False

    if isinstance(audience, Broadcast):
        return audience.scope in resolve_role_policy(viewer.role).broadcast_scopes

    if isinstance(audience, SectionScoped):
        index = membership if membership is not None else SectionMembershipIndex()
        return is_section_addressed(audience, viewer_section_ids(viewer, index))

    # A public notice addressed to a single user breaks the kind/audience invariant
    return False


def visible_notices(
    notices: Iterable[schemas.Notice],
    viewer: schemas.User,
    membership: Optional[SectionMembershipIndex] = None,
) -> List[schemas.Notice]:
    """Filter ``notices`` down to what ``viewer`` may see, newest first."""
    index = membership if membership is not None else SectionMembershipIndex()
    return order_notices(n for n in notices if is_visible(n, viewer, index))


def can_delete_notice(notice: schemas.Notice, viewer: Optional[schemas.User]) -> bool:
    """Authors may remove their own notices; moderators may remove any."""
    if viewer is None:
        return False
    if notice.author_id and notice.author_id == viewer.id:
        return True
    return role_allows_moderation(viewer.role)


can_edit_notice = can_delete_notice


def can_publish_to(audience: Audience, viewer: Optional[schemas.User]) -> bool:
    """Broadcasts need a role that may broadcast; sections and direct messages are open."""
    if viewer is None:
        return False
    if isinstance(audience, Broadcast):
        return role_allows_broadcast(viewer.role)
    return True
