"""
Notice service: publishing, per-viewer feeds, reactions and moderation.

Bridges the persistence collaborator and the pure visibility engine. Reads
fetch a fresh snapshot; every decision over it is made by
``noticeboard.visibility``.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from noticeboard.db import schemas
from noticeboard.db.repositories import directory as repo_directory
from noticeboard.db.repositories import notices as repo_notices
from noticeboard.utils.audiences import (
    BROADCAST_SCOPES,
    KIND_NOTICE,
    KIND_PRIVATE_MESSAGE,
    SCOPE_ALL,
    SCOPE_STAFF,
    SCOPE_STUDENT,
    SCOPE_TEACHER,
)
from noticeboard.utils.errors import InvalidTarget, MissingField, NotPermitted
from noticeboard.utils.feature_flags import reaction_toggle_off_enabled
from noticeboard.utils.roles import ROLE_STUDENT, role_allows_broadcast
from noticeboard.visibility import (
    Direct,
    ReactionAggregator,
    SectionMembershipIndex,
    SectionScoped,
    audience_label,
    can_delete_notice,
    can_publish_to,
    class_teacher_sections,
    classify,
    format_target,
    is_visible,
    kind_for_audience,
    visible_notices,
)
from noticeboard.visibility.targets import section_display_name

logger = logging.getLogger(__name__)

EMPTY_FEED_MESSAGE = "No relevant notices or messages found."
UNKNOWN_AUTHOR_NAME = "School Admin"

_BROADCAST_COMPOSE_LABELS = {
    SCOPE_ALL: "Everyone (All Staff & Students)",
    SCOPE_STAFF: "All Staff Members",
    SCOPE_TEACHER: "All Teachers",
    SCOPE_STUDENT: "All Students",
}

# Checked in this order so the first missing field is reported
_REQUIRED_FIELDS = (
    ("title", "title"),
    ("content", "content"),
    ("target", "target"),
    ("author_id", "authorId"),
)


class NoticeService:
    """Service class for notice operations scoped to one database session."""

    def __init__(self, db: Session, aggregator: Optional[ReactionAggregator] = None):
        self.db = db
        if aggregator is None:
            aggregator = ReactionAggregator(toggle_off=reaction_toggle_off_enabled())
        self.aggregator = aggregator

    # === Reads ===

    def get_snapshot(self) -> schemas.Snapshot:
        """
        Fetch the full read snapshot.

        A failed fetch degrades to an empty snapshot so feeds render their
        empty state instead of an error.
        """
        try:
            return repo_directory.fetch_snapshot(self.db)
        except SQLAlchemyError as exc:
            logger.error("snapshot_fetch_failed: %s", exc)
            self.db.rollback()
            return schemas.Snapshot()

    def get_viewer(self, user_id: str) -> Optional[schemas.User]:
        db_user = repo_directory.get_user(self.db, user_id)
        return repo_directory.user_to_schema(db_user) if db_user else None

    def get_notice(self, notice_id: str) -> Optional[schemas.Notice]:
        db_notice = repo_notices.get_notice(self.db, notice_id)
        return repo_notices.notice_to_schema(db_notice) if db_notice else None

    def get_visible_notices(
        self,
        viewer: schemas.User,
        snapshot: Optional[schemas.Snapshot] = None,
    ) -> List[schemas.Notice]:
        snapshot = snapshot if snapshot is not None else self.get_snapshot()
        return visible_notices(snapshot.notices, viewer, SectionMembershipIndex.from_snapshot(snapshot))

    def get_feed(
        self,
        viewer: schemas.User,
        snapshot: Optional[schemas.Snapshot] = None,
    ) -> schemas.NoticeFeed:
        """
        Build the annotated feed for ``viewer``.

        Each visible notice carries its author name, audience label, reaction
        summary (public notices only) and whether the viewer may delete it.
        """
        snapshot = snapshot if snapshot is not None else self.get_snapshot()
        notices = self.get_visible_notices(viewer, snapshot)

        users_by_id: Dict[str, schemas.User] = {u.id: u for u in snapshot.users}
        users_by_id.setdefault(viewer.id, viewer)
        sections_by_id = {s.id: s for s in snapshot.sections}

        items = []
        for notice in notices:
            author = users_by_id.get(notice.author_id)
            reactions = None
            if notice.kind == KIND_NOTICE:
                reactions = self.aggregator.aggregate(notice, viewer.id, users_by_id)
            items.append(
                schemas.FeedItem(
                    notice=notice,
                    author_name=author.name if author is not None else UNKNOWN_AUTHOR_NAME,
                    audience_label=self._label_for(notice, users_by_id, sections_by_id),
                    reactions=reactions,
                    can_delete=can_delete_notice(notice, viewer),
                )
            )

        return schemas.NoticeFeed(
            items=items,
            total=len(items),
            is_empty=not items,
            empty_message=EMPTY_FEED_MESSAGE if not items else None,
        )

    def compose_targets(
        self,
        viewer: schemas.User,
        snapshot: Optional[schemas.Snapshot] = None,
    ) -> schemas.ComposeTargets:
        """Recipients ``viewer`` can address, grouped the way the composer shows them."""
        snapshot = snapshot if snapshot is not None else self.get_snapshot()

        broadcasts = []
        if role_allows_broadcast(viewer.role):
            broadcasts = [
                schemas.ComposeOption(value=scope, label=_BROADCAST_COMPOSE_LABELS[scope])
                for scope in BROADCAST_SCOPES
            ]

        my_sections = [
            schemas.ComposeOption(
                value=format_target(SectionScoped(section.id)),
                label=section_display_name(section),
            )
            for section in class_teacher_sections(viewer.teacher_id, snapshot.sections)
        ]

        direct_messages = [
            schemas.ComposeOption(value=user.id, label=f"{user.name} ({user.role})")
            for user in snapshot.users
            if user.role and user.role != ROLE_STUDENT and user.id != viewer.id
        ]

        return schemas.ComposeTargets(
            broadcasts=broadcasts,
            my_sections=my_sections,
            direct_messages=direct_messages,
        )

    # === Mutations ===

    def publish(
        self,
        payload: schemas.NoticeCreate,
        viewer: Optional[schemas.User] = None,
    ) -> schemas.Notice:
        """
        Create a notice or private message.

        When ``viewer`` is given the notice is published on their behalf: the
        author must be the viewer and broadcasts need a broadcasting role.

        Raises:
            MissingField: If title, content, target or authorId is empty
            InvalidTarget: If the kind does not match the audience of the target
            NotPermitted: If the viewer may not publish this notice
        """
        for attr, field_name in _REQUIRED_FIELDS:
            if not str(getattr(payload, attr) or "").strip():
                raise MissingField(field_name)

        audience = classify(payload.target)
        if viewer is not None:
            if payload.author_id != viewer.id:
                raise NotPermitted("publish", "authorId must be the current user")
            if not can_publish_to(audience, viewer):
                raise NotPermitted("publish", f"Role '{viewer.role}' may not broadcast to '{payload.target}'")
        expected_kind = kind_for_audience(audience)
        kind = payload.kind or expected_kind
        if kind != expected_kind:
            raise InvalidTarget(
                payload.target,
                f"A {kind} cannot be addressed to '{payload.target}'",
            )

        db_notice = repo_notices.create_notice(self.db, payload.model_copy(update={"kind": kind}))
        logger.info(
            "notice_published: id=%s kind=%s target=%s author=%s",
            db_notice.id, kind, db_notice.target, db_notice.author_id,
        )
        return repo_notices.notice_to_schema(db_notice)

    def edit(self, notice_id: str, payload: schemas.NoticeUpdate) -> Optional[schemas.Notice]:
        """Update title, content or message type. The target never changes."""
        for attr in ("title", "content"):
            value = getattr(payload, attr)
            if value is not None and not str(value).strip():
                raise MissingField(attr)
        db_notice = repo_notices.update_notice(self.db, notice_id, payload)
        return repo_notices.notice_to_schema(db_notice) if db_notice else None

    def delete(self, notice_id: str) -> bool:
        """Delete a notice together with all of its reactions."""
        deleted = repo_notices.delete_notice(self.db, notice_id)
        if deleted is None:
            return False
        logger.info("notice_deleted: id=%s", notice_id)
        return True

    def react(
        self,
        notice_id: str,
        user_id: str,
        reaction_type: str,
        viewer: Optional[schemas.User] = None,
    ) -> Optional[schemas.Notice]:
        """
        Apply ``user_id``'s reaction and persist the per-user result.

        Returns the updated notice, or None if the notice does not exist or,
        when ``viewer`` is given, is not visible to that viewer.

        Raises:
            NotReactable: If the notice is a private message
            MissingField: If ``user_id`` is empty
            ValueError: If ``reaction_type`` is unknown
        """
        notice = self.get_notice(notice_id)
        if notice is None:
            return None
        if viewer is not None and not is_visible(notice, viewer, self._membership_index()):
            logger.info("reaction_hidden_notice: notice_id=%s user_id=%s", notice_id, viewer.id)
            return None

        before = self.aggregator.reaction_of(notice, user_id)
        updated = self.aggregator.upsert(notice, user_id, reaction_type)
        after = self.aggregator.reaction_of(updated, user_id)

        if after is None:
            repo_notices.remove_reaction(self.db, notice_id, user_id)
        elif after != before:
            repo_notices.upsert_reaction(self.db, notice_id, user_id, after)
        logger.info("reaction_stored: notice_id=%s user_id=%s type=%s", notice_id, user_id, after)

        return self.get_notice(notice_id)

    def _membership_index(self) -> SectionMembershipIndex:
        return SectionMembershipIndex(
            (repo_directory.section_to_schema(s) for s in repo_directory.list_sections(self.db)),
            (repo_directory.timetable_entry_to_schema(e) for e in repo_directory.list_timetable_entries(self.db)),
        )

    @staticmethod
    def _label_for(notice: schemas.Notice, users_by_id, sections_by_id) -> str:
        if notice.kind == KIND_PRIVATE_MESSAGE:
            return audience_label(Direct(notice.target), users_by_id, sections_by_id)
        try:
            return audience_label(classify(notice.target), users_by_id, sections_by_id)
        except InvalidTarget:
            return "Notice"
