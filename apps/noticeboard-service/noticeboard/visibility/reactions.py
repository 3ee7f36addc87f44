"""
Reaction aggregation.

Reactions are treated as an arena keyed by user id so a user can hold at most
one reaction per notice. Every operation returns new values; inputs are never
mutated.
"""
from typing import Dict, Iterable, List, Mapping, Optional

from noticeboard.db import schemas
from noticeboard.utils.audiences import KIND_NOTICE, REACTION_TYPES, is_valid_reaction_type
from noticeboard.utils.errors import MissingField, NotReactable


def _type_value(reaction_type) -> str:
    return str(getattr(reaction_type, "value", reaction_type))


def reaction_arena(notice: schemas.Notice) -> Dict[str, schemas.Reaction]:
    """Reactions keyed by user id, in first-seen order (later duplicates win)."""
    arena: Dict[str, schemas.Reaction] = {}
    for reaction in notice.reactions:
        arena[reaction.user_id] = reaction
    return arena


class ReactionAggregator:
    """Maintains one reaction per (notice, user) and summarises them for display."""

    def __init__(self, toggle_off: bool = False):
        self.toggle_off = toggle_off

    def upsert(self, notice: schemas.Notice, user_id: str, reaction_type) -> schemas.Notice:
        """
        Record ``user_id``'s reaction on ``notice``.

        A new user is appended, a changed type replaces the existing entry in
        place, and a repeated type is a no-op unless ``toggle_off`` is set, in
        which case it removes the reaction.

        Raises:
            NotReactable: If the notice is not a public notice
            MissingField: If ``user_id`` is empty
            ValueError: If ``reaction_type`` is not a supported type
        """
        if notice.kind != KIND_NOTICE:
            raise NotReactable(notice.id, _type_value(notice.kind))
        if not user_id:
            raise MissingField("userId")
        type_value = _type_value(reaction_type)
        if not is_valid_reaction_type(type_value):
            raise ValueError(f"Unknown reaction type: {type_value}. Allowed types: {list(REACTION_TYPES)}")

        arena = reaction_arena(notice)
        existing = arena.get(user_id)
        if existing is not None and _type_value(existing.type) == type_value:
            if not self.toggle_off:
                return notice.model_copy(update={"reactions": tuple(arena.values())})
            del arena[user_id]
        else:
            arena[user_id] = schemas.Reaction(user_id=user_id, type=type_value)
        return notice.model_copy(update={"reactions": tuple(arena.values())})

    def aggregate(
        self,
        notice: schemas.Notice,
        viewer_id: Optional[str],
        users_by_id: Mapping[str, schemas.User],
    ) -> schemas.ReactionSummary:
        """Per-type counts, reactor display names and the viewer's own reaction."""
        counts = {reaction_type: 0 for reaction_type in REACTION_TYPES}
        reactor_names: Dict[str, List[str]] = {reaction_type: [] for reaction_type in REACTION_TYPES}
        viewer_reaction = None

        for user_id, reaction in reaction_arena(notice).items():
            type_value = _type_value(reaction.type)
            if type_value not in counts:
                continue
            counts[type_value] += 1
            reactor = users_by_id.get(user_id)
            if reactor is not None:
                reactor_names[type_value].append(reactor.name)
            if viewer_id and user_id == viewer_id:
                viewer_reaction = type_value

        return schemas.ReactionSummary(
            counts=counts,
            reactor_names=reactor_names,
            viewer_reaction=viewer_reaction,
        )

    def remove(self, notices: Iterable[schemas.Notice], notice_id: str) -> List[schemas.Notice]:
        """Drop ``notice_id`` and, with it, every reaction it carried."""
        return [notice for notice in notices if notice.id != notice_id]

    def reaction_of(self, notice: schemas.Notice, user_id: str) -> Optional[str]:
        existing = reaction_arena(notice).get(user_id)
        return _type_value(existing.type) if existing is not None else None
