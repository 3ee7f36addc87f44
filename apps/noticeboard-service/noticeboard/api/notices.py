"""
Notice API Endpoints

Provides REST API for the notice board: per-viewer feeds, publishing,
moderation and reactions.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from noticeboard.db import schemas
from noticeboard.db.database import get_db
from noticeboard.api.deps import get_current_viewer
from noticeboard.services.notice_service import NoticeService
from noticeboard.utils.errors import NoticeboardError, NotPermitted
from noticeboard.utils.feature_flags import reactions_enabled
from noticeboard.visibility import can_delete_notice, can_edit_notice


router = APIRouter(prefix="/notices", tags=["notices"])


def _load_or_404(service: NoticeService, notice_id: str) -> schemas.Notice:
    notice = service.get_notice(notice_id)
    if notice is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notice not found"
        )
    return notice


@router.get("/", response_model=List[schemas.Notice])
def list_visible_notices(
    db: Session = Depends(get_db),
    viewer: schemas.User = Depends(get_current_viewer),
):
    """
    Get the notices and private messages visible to the current viewer,
    newest first.
    """
    return NoticeService(db).get_visible_notices(viewer)


@router.get("/feed", response_model=schemas.NoticeFeed)
def get_feed(
    db: Session = Depends(get_db),
    viewer: schemas.User = Depends(get_current_viewer),
):
    """
    Get the annotated feed: author names, audience labels, reaction
    summaries and delete permissions.
    """
    return NoticeService(db).get_feed(viewer)


@router.get("/compose-targets", response_model=schemas.ComposeTargets)
def get_compose_targets(
    db: Session = Depends(get_db),
    viewer: schemas.User = Depends(get_current_viewer),
):
    """
    Get the recipients the current viewer may address.
    """
    return NoticeService(db).compose_targets(viewer)


@router.post("/", response_model=schemas.Notice, status_code=status.HTTP_201_CREATED)
def publish_notice(
    payload: schemas.NoticeCreate,
    db: Session = Depends(get_db),
    viewer: schemas.User = Depends(get_current_viewer),
):
    """
    Publish a notice or private message.

    - **target**: `All`, `Staff`, `Teacher`, `Student`, `section_<id>` or a user id
    - **authorId**: defaults to the current viewer; any other user is rejected

    Only roles allowed to broadcast may target `All`, `Staff`, `Teacher` or `Student`.
    """
    if not payload.author_id:
        payload = payload.model_copy(update={"author_id": viewer.id})
    try:
        return NoticeService(db).publish(payload, viewer=viewer)
    except NotPermitted as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NoticeboardError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{notice_id}", response_model=schemas.Notice)
def edit_notice(
    notice_id: str,
    payload: schemas.NoticeUpdate,
    db: Session = Depends(get_db),
    viewer: schemas.User = Depends(get_current_viewer),
):
    """
    Edit the title, content or message type of a notice.
    """
    service = NoticeService(db)
    notice = _load_or_404(service, notice_id)
    if not can_edit_notice(notice, viewer):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to edit this notice")
    try:
        updated = service.edit(notice_id, payload)
    except NoticeboardError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notice not found")
    return updated


@router.delete("/{notice_id}")
def delete_notice(
    notice_id: str,
    db: Session = Depends(get_db),
    viewer: schemas.User = Depends(get_current_viewer),
):
    """
    Delete a notice and its reactions. Admins may delete any notice, others
    only their own.
    """
    service = NoticeService(db)
    notice = _load_or_404(service, notice_id)
    if not can_delete_notice(notice, viewer):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to delete this notice")
    try:
        deleted = service.delete(notice_id)
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notice not found")
    return {"success": True, "message": "Notice removed"}


@router.post("/{notice_id}/react", response_model=schemas.Notice)
def react_to_notice(
    notice_id: str,
    payload: schemas.ReactionCreate,
    db: Session = Depends(get_db),
    viewer: schemas.User = Depends(get_current_viewer),
):
    """
    Set the current viewer's reaction on a public notice they can see.

    - **type**: `like`, `heart`, `haha` or `crying`
    """
    if not reactions_enabled():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Reactions are disabled")
    try:
        updated = NoticeService(db).react(notice_id, viewer.id, payload.type, viewer=viewer)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notice not found")
    return updated
