"""
API dependency helpers.

Provides the dependency-resolved viewer for routes.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from noticeboard.db import schemas
from noticeboard.db.database import get_db
from noticeboard.services.notice_service import NoticeService

logger = logging.getLogger(__name__)

# Contract:
# Returns the viewer as a frozen schemas.User.
# Raises 401 if the X-User-Id header is missing or names no known user.


def get_current_viewer(
    db: Session = Depends(get_db),
    x_user_id: Optional[str] = Header(default=None),
) -> schemas.User:
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    viewer = NoticeService(db).get_viewer(user_id)
    if viewer is None:
        logger.info("unknown_viewer: user_id=%s", user_id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return viewer
