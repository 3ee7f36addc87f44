"""Total order over notices: publication date descending, stable on ties."""
from datetime import datetime, timezone
from typing import Iterable, List

from noticeboard.db import schemas


def _sort_key(notice: schemas.Notice) -> datetime:
    value = notice.date
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def order_notices(notices: Iterable[schemas.Notice]) -> List[schemas.Notice]:
    # sorted() keeps equal keys in input order even with reverse=True
    return sorted(notices, key=_sort_key, reverse=True)
