"""
Shared SQLAlchemy base and helpers.
"""
import uuid
from datetime import datetime, UTC

from sqlalchemy.orm import declarative_base


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


def new_id() -> str:
    """Opaque string identifier exposed to every consumer as ``id``."""
    return str(uuid.uuid4())


Base = declarative_base()
