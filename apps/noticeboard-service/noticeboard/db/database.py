"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes the FastAPI session dependency.
"""
import os
import sys
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

_SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running,
    so module import during collection also checks for the pytest package in
    ``sys.modules``. ``PYTEST_RUNNING=1`` forces detection.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    if "pytest" in sys.modules:
        return True
    return False


# Database connection URL
# Generate dynamically from individual components if DATABASE_URL is not provided
def _get_database_url() -> str:
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        missing = []
        if not db_user: missing.append("POSTGRES_USER")
        if not db_password: missing.append("POSTGRES_PASSWORD")
        if not db_host: missing.append("POSTGRES_HOST")
        if not db_port: missing.append("POSTGRES_PORT")
        if not db_name: missing.append("POSTGRES_DB")
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


# Override order:
# 1. NOTICEBOARD_TEST_DB
# 2. TEST_DATABASE_URL (never replaced with sqlite)
# 3. under pytest with nothing configured, in-memory sqlite
# 4. DATABASE_URL / POSTGRES_* components
explicit_test_db = os.getenv("NOTICEBOARD_TEST_DB")
explicit_e2e_db = os.getenv("TEST_DATABASE_URL")
_sqlite_memory_kwargs = {
    "connect_args": {"check_same_thread": False},
    "poolclass": StaticPool,
}

if explicit_test_db:
    DATABASE_URL = explicit_test_db
    _engine_kwargs = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
elif explicit_e2e_db:
    DATABASE_URL = explicit_e2e_db
    _engine_kwargs = {}
elif _is_pytest_runtime() and not os.getenv("DATABASE_URL"):
    # StaticPool so the schema persists across connections
    DATABASE_URL = _SQLITE_MEMORY_URL
    _engine_kwargs = dict(_sqlite_memory_kwargs)
else:
    DATABASE_URL = _get_database_url()
    _engine_kwargs = {}


def _create_engine_with_fallback(url: str, kwargs: dict):
    """Create engine; under pytest with no explicit DB, fall back to in-memory sqlite on failure."""
    try:
        return create_engine(url, **kwargs)
    except OperationalError:
        if _is_pytest_runtime() and not explicit_e2e_db and not explicit_test_db:
            return create_engine(_SQLITE_MEMORY_URL, **_sqlite_memory_kwargs)
        raise


def _is_sqlite_memory(url) -> bool:
    """True for an in-memory SQLite URL, whatever form the URL renders in."""
    url = make_url(url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


engine = _create_engine_with_fallback(DATABASE_URL, _engine_kwargs)

# A fresh in-memory database has no migrations applied; create the schema eagerly
if _is_sqlite_memory(engine.url):
    from noticeboard.db import models
    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
