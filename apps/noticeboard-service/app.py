"""
App assembly entry point.

Re-exports the FastAPI `app` from `noticeboard.api.main`.
"""

from noticeboard.api.main import app  # noqa: F401
