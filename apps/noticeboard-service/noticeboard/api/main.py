"""
Noticeboard service application.

Assembles the FastAPI app: logging, CORS and the notice routes.
"""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from noticeboard.api.notices import router as notices_router
from noticeboard.utils.feature_flags import get_feature_flags

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="School Noticeboard Service",
    description="API for school notices and private messages, with per-viewer visibility and reactions.",
    version="1.0.0",
)

DEFAULT_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
]


def _cors_origins():
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or DEFAULT_ORIGINS


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("feature_flags: %s", get_feature_flags())

app.include_router(notices_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "noticeboard-service"}
