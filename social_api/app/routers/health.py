from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from social_api import __version__

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health():
    return {
        "status": "ok",
        "service": "Social API",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
