"""
Health check endpoints for deployment readiness checks.
"""

from fastapi import APIRouter, HTTPException
from app.config.firebase import get_db
from app.core.settings import settings
from datetime import datetime, timezone


router = APIRouter(prefix="/health", tags=["Health"])

WATCHED_COLLECTIONS = (
    settings.REPORTS_COLLECTION,
    settings.MISSIONS_COLLECTION,
    settings.SIGHTINGS_COLLECTION,
)


@router.get("")
async def health_check():
    """Process liveness; does not touch Firestore."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/db")
async def database_health():
    """
    Store readiness: resolves the client and reads one document from each
    collection the map and mission screens depend on.
    """
    try:
        db = get_db()
        populated = {}
        for name in WATCHED_COLLECTIONS:
            populated[name] = len(list(db.collection(name).limit(1).stream())) > 0
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Store unavailable: {e}")

    return {
        "status": "healthy",
        "backend": "mock" if settings.USE_MOCK_DB else "firestore",
        "connected": True,
        "collections_populated": populated,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
