# routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter

from database import check_connection

router = APIRouter(prefix="/api", tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", summary="Service health check")
def health():
     """Liveness probe; no auth required."""
     return {
          "status": "ok",
          "timestamp": datetime.now(timezone.utc).isoformat(),
          "version": API_VERSION,
          "database": "ok" if check_connection() else "unavailable",
     }
