"""
Admin / observability endpoints
===============================

GET /api/v1/admin/health -- simple health check
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from marketplace.api.schemas import HealthResponse

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse(timestamp=datetime.now(timezone.utc))
