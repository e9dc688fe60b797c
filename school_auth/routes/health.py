"""
Health check routes
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from school_auth.config import settings
from school_auth.exceptions import ConfigurationError

router = APIRouter()


@router.get("/health")
async def health_check():
    """Service health check; reports whether Supabase credentials are set"""
    try:
        settings.require_admin_credentials()
        settings.require_public_credentials()
        supabase_status = "configured"
    except ConfigurationError:
        supabase_status = "not_configured"

    return {
        "service": "school-auth",
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "supabase": supabase_status,
        "version": "1.0.0",
    }
