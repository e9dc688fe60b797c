"""
FastAPI Dependencies
Supabase gateways and admin authentication
"""

from typing import Annotated, Optional

import httpx
import structlog
from fastapi import Depends, Header, status
from postgrest.exceptions import APIError
from supabase import AuthError

from school_auth import messages
from school_auth.config import settings
from school_auth.exceptions import FunctionError
from school_auth.models.schemas import UserRole
from school_auth.services.rate_limiter import BulkSignupRateLimiter
from school_auth.utils.supabase_client import (
    SupabaseGateway,
    create_admin_gateway,
    create_public_gateway,
)

logger = structlog.get_logger(__name__)


async def get_admin_gateway() -> SupabaseGateway:
    """Privileged gateway; missing configuration surfaces as a 500"""
    return await create_admin_gateway()


async def get_public_gateway() -> SupabaseGateway:
    """Anon-key gateway used for password sign-in"""
    return await create_public_gateway()


AdminGateway = Annotated[SupabaseGateway, Depends(get_admin_gateway)]
PublicGateway = Annotated[SupabaseGateway, Depends(get_public_gateway)]


async def get_current_admin(
    gateway: AdminGateway,
    authorization: Optional[str] = Header(None),
) -> dict:
    """
    Resolve the bearer token to a user holding the admin role

    Raises:
        FunctionError: 401 for a missing/invalid token, 403 for non-admins
    """
    if not authorization:
        raise FunctionError(status.HTTP_401_UNAUTHORIZED, messages.MISSING_TOKEN)

    token = authorization.replace("Bearer ", "")

    try:
        user = await gateway.get_user_for_token(token)
    except AuthError as e:
        logger.info("Token rejected", error=e.message)
        user = None

    if not user:
        raise FunctionError(status.HTTP_401_UNAUTHORIZED, messages.INVALID_TOKEN)

    try:
        is_admin = await gateway.has_role(user["id"], UserRole.ADMIN.value)
    except (APIError, httpx.HTTPError) as e:
        logger.error("Role lookup failed", user_id=user["id"], error=str(e))
        is_admin = False

    if not is_admin:
        raise FunctionError(status.HTTP_403_FORBIDDEN, messages.ADMIN_REQUIRED)

    return user


CurrentAdmin = Annotated[dict, Depends(get_current_admin)]


def get_rate_limiter(gateway: AdminGateway) -> BulkSignupRateLimiter:
    return BulkSignupRateLimiter(
        gateway,
        max_attempts=settings.bulk_signup_max_attempts,
        window_minutes=settings.bulk_signup_window_minutes,
    )


RateLimiter = Annotated[BulkSignupRateLimiter, Depends(get_rate_limiter)]


async def get_rate_limited_admin(admin: CurrentAdmin, limiter: RateLimiter) -> dict:
    """Admin who is still under the bulk signup attempt limit"""
    decision = await limiter.check(admin["id"])
    if not decision.allowed:
        raise FunctionError(status.HTTP_429_TOO_MANY_REQUESTS, decision.message)
    return admin


RateLimitedAdmin = Annotated[dict, Depends(get_rate_limited_admin)]
