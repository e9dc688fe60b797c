"""
Bulk Signup Routes
Admin-only creation of up to 50 accounts per request
"""

import json

from fastapi import APIRouter, Request, status
from pydantic import ValidationError
import structlog

from school_auth import messages
from school_auth.exceptions import FunctionError
from school_auth.models.schemas import BulkSignupRequest, format_validation_errors
from school_auth.services.bulk_signup_service import BulkSignupService
from school_auth.utils.dependencies import AdminGateway, RateLimitedAdmin, RateLimiter
from school_auth.utils.logger import get_audit_logger

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/bulk-signup")
async def bulk_signup(
    request: Request,
    admin: RateLimitedAdmin,
    limiter: RateLimiter,
    gateway: AdminGateway,
):
    """
    Create accounts for a list of users with one role

    Authentication, the admin check and rate limiting all happen before the
    body is read. Items are processed in order; a failing item does not stop
    the rest.
    """
    try:
        body = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        error = str(e)
        raise FunctionError(
            status.HTTP_400_BAD_REQUEST,
            messages.GENERAL_FAILURE.format(detail=error),
            errors=[error],
        )

    try:
        payload = BulkSignupRequest.model_validate(body)
    except ValidationError as e:
        errors = format_validation_errors(e)
        logger.info("Bulk signup rejected", actor_id=admin["id"], errors=errors)
        raise FunctionError(status.HTTP_400_BAD_REQUEST, messages.VALIDATION_FAILED, errors=errors)

    await limiter.record(admin["id"], len(payload.users))

    outcome = await BulkSignupService(gateway).signup_users(payload.users, payload.user_type)

    get_audit_logger().log_user_action(
        user_id=admin["id"],
        action="bulk_signup",
        resource="user_accounts",
        details={
            "role": payload.user_type.value,
            "requested": len(payload.users),
            "created": outcome.successCount,
            "failed": len(outcome.errors),
        },
    )

    return outcome.to_payload()
