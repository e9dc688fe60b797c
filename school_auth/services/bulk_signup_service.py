"""
Bulk Signup Service
Sequential account creation with per-item isolation and auth-user rollback
"""

from typing import List, Optional

import structlog
from postgrest.exceptions import APIError
from supabase import AuthError

from school_auth import messages
from school_auth.exceptions import SignupStepError
from school_auth.models.schemas import (
    BulkSignupResponse,
    BulkSignupResult,
    BulkSignupUser,
    UserRole,
)
from school_auth.utils.supabase_client import SupabaseGateway

logger = structlog.get_logger(__name__)

UNIQUE_VIOLATION = "23505"
NOT_NULL_VIOLATION = "23502"

EMAIL_EXISTS = "email_exists"
EMAIL_TAKEN_MARKERS = ("already registered", "already been registered", "unique constraint")


class BulkSignupService:
    """
    Creates accounts one at a time, in request order.

    For each user: auth user, profile, role assignment and, for teachers, the
    teacher record. A failing item is recorded and skipped; if its auth user
    was already created, one delete is attempted for it. Profile and role rows
    are not rolled back.
    """

    def __init__(self, gateway: SupabaseGateway):
        self.gateway = gateway

    async def signup_users(self, users: List[BulkSignupUser], role: UserRole) -> BulkSignupResponse:
        errors: List[str] = []
        results: List[BulkSignupResult] = []

        for row, user in enumerate(users, start=1):
            prefix = messages.ROW_PREFIX.format(row=row, email=user.email)
            log = logger.bind(row=row, total=len(users), email=user.email)
            user_id: Optional[str] = None

            try:
                user_id = await self._create_auth_user(prefix, user)
                await self._insert_profile(prefix, user, user_id)
                await self._assign_role(prefix, user_id, role)
                if role is UserRole.TEACHER:
                    await self._insert_teacher(prefix, user_id)
            except SignupStepError as e:
                log.error("Bulk signup item failed", step=e.step, error=e.message)
                errors.append(e.message)
            except Exception as e:
                log.error("Unexpected bulk signup item failure", exc_info=True)
                errors.append(messages.UNEXPECTED_ITEM_ERROR.format(prefix=prefix, detail=e))
            else:
                results.append(BulkSignupResult(
                    email=user.email,
                    id=user_id,
                    temp_student_name=user.temp_student_name,
                ))
                continue

            if user_id:
                rollback_error = await self._rollback(prefix, user_id)
                if rollback_error:
                    errors.append(rollback_error)

        return BulkSignupResponse(
            success=not errors and len(users) > 0,
            successCount=len(results),
            errors=errors,
            results=results,
        )

    async def _create_auth_user(self, prefix: str, user: BulkSignupUser) -> str:
        try:
            user_id = await self.gateway.create_auth_user(
                user.email,
                user.password,
                metadata={"full_name": user.full_name},
            )
        except AuthError as e:
            detail = e.message or ""
            if getattr(e, "code", None) == EMAIL_EXISTS or any(
                marker in detail for marker in EMAIL_TAKEN_MARKERS
            ):
                raise SignupStepError(messages.AUTH_EMAIL_TAKEN.format(prefix=prefix), "auth")
            if "Database error" in detail:
                raise SignupStepError(
                    messages.AUTH_DATABASE_ERROR.format(prefix=prefix, detail=detail), "auth"
                )
            raise SignupStepError(messages.AUTH_CREATE_FAILED.format(prefix=prefix, detail=detail), "auth")

        if not user_id:
            raise SignupStepError(
                messages.AUTH_CREATE_FAILED.format(prefix=prefix, detail=messages.SIGNUP_USER_NOT_CREATED),
                "auth",
            )
        return user_id

    async def _insert_profile(self, prefix: str, user: BulkSignupUser, user_id: str) -> None:
        try:
            await self.gateway.insert_profile(user_id, user.full_name, user.email)
        except APIError as e:
            detail = e.message or ""
            # a trigger on auth.users may already have created the row
            if e.code == UNIQUE_VIOLATION and "profiles_pkey" in detail:
                return
            if e.code == UNIQUE_VIOLATION and "profiles_email_key" in detail:
                raise SignupStepError(
                    messages.PROFILE_EMAIL_TAKEN.format(prefix=prefix, email=user.email), "profile"
                )
            raise SignupStepError(messages.PROFILE_CREATE_FAILED.format(prefix=prefix, detail=detail), "profile")

    async def _assign_role(self, prefix: str, user_id: str, role: UserRole) -> None:
        try:
            await self.gateway.insert_role(user_id, role.value)
        except APIError as e:
            detail = e.message or ""
            if e.code == NOT_NULL_VIOLATION and '"role" violates not-null constraint' in detail:
                raise SignupStepError(messages.ROLE_NULL.format(prefix=prefix), "role")
            raise SignupStepError(
                messages.ROLE_ASSIGN_FAILED.format(prefix=prefix, role=role.value, detail=detail), "role"
            )

    async def _insert_teacher(self, prefix: str, user_id: str) -> None:
        try:
            await self.gateway.insert_teacher(user_id)
        except APIError as e:
            raise SignupStepError(
                messages.TEACHER_CREATE_FAILED.format(prefix=prefix, detail=e.message), "teacher"
            )

    async def _rollback(self, prefix: str, user_id: str) -> Optional[str]:
        """Delete the auth user; returns an error string if that fails too"""
        try:
            await self.gateway.delete_auth_user(user_id)
        except Exception as e:
            logger.error("Rollback failed, auth user left behind", user_id=user_id, exc_info=True)
            return messages.ROLLBACK_FAILED.format(prefix=prefix, detail=e)
        logger.info("Rolled back auth user", user_id=user_id)
        return None
