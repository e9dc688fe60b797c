"""
Signup Service
Single teacher account creation
"""

from typing import Any, Dict

import structlog
from postgrest.exceptions import APIError
from supabase import AuthError

from school_auth import messages
from school_auth.exceptions import SignupStepError
from school_auth.models.schemas import UserRole
from school_auth.utils.supabase_client import SupabaseGateway

logger = structlog.get_logger(__name__)


class SignupService:
    """Creates a teacher: auth user, profile, role and teacher record"""

    def __init__(self, gateway: SupabaseGateway):
        self.gateway = gateway

    async def create_teacher(self, email: str, password: str, full_name: str) -> Dict[str, Any]:
        """
        Run the four signup steps in order

        Any failing step stops the workflow. Rows written by earlier steps are
        left in place.

        Returns:
            dict: {'success': True, 'user_id'} or {'success': False, 'error'}
        """
        try:
            user_id = await self._create_auth_user(email, password)

            try:
                await self.gateway.insert_profile(user_id, full_name, email)
            except APIError as e:
                raise SignupStepError(messages.SIGNUP_PROFILE_ERROR.format(detail=e.message), "profile")

            try:
                await self.gateway.insert_role(user_id, UserRole.TEACHER.value)
            except APIError as e:
                raise SignupStepError(messages.SIGNUP_ROLE_ERROR.format(detail=e.message), "role")

            try:
                await self.gateway.insert_teacher(user_id)
            except APIError as e:
                raise SignupStepError(messages.SIGNUP_TEACHER_ERROR.format(detail=e.message), "teacher")

        except SignupStepError as e:
            logger.error("Teacher signup failed", email=email, step=e.step, error=e.message)
            return {"success": False, "error": e.message}

        logger.info("Teacher signed up", email=email, user_id=user_id)
        return {"success": True, "user_id": user_id}

    async def _create_auth_user(self, email: str, password: str) -> str:
        try:
            user_id = await self.gateway.create_auth_user(email, password)
        except AuthError as e:
            raise SignupStepError(messages.SIGNUP_AUTH_ERROR.format(detail=e.message), "auth")
        if not user_id:
            raise SignupStepError(messages.SIGNUP_USER_NOT_CREATED, "auth")
        return user_id
