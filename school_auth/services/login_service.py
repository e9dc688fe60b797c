"""
Login Service
Username/password sign-in on top of Supabase email/password auth
"""

from typing import Any, Dict

import httpx
import structlog
from postgrest.exceptions import APIError
from supabase import AuthError

from school_auth import messages
from school_auth.utils.supabase_client import SupabaseGateway

logger = structlog.get_logger(__name__)


class LoginService:
    """
    Resolves a username to an email with the privileged gateway, then signs
    in with the public gateway.

    Unknown usernames and wrong passwords produce the same error text so the
    endpoint cannot be used to discover which accounts exist.
    """

    def __init__(self, admin_gateway: SupabaseGateway, public_gateway: SupabaseGateway):
        self.admin_gateway = admin_gateway
        self.public_gateway = public_gateway

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        """
        Returns:
            dict: {'success': True, 'user', 'session'} or {'success': False, 'error'}
        """
        try:
            email = await self.admin_gateway.find_email_by_username(username)
        except (APIError, httpx.HTTPError) as e:
            logger.warning("Profile lookup failed", username=username, error=str(e))
            email = None

        if not email:
            logger.info("Login rejected", username=username, reason="unknown_username")
            return {"success": False, "error": messages.LOGIN_INVALID_CREDENTIALS}

        try:
            payload = await self.public_gateway.sign_in_with_password(email, password)
        except (AuthError, httpx.HTTPError) as e:
            logger.info("Login rejected", username=username, reason="bad_credentials", error=str(e))
            return {"success": False, "error": messages.LOGIN_INVALID_CREDENTIALS}

        logger.info("User logged in", username=username)
        return {"success": True, **payload}
