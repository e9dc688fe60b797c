"""
Supabase Client Gateway
Remote calls made by the auth functions against Supabase Auth and PostgREST
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import structlog
from supabase import AsyncClient, acreate_client

from school_auth.config import Settings, settings

logger = structlog.get_logger(__name__)


class SupabaseGateway:
    """
    Thin async wrapper around one Supabase client.

    The privileged flavour is built with the service-role key and bypasses
    row-level security; the public flavour uses the anon key and is only used
    for password sign-in. Library errors (supabase.AuthError and
    postgrest.exceptions.APIError) propagate to the caller, which decides how
    to classify them.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    # ---- Auth subsystem -------------------------------------------------

    async def create_auth_user(
        self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None
    ) -> Optional[str]:
        """Create a confirmed auth user and return its id"""
        attributes: Dict[str, Any] = {
            "email": email,
            "password": password,
            "email_confirm": True,
        }
        if metadata:
            attributes["user_metadata"] = metadata

        response = await self.client.auth.admin.create_user(attributes)
        if not response or not response.user:
            return None
        logger.info("Auth user created", user_id=response.user.id)
        return response.user.id

    async def delete_auth_user(self, user_id: str) -> None:
        await self.client.auth.admin.delete_user(user_id)
        logger.info("Auth user deleted", user_id=user_id)

    async def get_user_for_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Resolve an access token to its user

        Returns:
            dict: {'id', 'email'} or None when the token is not accepted
        """
        response = await self.client.auth.get_user(token)
        if not response or not response.user:
            return None
        return {"id": response.user.id, "email": response.user.email}

    async def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        """Password sign-in; returns the {'user', 'session'} payload"""
        response = await self.client.auth.sign_in_with_password({
            "email": email,
            "password": password,
        })
        return response.model_dump(mode="json")

    # ---- Tables ----------------------------------------------------------

    async def insert_profile(self, user_id: str, full_name: str, email: str) -> None:
        await self.client.table("profiles").insert({
            "id": user_id,
            "full_name": full_name,
            "email": email,
        }).execute()

    async def insert_role(self, user_id: str, role: str) -> None:
        await self.client.table("user_roles").insert({
            "user_id": user_id,
            "role": role,
        }).execute()

    async def insert_teacher(self, profile_id: str) -> None:
        await self.client.table("teachers").insert({
            "profile_id": profile_id,
        }).execute()

    async def find_email_by_username(self, username: str) -> Optional[str]:
        """Email of the single profile with this username, else None"""
        response = await (
            self.client.table("profiles")
            .select("email")
            .eq("username", username)
            .limit(2)
            .execute()
        )
        rows = response.data or []
        if len(rows) != 1:
            return None
        return rows[0].get("email")

    async def has_role(self, user_id: str, role: str) -> bool:
        response = await (
            self.client.table("user_roles")
            .select("role")
            .eq("user_id", user_id)
            .eq("role", role)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    async def count_recent_bulk_attempts(self, actor_id: str, since: datetime) -> int:
        response = await (
            self.client.table("bulk_signup_attempts")
            .select("id")
            .eq("user_id", actor_id)
            .gte("created_at", since.isoformat())
            .execute()
        )
        return len(response.data or [])

    async def log_bulk_attempt(self, actor_id: str, user_count: int) -> None:
        await self.client.table("bulk_signup_attempts").insert({
            "user_id": actor_id,
            "user_count": user_count,
        }).execute()

    async def list_teacher_profiles(self) -> List[Dict[str, Any]]:
        response = await self.client.rpc("get_teacher_profiles").execute()
        return response.data or []


# One client per (url, key); reused across requests in a warm process
_clients: Dict[Tuple[str, str], AsyncClient] = {}


async def _get_client(url: str, key: str) -> AsyncClient:
    client = _clients.get((url, key))
    if client is None:
        client = await acreate_client(url, key)
        _clients[(url, key)] = client
        logger.info("Supabase client initialized", url=url)
    return client


async def create_admin_gateway(config: Optional[Settings] = None) -> SupabaseGateway:
    """Privileged gateway (service-role key); raises ConfigurationError when unset"""
    config = config or settings
    url, key = config.require_admin_credentials()
    return SupabaseGateway(await _get_client(url, key))


async def create_public_gateway(config: Optional[Settings] = None) -> SupabaseGateway:
    """Public gateway (anon key); raises ConfigurationError when unset"""
    config = config or settings
    url, key = config.require_public_credentials()
    return SupabaseGateway(await _get_client(url, key))
