"""
Bulk signup rate limiting backed by the bulk_signup_attempts table
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import httpx
import structlog
from postgrest.exceptions import APIError

from school_auth import messages
from school_auth.utils.supabase_client import SupabaseGateway

logger = structlog.get_logger(__name__)


@dataclass
class RateLimitDecision:
    allowed: bool
    message: Optional[str] = None


class BulkSignupRateLimiter:
    """
    Counts an actor's attempts in a trailing window.

    The store is the only shared state; if it cannot be queried the request
    is allowed (fail-open).
    """

    def __init__(
        self,
        gateway: SupabaseGateway,
        max_attempts: int = 3,
        window_minutes: int = 5,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.gateway = gateway
        self.max_attempts = max_attempts
        self.window_minutes = window_minutes
        self.clock = clock

    async def check(self, actor_id: str) -> RateLimitDecision:
        since = self.clock() - timedelta(minutes=self.window_minutes)
        try:
            attempts = await self.gateway.count_recent_bulk_attempts(actor_id, since)
        except (APIError, httpx.HTTPError) as e:
            logger.error("Error checking bulk signup attempts", actor_id=actor_id, error=str(e))
            return RateLimitDecision(allowed=True)

        if attempts >= self.max_attempts:
            logger.warning("Bulk signup rate limited", actor_id=actor_id, attempts=attempts)
            return RateLimitDecision(
                allowed=False,
                message=messages.RATE_LIMITED.format(minutes=self.window_minutes),
            )
        return RateLimitDecision(allowed=True)

    async def record(self, actor_id: str, user_count: int) -> None:
        """Log one attempt; a failed insert does not block the signup"""
        try:
            await self.gateway.log_bulk_attempt(actor_id, user_count)
        except (APIError, httpx.HTTPError) as e:
            logger.error("Failed to log bulk signup attempt", actor_id=actor_id, error=str(e))
