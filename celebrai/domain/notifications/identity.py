"""
Identity provider admin lookups (Supabase Auth admin API)
"""

import logging
from typing import Optional

import httpx

from ...config import SUPABASE_SERVICE_ROLE_KEY, SUPABASE_URL

logger = logging.getLogger(__name__)


class AuthAdminClient:
    """Resolves identity-provider user ids to account emails"""

    def __init__(
        self,
        base_url: Optional[str] = SUPABASE_URL,
        service_key: Optional[str] = SUPABASE_SERVICE_ROLE_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.service_key = service_key
        self.transport = transport

    async def get_user_email(self, user_id: str) -> Optional[str]:
        """
        Look up the email address of a user

        Returns:
            The email, or None when the user does not exist or has no email

        Raises:
            httpx.HTTPError: on transport failures and non-404 error statuses
        """
        if not self.base_url or not self.service_key:
            logger.warning("⚠️ SUPABASE_URL/SUPABASE_SERVICE_ROLE_KEY not configured - skipping user lookup")
            return None

        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.get(
                f"{self.base_url}/auth/v1/admin/users/{user_id}",
                headers={
                    "apikey": self.service_key,
                    "Authorization": f"Bearer {self.service_key}",
                },
                timeout=10.0,
            )

        if response.status_code == 404:
            logger.warning(f"⚠️ User {user_id} not found in identity provider")
            return None
        response.raise_for_status()

        payload = response.json()
        # Older Auth versions wrap the user object
        user = payload.get("user", payload)
        return user.get("email") or None
