# carefund/services/identity.py
import asyncio
import logging

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from carefund.core.errors import Unauthenticated
from carefund.services.external import with_timeout

logger = logging.getLogger(__name__)


class GoogleIdentityVerifier:
    def __init__(self, client_id: str, timeout: float = 15.0):
        self.client_id = client_id
        self.timeout = timeout
        self._request = google_requests.Request()

    def _verify(self, token: str) -> dict:
        return id_token.verify_oauth2_token(token, self._request, audience=self.client_id)

    async def verify(self, token: str) -> dict:
        """
        Check the Google ID token's signature and audience.

        Returns {sub, name, email, picture}; raises Unauthenticated otherwise.
        """
        if not token:
            raise Unauthenticated("Missing identity token")
        if not self.client_id:
            logger.error("GOOGLE_CLIENT_ID is not configured")
            raise Unauthenticated("Authentication failed")
        try:
            claims = await with_timeout(asyncio.to_thread(self._verify, token), self.timeout, "Token verification")
        except (ValueError, GoogleAuthError) as e:
            logger.warning(f"Google token verification failed: {e}")
            raise Unauthenticated("Authentication failed") from e

        if not claims.get("email"):
            raise Unauthenticated("Token carries no email")
        return {
            "sub": claims.get("sub"),
            "name": claims.get("name"),
            "email": claims["email"],
            "picture": claims.get("picture"),
        }
