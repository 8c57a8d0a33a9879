# carefund/services/donators.py
import logging
from typing import List, Tuple

from carefund.repos.kinds import DONATORS

logger = logging.getLogger(__name__)


class DonatorService:
    def __init__(self, store, identity):
        self.store = store
        self.identity = identity

    async def register_or_fetch(self, token: str) -> Tuple[dict, bool]:
        """
        Verify a Google ID token and return the donator for its email,
        creating one on first sign-in. Returns (donator, created).

        An existing donator is returned as stored; later profile changes on
        the provider side are not copied over.
        """
        claims = await self.identity.verify(token)
        donator, created = await self.store.find_or_create(
            DONATORS,
            {"email": claims["email"]},
            {
                "subject_id": claims.get("sub"),
                "name": claims.get("name"),
                "profile_pic": claims.get("picture"),
            },
        )
        if created:
            logger.info(f"Registered donator {donator['id']} ({claims['email']})")
        return donator, created

    async def list_all(self) -> List[dict]:
        return await self.store.find(DONATORS)
