# carefund/services/blob.py
import logging
from urllib.parse import quote

import httpx

from carefund.core.errors import Internal

logger = logging.getLogger(__name__)


class BlobStore:
    """Public-read uploads to Vercel Blob over its REST API."""

    def __init__(self, token: str, api_url: str = "https://blob.vercel-storage.com", timeout: float = 15.0):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout, connect=min(timeout, 5.0))

    async def put(self, name: str, data: bytes, content_type: str | None = None) -> str:
        if not self.token:
            raise Internal("Blob storage token not configured")

        headers = {
            "Authorization": f"Bearer {self.token}",
            "x-api-version": "7",
            "x-add-random-suffix": "1",
        }
        if content_type:
            headers["x-content-type"] = content_type

        url = f"{self.api_url}/{quote(name)}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.put(url, content=data, headers=headers)
                r.raise_for_status()
                js = r.json()
        except httpx.TimeoutException as e:
            logger.error(f"Blob upload of {name!r} timed out: {e}")
            raise Internal(f"Upload of {name} timed out") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Blob upload of {name!r} failed: {e}")
            raise Internal(f"Upload of {name} failed") from e

        if not js.get("url"):
            raise Internal(f"Upload of {name} returned no URL")
        return js["url"]
