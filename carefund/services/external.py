# carefund/services/external.py
import asyncio
import logging
from typing import Awaitable, TypeVar

from carefund.core.errors import Unavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_timeout(aw: Awaitable[T], seconds: float, what: str) -> T:
    """Await an external call, mapping a timeout to Unavailable."""
    try:
        return await asyncio.wait_for(aw, timeout=seconds)
    except asyncio.TimeoutError:
        logger.error(f"{what} timed out after {seconds}s")
        raise Unavailable(f"{what} timed out")
