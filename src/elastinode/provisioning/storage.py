"""
Reachability probe for the object storage handed to spawned workers.
"""

import asyncio
import logging

import aiohttp

from elastinode.common.errors import StorageUnreachableError

logger = logging.getLogger(__name__)


def storage_url(endpoint: str, bucket: str) -> str:
    if "://" not in endpoint:
        endpoint = f"https://{endpoint}"
    return f"{endpoint.rstrip('/')}/{bucket}"


class StorageProbe:
    """
    Checks that the storage endpoint answers HTTP at all.

    Any response, including 403/404, counts as reachable: credentials and
    bucket policy are verified elsewhere.
    """

    def __init__(self, timeout_seconds: float = 10.0):
        self.timeout_seconds = timeout_seconds

    async def check(self, endpoint: str, bucket: str) -> int:
        url = storage_url(endpoint, bucket)
        try:
            async with aiohttp.ClientSession() as session:
                async with session.head(
                    url,
                    timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                ) as resp:
                    logger.info(f"Storage endpoint {url} reachable (status={resp.status})")
                    return resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise StorageUnreachableError(
                f"Storage endpoint {url} is unreachable: {e}",
                details={"url": url},
            ) from e
