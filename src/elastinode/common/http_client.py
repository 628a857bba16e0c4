"""
Standardized HTTP client for talking to the cluster API server.
"""

import httpx
import logging
from typing import Optional, Dict, Union

from elastinode.common.logger import resource_name_ctx

logger = logging.getLogger(__name__)


class ClusterHttpClient:
    """
    HTTP client for cluster API communication.

    Features:
    - Shared AsyncClient instance.
    - Automatic bearer token injection.
    - Resource name forwarding for tracing.
    - Standardized timeout and connection limits.
    """

    def __init__(
        self,
        base_url: str,
        bearer_token: Optional[str] = None,
        verify: Union[bool, str] = True,
        timeout_seconds: float = 30.0,
        max_connections: int = 100,
        max_keepalive: int = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._bearer_token = bearer_token
        self._verify = verify
        self._timeout = httpx.Timeout(timeout_seconds)
        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                limits=self._limits,
                verify=self._verify,
                transport=self._transport,
            )
        return self._client

    def get_default_headers(self) -> Dict[str, str]:
        """Base headers required for all cluster requests."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._bearer_token:
            headers["Authorization"] = f"Bearer {self._bearer_token}"

        resource_name = resource_name_ctx.get()
        if resource_name:
            headers["X-Request-ID"] = resource_name

        return headers

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Wrapper around httpx.request with automatic header injection."""
        headers = kwargs.pop("headers", {})
        merged_headers = {**self.get_default_headers(), **headers}

        try:
            return await self.client.request(method, url, headers=merged_headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Cluster HTTP request failed: {method} {url} - {str(e)}")
            raise

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def delete(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None
