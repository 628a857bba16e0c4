import logging
import os
from typing import Dict, Optional

from elastinode.common.http_client import ClusterHttpClient
from elastinode.provisioning.config import KubernetesProviderSettings

logger = logging.getLogger(__name__)


class KubernetesPodClient:
    """
    Thin call surface over the Kubernetes core/v1 pods API.

    submit / read / delete are the only operations the provider needs.
    """

    def __init__(self, http: ClusterHttpClient):
        self.http = http

    @classmethod
    def from_settings(cls, settings: KubernetesProviderSettings) -> "KubernetesPodClient":
        token = settings.k8s_token
        if not token and os.path.exists(settings.k8s_token_path):
            with open(settings.k8s_token_path) as f:
                token = f.read().strip()

        verify = settings.k8s_ca_path if os.path.exists(settings.k8s_ca_path) else True

        return cls(
            ClusterHttpClient(
                base_url=settings.k8s_api_url,
                bearer_token=token or None,
                verify=verify,
            )
        )

    @staticmethod
    def _pods_path(namespace: str) -> str:
        return f"/api/v1/namespaces/{namespace}/pods"

    async def submit(self, namespace: str, manifest: Dict) -> None:
        resp = await self.http.post(self._pods_path(namespace), json=manifest)
        resp.raise_for_status()

    async def read(self, name: str, namespace: str) -> Optional[str]:
        """Return the pod IP, or None while it has none (or the pod is gone)."""
        resp = await self.http.get(f"{self._pods_path(namespace)}/{name}")
        if resp.status_code == 404:
            logger.debug(f"Pod {name} not found in namespace {namespace}")
            return None
        resp.raise_for_status()

        status = resp.json().get("status") or {}
        return status.get("podIP") or None

    async def delete(self, name: str, namespace: str) -> bool:
        """Delete a pod. Returns False if it was already gone."""
        resp = await self.http.delete(f"{self._pods_path(namespace)}/{name}")
        if resp.status_code == 404:
            logger.debug(f"Pod {name} already deleted")
            return False
        resp.raise_for_status()
        return True

    async def close(self):
        await self.http.close()
