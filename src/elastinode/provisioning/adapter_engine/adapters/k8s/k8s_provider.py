import logging
import math
from typing import Any, Dict, Optional

from elastinode.common.errors import CapacityError, ConfigurationError
from elastinode.provisioning.adapter_engine.adapters.k8s.client import KubernetesPodClient
from elastinode.provisioning.adapter_engine.adapters.k8s.manifest import (
    build_pod_manifest,
    build_resource_spec,
    redact_manifest,
)
from elastinode.provisioning.adapter_engine.base import (
    NodeProvisioningBackend,
    ProviderCapabilities,
)
from elastinode.provisioning.config import ProviderConfig
from elastinode.provisioning.lifecycle import NodeLifecycleController
from elastinode.provisioning.models import Node, ProvisioningRequest, TeardownResult
from elastinode.provisioning.pending import PendingCreationCounter, pending_creations
from elastinode.provisioning.retry import RetryPolicy
from elastinode.provisioning.storage import StorageProbe
from elastinode.provisioning.teardown import DestroyController

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ["access_key", "secret_key", "s3_endpoint", "s3_bucket"]


class KubernetesProvider(NodeProvisioningBackend):
    """
    Spawns worker nodes as Pods on a Kubernetes cluster.

    The worker image configures itself from its startup arguments, so no
    post-creation setup is needed once the Pod has an IP address.
    """

    CAPABILITIES = ProviderCapabilities(
        is_ephemeral=True,
        requires_readiness_poll=True,
        readiness_timeout_seconds=300,
        polling_interval_seconds=5,
        requires_machine_setup=False,
        features={
            "fixed_pod_resources": True,
            "address": "pod_ip",
        },
    )

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        *,
        client: Optional[KubernetesPodClient] = None,
        storage_probe: Optional[StorageProbe] = None,
        counter: Optional[PendingCreationCounter] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.config = config or ProviderConfig.from_mapping(required_keys=REQUIRED_KEYS)
        for key in REQUIRED_KEYS:
            if key not in self.config.required_keys:
                self.config.required_keys.append(key)
        settings = self.config.settings

        self.client = client or KubernetesPodClient.from_settings(settings)
        self.storage_probe = storage_probe or StorageProbe(settings.storage_probe_timeout)
        self.counter = counter or pending_creations
        self.retry_policy = retry_policy or self._default_retry_policy()
        self.initialized = False

        self.lifecycle = NodeLifecycleController(
            client=self.client,
            namespace=self.get_namespace(),
            build_manifest=self._build_manifest,
            retry_policy=self.retry_policy,
            counter=self.counter,
            service_port=self.get_service_port(),
            max_runtime=self.get_max_runtime(),
            max_upload_time=self.get_max_upload_time(),
        )
        self.destroyer = DestroyController(client=self.client, namespace=self.get_namespace())

    def _default_retry_policy(self) -> RetryPolicy:
        interval = self.config.get("poll_interval_seconds", self.get_polling_interval())
        # Unset attempts keep the advertised readiness timeout whatever the interval
        derived = math.ceil(self.get_readiness_timeout() / interval) if interval > 0 else 1
        max_attempts = self.config.get("poll_max_attempts", derived)
        return RetryPolicy(interval_seconds=interval, max_attempts=max_attempts)

    # -------------------------------------------------
    # IDENTITY & CONFIG
    # -------------------------------------------------
    def get_driver_name(self) -> str:
        return "kubernetes"

    def get_machines_limit(self) -> int:
        return self.config.get("pod_limit", -1)

    def get_namespace(self) -> str:
        return self.config.get("namespace", "default")

    def get_service_port(self) -> int:
        return self.config.get("service_port", 3000)

    def get_max_runtime(self) -> int:
        return self.config.get("max_runtime", -1)

    def get_max_upload_time(self) -> int:
        return self.config.get("max_upload_time", -1)

    def can_handle(self, images_count: int) -> bool:
        # TODO: admission policy based on images_count and get_machines_limit()
        return True

    async def get_create_args(self, images_count: int) -> Dict[str, Any]:
        return {}

    # -------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------
    async def initialize(self) -> None:
        self.config.validate_required()
        await self.storage_probe.check(
            self.config.get("s3_endpoint"), self.config.get("s3_bucket")
        )
        self.initialized = True
        logger.info("Kubernetes provider initialized.")

    def _build_manifest(self, pod_name: str, node_token: str) -> Dict:
        spec = build_resource_spec(
            name=pod_name, settings=self.config.settings, node_token=node_token
        )
        manifest = build_pod_manifest(spec)
        logger.info(f"Creating pod with manifest: {redact_manifest(manifest)}")
        return manifest

    async def create_node(self, *, images_count: int, request: Optional[Any] = None) -> Node:
        if not self.initialized:
            raise ConfigurationError("Kubernetes provider is not initialized")
        if not self.can_handle(images_count):
            raise CapacityError(
                f"Cannot handle {images_count} images.",
                details={"images_count": images_count},
            )

        return await self.lifecycle.create(
            ProvisioningRequest(images_count=images_count, context=request)
        )

    async def destroy_node(self, node: Node) -> TeardownResult:
        return await self.destroyer.destroy(node)

    async def setup_machine(self, node: Node, **kwargs) -> None:
        logger.info("setupMachine called, but no setup is required for Kubernetes.")

    def get_nodes_pending_creation(self) -> int:
        return self.counter.value

    async def close(self) -> None:
        await self.client.close()
