"""
Node creation protocol: submit a resource, poll it for an address, and hand
back a Node once it has one.

    REQUESTED -> SUBMITTED -> WAITING_FOR_ADDRESS -> READY
                     |                 |
                     v                 v
             FAILED(SUBMIT_ERROR)  FAILED(TIMEOUT)
"""

import logging
from typing import Callable, Dict, Optional

from elastinode.common.errors import NodeReadyTimeoutError, ProvisioningError
from elastinode.common.logger import resource_name_ctx
from elastinode.provisioning.constants import FailureReason, NodeState
from elastinode.provisioning.models import Node, ProvisioningRequest
from elastinode.provisioning.naming import generate_hostname, generate_node_token
from elastinode.provisioning.pending import PendingCreationCounter
from elastinode.provisioning.retry import RetryPolicy

log = logging.getLogger(__name__)

ManifestBuilder = Callable[[str, str], Dict]


class NodeLifecycleController:
    def __init__(
        self,
        *,
        client,
        namespace: str,
        build_manifest: ManifestBuilder,
        retry_policy: RetryPolicy,
        counter: PendingCreationCounter,
        service_port: int,
        max_runtime: int = -1,
        max_upload_time: int = -1,
    ):
        self.client = client
        self.namespace = namespace
        self.build_manifest = build_manifest
        self.retry_policy = retry_policy
        self.counter = counter
        self.service_port = service_port
        self.max_runtime = max_runtime
        self.max_upload_time = max_upload_time

    def _transition(self, name: str, state: NodeState, reason: Optional[FailureReason] = None):
        suffix = f" ({reason.value})" if reason else ""
        log.debug(f"Pod {name} -> {state.value}{suffix}")

    async def create(self, request: ProvisioningRequest) -> Node:
        pod_name = generate_hostname(request.images_count, prefix=request.name_prefix)
        node_token = generate_node_token()
        ctx_token = resource_name_ctx.set(pod_name)
        try:
            self._transition(pod_name, NodeState.REQUESTED)
            manifest = self.build_manifest(pod_name, node_token)

            with self.counter.track():
                await self._submit(pod_name, manifest)
                pod_ip = await self._wait_for_address(pod_name)

                node = Node(pod_ip, self.service_port, node_token)
                node.bind_machine(pod_name, self.max_runtime, self.max_upload_time)
                self._transition(pod_name, NodeState.READY)
                log.info(f"Pod {pod_name} has IP address {pod_ip}.")
                return node
        finally:
            resource_name_ctx.reset(ctx_token)

    async def _submit(self, pod_name: str, manifest: Dict) -> None:
        try:
            await self.client.submit(self.namespace, manifest)
        except Exception as e:
            self._transition(pod_name, NodeState.FAILED, FailureReason.SUBMIT_ERROR)
            log.error(f"Failed to create pod {pod_name}: {e}")
            raise ProvisioningError(
                f"Failed to create pod {pod_name}: {e}",
                details={"resource_name": pod_name, "namespace": self.namespace},
            ) from e

        self._transition(pod_name, NodeState.SUBMITTED)
        log.info(f"Pod {pod_name} created successfully.")

    async def _wait_for_address(self, pod_name: str) -> str:
        self._transition(pod_name, NodeState.WAITING_FOR_ADDRESS)
        policy = self.retry_policy

        for attempt in policy.attempts():
            try:
                pod_ip = await self.client.read(pod_name, self.namespace)
            except Exception as e:
                log.warning(f"Error reading pod {pod_name} (attempt {attempt}/{policy.max_attempts}): {e}")
                pod_ip = None

            if pod_ip:
                return pod_ip

            if attempt < policy.max_attempts:
                log.info(f"Waiting for pod {pod_name} to get an IP address...")
                await policy.wait(attempt)

        self._transition(pod_name, NodeState.FAILED, FailureReason.TIMEOUT)
        await self._cleanup(pod_name)
        raise NodeReadyTimeoutError(pod_name, policy.max_attempts)

    async def _cleanup(self, pod_name: str) -> None:
        try:
            await self.client.delete(pod_name, self.namespace)
            log.info(f"Deleted unready pod {pod_name}")
        except Exception as e:
            # The pod may be leaked at this point
            log.error(f"Failed to delete unready pod {pod_name}: {e}")
