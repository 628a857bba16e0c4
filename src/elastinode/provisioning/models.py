from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from elastinode.common.errors import TeardownError
from elastinode.provisioning.constants import (
    APP_LABEL,
    DEFAULT_HOSTNAME_PREFIX,
    POD_CPU,
    POD_MEMORY,
)


@dataclass
class Node:
    """
    Handle to a provisioned worker.

    Only built once the backing resource has a network address. A node is
    auto-spawned when it was created by a provider, which makes it eligible
    for destroy_node.
    """

    hostname: str
    port: int
    token: str
    auto_spawned: bool = False
    machine_name: Optional[str] = None
    max_runtime: int = -1
    max_upload_time: int = -1

    def bind_machine(self, machine_name: str, max_runtime: int, max_upload_time: int) -> None:
        self.machine_name = machine_name
        self.max_runtime = max_runtime
        self.max_upload_time = max_upload_time
        self.auto_spawned = True

    def is_auto_spawned(self) -> bool:
        return self.auto_spawned

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}"


@dataclass
class ProvisioningRequest:
    """Inputs of a single create_node call. Never persisted."""

    images_count: int
    context: Any = None
    name_prefix: str = DEFAULT_HOSTNAME_PREFIX


@dataclass
class ResourceSpec:
    """Declarative description of the compute resource backing a node."""

    name: str
    image: str
    container_port: int
    labels: Dict[str, str] = field(default_factory=lambda: {"app": APP_LABEL})
    args: List[str] = field(default_factory=list)
    cpu: str = POD_CPU
    memory: str = POD_MEMORY

    def resources(self) -> Dict[str, Dict[str, str]]:
        quantity = {"cpu": self.cpu, "memory": self.memory}
        return {"requests": dict(quantity), "limits": dict(quantity)}


@dataclass
class TeardownResult:
    """Outcome of destroy_node. Failures are recorded here instead of raised."""

    node: str
    destroyed: bool = False
    skipped: bool = False
    error: Optional[str] = None
    failure: Optional[TeardownError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
