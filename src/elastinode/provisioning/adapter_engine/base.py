from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from elastinode.provisioning.models import Node, TeardownResult


@dataclass
class ProviderCapabilities:
    """
    Standardized capabilities for provisioning backends.
    Used by the orchestrator for backend-agnostic decision making.
    """

    # Lifecycle
    is_ephemeral: bool = True  # Provider owns the node lifecycle
    requires_readiness_poll: bool = True
    readiness_timeout_seconds: int = 300
    polling_interval_seconds: int = 5

    # Post-creation setup (ssh, agents...) needed before the node is usable
    requires_machine_setup: bool = False

    # Metadata
    features: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert capabilities to dictionary for serialization."""
        return {
            "is_ephemeral": self.is_ephemeral,
            "requires_readiness_poll": self.requires_readiness_poll,
            "readiness_timeout_seconds": self.readiness_timeout_seconds,
            "polling_interval_seconds": self.polling_interval_seconds,
            "requires_machine_setup": self.requires_machine_setup,
            "features": self.features,
        }


class NodeProvisioningBackend(ABC):
    """
    Strict provisioning backend contract.
    The orchestrator depends ONLY on this interface.

    All implementations must:
    1. Define CAPABILITIES class attribute
    2. Implement all abstract methods
    """

    CAPABILITIES: ProviderCapabilities = ProviderCapabilities()

    @classmethod
    def get_capabilities(cls) -> ProviderCapabilities:
        """Return provider capabilities. Override for dynamic capabilities."""
        return cls.CAPABILITIES

    # -------------------------------------------------
    # IDENTITY & LIMITS
    # -------------------------------------------------
    @abstractmethod
    def get_driver_name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_machines_limit(self) -> int:
        """Maximum number of concurrent nodes, -1 for unlimited."""
        raise NotImplementedError

    @abstractmethod
    def can_handle(self, images_count: int) -> bool:
        """Admission check for a workload of the given size."""
        raise NotImplementedError

    # -------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------
    @abstractmethod
    async def initialize(self) -> None:
        """
        Validate configuration and external dependencies.
        Must raise ConfigurationError if the provider cannot run.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_create_args(self, images_count: int) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def create_node(self, *, images_count: int, request: Optional[Any] = None) -> Node:
        """
        Provision a single worker and wait until it has an address.

        Raises:
            CapacityError: workload rejected, nothing submitted
            ProvisioningError: submission failed, nothing created
            NodeReadyTimeoutError: no address within the retry budget
        """
        raise NotImplementedError

    @abstractmethod
    async def destroy_node(self, node: Node) -> TeardownResult:
        """Tear down a node. Must never raise."""
        raise NotImplementedError

    @abstractmethod
    async def setup_machine(self, node: Node, **kwargs) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_nodes_pending_creation(self) -> int:
        raise NotImplementedError

    # -------------------------------------------------
    # UTILITY
    # -------------------------------------------------
    def is_ephemeral(self) -> bool:
        return self.get_capabilities().is_ephemeral

    def get_readiness_timeout(self) -> int:
        """Get the recommended readiness timeout in seconds."""
        return self.get_capabilities().readiness_timeout_seconds

    def get_polling_interval(self) -> int:
        """Get the recommended polling interval in seconds."""
        return self.get_capabilities().polling_interval_seconds

    async def close(self) -> None:
        """Release client resources. No-op by default."""
        return None
