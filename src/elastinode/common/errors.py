"""
Error taxonomy shared by every provisioning backend.
"""

from typing import Any, Dict, Optional


class NodeProviderError(Exception):
    """Base class for provider errors. Carries a stable code and details."""

    code = "PROVIDER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(NodeProviderError):
    """Required setting missing, or provider used before initialize()."""

    code = "CONFIGURATION_ERROR"


class StorageUnreachableError(ConfigurationError):
    code = "STORAGE_UNREACHABLE"


class CapacityError(NodeProviderError):
    """Workload rejected by the admission check; nothing was submitted."""

    code = "CAPACITY_ERROR"


class ProvisioningError(NodeProviderError):
    """Submitting the resource to the cluster failed; nothing was created."""

    code = "PROVISIONING_ERROR"


class NodeReadyTimeoutError(NodeProviderError, TimeoutError):
    """The resource never obtained an address within the retry budget."""

    code = "NODE_READY_TIMEOUT"

    def __init__(self, resource_name: str, attempts: int):
        super().__init__(
            f"Pod {resource_name} failed to obtain an IP address after {attempts} retries.",
            details={"resource_name": resource_name, "attempts": attempts},
        )
        self.resource_name = resource_name
        self.attempts = attempts


class TeardownError(NodeProviderError):
    """Destroy call failed. Logged and recorded, never raised to callers."""

    code = "TEARDOWN_ERROR"
