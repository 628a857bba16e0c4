from enum import Enum


class NodeState(str, Enum):
    """States a node passes through while being created."""

    REQUESTED = "requested"
    SUBMITTED = "submitted"
    WAITING_FOR_ADDRESS = "waiting_for_address"
    READY = "ready"
    FAILED = "failed"


class FailureReason(str, Enum):
    TIMEOUT = "timeout"
    SUBMIT_ERROR = "submit_error"


APP_LABEL = "clusterodm"
CONTAINER_NAME = "nodeodm"
DEFAULT_HOSTNAME_PREFIX = "nodeodm"

# Fixed per-pod resources; not scaled by images count
POD_CPU = "2"
POD_MEMORY = "4Gi"
