"""
Provisioning Provider Configuration
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from elastinode.common.errors import ConfigurationError

logger = logging.getLogger(__name__)

SERVICE_ACCOUNT_DIR = "/var/run/secrets/kubernetes.io/serviceaccount"


class KubernetesProviderSettings(BaseSettings):
    """Settings for the Kubernetes provisioning backend."""

    # Object storage handed to spawned workers
    access_key: str = Field(default="", validation_alias="ELASTINODE_ACCESS_KEY")
    secret_key: str = Field(default="", validation_alias="ELASTINODE_SECRET_KEY")
    s3_endpoint: str = Field(default="", validation_alias="ELASTINODE_S3_ENDPOINT")
    s3_bucket: str = Field(default="", validation_alias="ELASTINODE_S3_BUCKET")
    s3_acl: str = Field(default="public-read", validation_alias="ELASTINODE_S3_ACL")
    storage_probe_timeout: float = Field(
        default=10.0, validation_alias="ELASTINODE_STORAGE_PROBE_TIMEOUT"
    )

    security_group: str = Field(default="", validation_alias="ELASTINODE_SECURITY_GROUP")

    # Cluster placement
    namespace: str = Field(default="default", validation_alias="ELASTINODE_NAMESPACE")
    pod_limit: int = Field(default=-1, validation_alias="ELASTINODE_POD_LIMIT")
    docker_image: str = Field(
        default="opendronemap/nodeodm", validation_alias="ELASTINODE_DOCKER_IMAGE"
    )

    # Node lifecycle
    service_port: int = Field(default=3000, validation_alias="ELASTINODE_SERVICE_PORT")
    max_runtime: int = Field(default=-1, validation_alias="ELASTINODE_MAX_RUNTIME")
    max_upload_time: int = Field(default=-1, validation_alias="ELASTINODE_MAX_UPLOAD_TIME")

    # Readiness polling; None falls back to the backend capabilities
    poll_interval_seconds: Optional[float] = Field(
        default=None, validation_alias="ELASTINODE_POLL_INTERVAL"
    )
    poll_max_attempts: Optional[int] = Field(
        default=None, validation_alias="ELASTINODE_POLL_MAX_ATTEMPTS"
    )

    # Kubernetes API access
    k8s_api_url: str = Field(
        default="https://kubernetes.default.svc", validation_alias="ELASTINODE_K8S_API_URL"
    )
    k8s_token: str = Field(default="", validation_alias="ELASTINODE_K8S_TOKEN")
    k8s_token_path: str = Field(
        default=f"{SERVICE_ACCOUNT_DIR}/token", validation_alias="ELASTINODE_K8S_TOKEN_PATH"
    )
    k8s_ca_path: str = Field(
        default=f"{SERVICE_ACCOUNT_DIR}/ca.crt", validation_alias="ELASTINODE_K8S_CA_PATH"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class ProviderConfig:
    """
    Validated, typed access to backend settings.

    Wraps a settings object and enforces the keys a backend cannot run
    without. Validation is deferred to validate_required() so a provider can
    be constructed before its configuration is complete.
    """

    def __init__(self, settings: BaseSettings, required_keys: List[str]):
        self.settings = settings
        self.required_keys = list(required_keys)

    @classmethod
    def from_mapping(
        cls,
        values: Optional[Dict[str, Any]] = None,
        required_keys: Optional[List[str]] = None,
    ) -> "ProviderConfig":
        settings = KubernetesProviderSettings(**(values or {}))
        return cls(settings, required_keys or [])

    def get(self, key: str, default: Any = None) -> Any:
        value = getattr(self.settings, key, None)
        if value is None or value == "":
            return default
        return value

    def missing_keys(self) -> List[str]:
        return [key for key in self.required_keys if self.get(key) is None]

    def validate_required(self) -> None:
        missing = self.missing_keys()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration keys: {', '.join(missing)}",
                details={"missing": missing},
            )
        logger.debug(f"Configuration validated ({len(self.required_keys)} required keys present)")
