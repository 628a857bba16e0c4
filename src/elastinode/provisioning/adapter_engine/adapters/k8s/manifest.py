"""
Builds the Pod manifest submitted for a new worker node.
"""

from typing import Dict, List

from elastinode.provisioning.config import KubernetesProviderSettings
from elastinode.provisioning.constants import APP_LABEL, CONTAINER_NAME
from elastinode.provisioning.models import ResourceSpec


def build_startup_args(settings: KubernetesProviderSettings, node_token: str) -> List[str]:
    """Arguments the worker image configures itself from."""
    return [
        "--s3_access_key", settings.access_key,
        "--s3_secret_key", settings.secret_key,
        "--s3_endpoint", settings.s3_endpoint,
        "--s3_bucket", settings.s3_bucket,
        "--s3_acl", settings.s3_acl,
        "--token", node_token,
    ]


def build_resource_spec(
    *,
    name: str,
    settings: KubernetesProviderSettings,
    node_token: str,
) -> ResourceSpec:
    labels = {"app": APP_LABEL}
    if settings.security_group:
        labels["security-group"] = settings.security_group

    return ResourceSpec(
        name=name,
        image=settings.docker_image,
        container_port=settings.service_port,
        labels=labels,
        args=build_startup_args(settings, node_token),
    )


def build_pod_manifest(spec: ResourceSpec) -> Dict:
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": spec.name,
            "labels": dict(spec.labels),
        },
        "spec": {
            "restartPolicy": "Never",
            "containers": [
                {
                    "name": CONTAINER_NAME,
                    "image": spec.image,
                    "args": list(spec.args),
                    "ports": [{"containerPort": spec.container_port}],
                    "resources": spec.resources(),
                }
            ],
        },
    }


def redact_manifest(manifest: Dict) -> Dict:
    """Copy of a manifest safe to log: secret-bearing args are masked."""
    secret_flags = {"--s3_secret_key", "--token"}
    redacted = {**manifest, "spec": {**manifest["spec"], "containers": []}}
    for container in manifest["spec"]["containers"]:
        args = list(container.get("args", []))
        for i, arg in enumerate(args[:-1]):
            if arg in secret_flags:
                args[i + 1] = "***"
        redacted["spec"]["containers"].append({**container, "args": args})
    return redacted
