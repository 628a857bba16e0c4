from elastinode.provisioning.adapter_engine.adapters.k8s.manifest import (
    build_pod_manifest,
    build_resource_spec,
    redact_manifest,
)
from elastinode.provisioning.config import KubernetesProviderSettings


def make_settings(**overrides):
    values = {
        "access_key": "AK",
        "secret_key": "SK",
        "s3_endpoint": "https://s3.example.com",
        "s3_bucket": "results",
        **overrides,
    }
    return KubernetesProviderSettings(**values)


def test_manifest_uses_fixed_resources_and_default_image():
    spec = build_resource_spec(name="nodeodm-500-abc", settings=make_settings(), node_token="tok")
    manifest = build_pod_manifest(spec)

    container = manifest["spec"]["containers"][0]
    assert manifest["metadata"] == {"name": "nodeodm-500-abc", "labels": {"app": "clusterodm"}}
    assert container["image"] == "opendronemap/nodeodm"
    assert container["resources"] == {
        "requests": {"cpu": "2", "memory": "4Gi"},
        "limits": {"cpu": "2", "memory": "4Gi"},
    }
    assert container["ports"] == [{"containerPort": 3000}]


def test_startup_args_carry_storage_settings_and_token():
    settings = make_settings(s3_acl="private")
    spec = build_resource_spec(name="p", settings=settings, node_token="node-token")

    args = build_pod_manifest(spec)["spec"]["containers"][0]["args"]
    pairs = dict(zip(args[::2], args[1::2]))

    assert pairs == {
        "--s3_access_key": "AK",
        "--s3_secret_key": "SK",
        "--s3_endpoint": "https://s3.example.com",
        "--s3_bucket": "results",
        "--s3_acl": "private",
        "--token": "node-token",
    }


def test_image_override_and_security_group_label():
    settings = make_settings(docker_image="registry.local/nodeodm:gpu", security_group="sg-odm")
    manifest = build_pod_manifest(build_resource_spec(name="p", settings=settings, node_token="t"))

    assert manifest["spec"]["containers"][0]["image"] == "registry.local/nodeodm:gpu"
    assert manifest["metadata"]["labels"]["security-group"] == "sg-odm"


def test_redact_manifest_masks_secrets_only():
    manifest = build_pod_manifest(
        build_resource_spec(name="p", settings=make_settings(), node_token="node-token")
    )

    redacted = redact_manifest(manifest)
    args = redacted["spec"]["containers"][0]["args"]

    assert "SK" not in args
    assert "node-token" not in args
    assert "AK" in args
    # original untouched
    assert "node-token" in manifest["spec"]["containers"][0]["args"]
