import pytest

from elastinode.provisioning.adapter_engine.adapters.k8s.k8s_provider import KubernetesProvider
from elastinode.provisioning.adapter_engine.registry import (
    get_provider,
    get_provider_info,
    get_registered_providers,
)
from elastinode.provisioning.config import ProviderConfig


def test_registered_providers():
    assert get_registered_providers() == ["kubernetes"]


def test_get_provider_builds_registered_backend():
    provider = get_provider(
        "kubernetes",
        config=ProviderConfig.from_mapping({"namespace": "odm"}),
        client=object(),
    )

    assert isinstance(provider, KubernetesProvider)
    assert provider.get_namespace() == "odm"


def test_get_provider_rejects_unknown_driver():
    with pytest.raises(ValueError, match="Available providers"):
        get_provider("digitalocean")


def test_provider_info_exposes_capabilities():
    info = get_provider_info()["kubernetes"]["capabilities"]

    assert info["is_ephemeral"] is True
    assert info["polling_interval_seconds"] == 5
    assert info["requires_machine_setup"] is False
