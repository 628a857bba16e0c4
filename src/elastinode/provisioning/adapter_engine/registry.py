from elastinode.provisioning.adapter_engine.adapters.k8s.k8s_provider import (
    KubernetesProvider,
)

PROVIDER_REGISTRY = {
    "kubernetes": KubernetesProvider,
}


def get_provider(name: str, **kwargs):
    """
    Get provider instance by driver name.

    Args:
        name: Driver name (e.g., "kubernetes")
        **kwargs: Forwarded to the provider constructor

    Returns:
        NodeProvisioningBackend instance

    Raises:
        ValueError: If provider is not registered
    """
    provider_cls = PROVIDER_REGISTRY.get(name)
    if not provider_cls:
        raise ValueError(
            f"No provider registered for driver '{name}'. "
            f"Available providers: {list(PROVIDER_REGISTRY.keys())}"
        )
    return provider_cls(**kwargs)


def get_registered_providers() -> list:
    return list(PROVIDER_REGISTRY.keys())


def get_provider_info() -> dict:
    """
    Get information about all registered providers including their capabilities.

    Returns:
        Dict mapping driver names to their capabilities
    """
    return {
        name: {"capabilities": provider_cls.CAPABILITIES.to_dict()}
        for name, provider_cls in PROVIDER_REGISTRY.items()
    }
