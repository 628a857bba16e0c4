import pytest

from elastinode.common.errors import ConfigurationError
from elastinode.provisioning.config import KubernetesProviderSettings, ProviderConfig

REQUIRED = ["access_key", "secret_key", "s3_endpoint", "s3_bucket"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "ELASTINODE_ACCESS_KEY",
        "ELASTINODE_SECRET_KEY",
        "ELASTINODE_S3_ENDPOINT",
        "ELASTINODE_S3_BUCKET",
        "ELASTINODE_NAMESPACE",
    ):
        monkeypatch.delenv(var, raising=False)


def test_missing_required_keys_are_all_reported():
    config = ProviderConfig.from_mapping({"access_key": "AK"}, required_keys=REQUIRED)

    with pytest.raises(ConfigurationError) as exc_info:
        config.validate_required()

    assert exc_info.value.details["missing"] == ["secret_key", "s3_endpoint", "s3_bucket"]
    assert exc_info.value.code == "CONFIGURATION_ERROR"


def test_complete_config_validates():
    config = ProviderConfig.from_mapping(
        {"access_key": "AK", "secret_key": "SK", "s3_endpoint": "e", "s3_bucket": "b"},
        required_keys=REQUIRED,
    )

    config.validate_required()


def test_get_falls_back_to_default_for_empty_values():
    config = ProviderConfig.from_mapping({"security_group": ""})

    assert config.get("security_group", "none") == "none"
    assert config.get("unknown_key", 42) == 42
    assert config.get("namespace") == "default"


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("ELASTINODE_NAMESPACE", "odm-workers")
    monkeypatch.setenv("ELASTINODE_POD_LIMIT", "12")

    settings = KubernetesProviderSettings()

    assert settings.namespace == "odm-workers"
    assert settings.pod_limit == 12
    assert settings.poll_interval_seconds is None
