import json
import logging

import pytest

from elastinode.cli import build_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("ELASTINODE_ACCESS_KEY", "ELASTINODE_SECRET_KEY", "ELASTINODE_S3_ENDPOINT", "ELASTINODE_S3_BUCKET"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parser_defaults_to_kubernetes_driver():
    args = build_parser().parse_args(["create", "--images", "120"])

    assert args.driver == "kubernetes"
    assert args.images == 120


def test_providers_command_lists_capabilities(capsys):
    assert main(["providers"]) == 0

    captured = capsys.readouterr()
    assert "kubernetes" in json.loads(captured.out)
    assert "Logging initialized" in captured.err


def test_check_reports_missing_configuration(tmp_path, capsys):
    config_file = tmp_path / "provider.json"
    config_file.write_text(json.dumps({"access_key": "AK"}))

    assert main(["check", "--config", str(config_file)]) == 2

    error = json.loads(capsys.readouterr().out)
    assert error["code"] == "CONFIGURATION_ERROR"
    assert "secret_key" in error["details"]["missing"]
