import json
import logging

from elastinode.common.errors import NodeReadyTimeoutError
from elastinode.common.logger import JsonFormatter, resource_name_ctx


def make_record(message="hello"):
    return logging.LogRecord("elastinode.test", logging.INFO, __file__, 1, message, None, None)


def test_json_formatter_stamps_current_resource():
    token = resource_name_ctx.set("nodeodm-5-abcdefgh")
    try:
        line = JsonFormatter().format(make_record())
    finally:
        resource_name_ctx.reset(token)

    payload = json.loads(line)
    assert payload["resource"] == "nodeodm-5-abcdefgh"
    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"


def test_timeout_error_serializes_with_code():
    error = NodeReadyTimeoutError("nodeodm-5-abcdefgh", 60)

    assert error.to_dict() == {
        "code": "NODE_READY_TIMEOUT",
        "message": "Pod nodeodm-5-abcdefgh failed to obtain an IP address after 60 retries.",
        "details": {"resource_name": "nodeodm-5-abcdefgh", "attempts": 60},
    }
    assert isinstance(error, TimeoutError)
