import pytest
from aiohttp import web
from aiohttp import test_utils

from elastinode.common.errors import ConfigurationError, StorageUnreachableError
from elastinode.provisioning.storage import StorageProbe, storage_url


def test_storage_url_adds_scheme():
    assert storage_url("s3.example.com", "bucket") == "https://s3.example.com/bucket"
    assert storage_url("http://minio:9000/", "bucket") == "http://minio:9000/bucket"


@pytest.mark.asyncio
async def test_forbidden_response_counts_as_reachable():
    seen = []

    async def bucket(request):
        seen.append((request.method, request.match_info["bucket"]))
        return web.Response(status=403)

    app = web.Application()
    app.router.add_get("/{bucket}", bucket)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        status = await StorageProbe(timeout_seconds=5).check(
            str(server.make_url("")), "odm-results"
        )
    finally:
        await server.close()

    assert status == 403
    assert seen == [("HEAD", "odm-results")]


@pytest.mark.asyncio
async def test_unreachable_endpoint_raises_configuration_error():
    probe = StorageProbe(timeout_seconds=2)

    with pytest.raises(StorageUnreachableError) as exc_info:
        await probe.check("http://127.0.0.1:1", "bucket")

    assert isinstance(exc_info.value, ConfigurationError)
    assert exc_info.value.details["url"] == "http://127.0.0.1:1/bucket"
