import logging

from elastinode.common.errors import TeardownError
from elastinode.provisioning.models import Node, TeardownResult

log = logging.getLogger(__name__)


class DestroyController:
    """
    Guarded teardown of nodes this provider created.

    destroy() never raises: failures end up in the returned TeardownResult
    and in the log, since the resource may already be gone.
    """

    def __init__(self, *, client, namespace: str):
        self.client = client
        self.namespace = namespace

    async def destroy(self, node: Node) -> TeardownResult:
        result = TeardownResult(node=str(node))

        if not node.is_auto_spawned():
            log.warning(f"Tried to call destroy_node on a non-autospawned node: {node}")
            result.skipped = True
            return result

        try:
            log.debug(f"Destroying pod {node}")
            existed = await self.client.delete(node.machine_name, self.namespace)
        except Exception as e:
            result.failure = TeardownError(
                f"Failed to destroy pod {node}: {e}",
                details={"resource_name": node.machine_name},
            )
            result.error = result.failure.message
            log.error(result.error)
            return result

        result.destroyed = True
        if existed is False:
            log.info(f"Pod {node} was already gone.")
        else:
            log.info(f"Pod {node} destroyed successfully.")
        return result
