import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

from dotenv import load_dotenv, find_dotenv

from elastinode.common.errors import NodeProviderError
from elastinode.common.logger import setup_logging
from elastinode.provisioning.adapter_engine.registry import (
    get_provider,
    get_provider_info,
    get_registered_providers,
)
from elastinode.provisioning.config import ProviderConfig
from elastinode.provisioning.models import Node

logger = logging.getLogger(__name__)


def _load_env():
    """
    Load environment variables for local/dev usage.
    In Docker / K8s, env vars are injected externally.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)


def _load_config(path):
    if not path:
        return ProviderConfig.from_mapping()
    with open(path) as f:
        return ProviderConfig.from_mapping(json.load(f))


def _print_json(data):
    print(json.dumps(data, indent=2, default=str))


async def cmd_providers(args):
    _print_json(get_provider_info())
    return 0


async def cmd_check(args):
    provider = get_provider(args.driver, config=_load_config(args.config))
    try:
        await provider.initialize()
        _print_json({
            "driver": provider.get_driver_name(),
            "namespace": provider.get_namespace(),
            "machines_limit": provider.get_machines_limit(),
            "ready": True,
        })
    finally:
        await provider.close()
    return 0


async def cmd_create(args):
    provider = get_provider(args.driver, config=_load_config(args.config))
    try:
        await provider.initialize()
        node = await provider.create_node(images_count=args.images)
        _print_json(asdict(node))
    finally:
        await provider.close()
    return 0


async def cmd_destroy(args):
    provider = get_provider(args.driver, config=_load_config(args.config))
    node = Node(args.host or args.name, provider.get_service_port(), token="")
    node.bind_machine(args.name, provider.get_max_runtime(), provider.get_max_upload_time())
    try:
        result = await provider.destroy_node(node)
        _print_json(asdict(result))
    finally:
        await provider.close()
    return 0 if result.ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elastinode",
        description="Spawn and tear down ephemeral worker nodes",
    )
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--driver",
        default="kubernetes",
        choices=get_registered_providers(),
    )
    common.add_argument("--config", help="JSON file with provider settings")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("providers", help="List registered providers and capabilities")

    sub.add_parser("check", parents=[common], help="Validate config and storage reachability")

    create = sub.add_parser("create", parents=[common], help="Spawn a node and wait for it")
    create.add_argument("--images", type=int, required=True, help="Images count hint")

    destroy = sub.add_parser("destroy", parents=[common], help="Destroy a spawned node")
    destroy.add_argument("name", help="Resource name of the node")
    destroy.add_argument("--host", help="Node address (for log messages only)")

    return parser


COMMANDS = {
    "providers": cmd_providers,
    "check": cmd_check,
    "create": cmd_create,
    "destroy": cmd_destroy,
}


def main(argv=None):
    _load_env()
    args = build_parser().parse_args(argv)
    # stdout carries the JSON result only
    setup_logging(
        level=args.log_level,
        service_name="elastinode",
        use_json=args.json_logs,
        stream=sys.stderr,
    )

    try:
        return asyncio.run(COMMANDS[args.command](args))
    except NodeProviderError as e:
        logger.error(f"{e.code}: {e.message}")
        _print_json(e.to_dict())
        return 2


if __name__ == "__main__":
    sys.exit(main())
