"""Run a MoltBook tool from the command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

import structlog

from moltbook_bridge.errors import MoltbookError
from moltbook_bridge.plugin import register
from moltbook_bridge.tools.registry import ToolRegistry
from moltbook_bridge.utils.config import get_settings, load_plugin_config
from moltbook_bridge.utils.logging import setup_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moltbook-bridge",
        description="Invoke a MoltBook agent tool and print its result",
    )
    parser.add_argument("tool", nargs="?", help="Tool name, e.g. moltbook_feed")
    parser.add_argument("--args", default="{}", help="Tool arguments as a JSON object")
    parser.add_argument("--config", help="YAML file with plugin configuration")
    parser.add_argument("--api-key", help="MoltBook API key (default: MOLTBOOK_API_KEY)")
    parser.add_argument("--api-base", help="API base URL under the trusted prefix")
    parser.add_argument("--submolt", help="Default submolt for posts")
    parser.add_argument("--timeout-ms", type=int, help="Per-request timeout in milliseconds")
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--list", action="store_true", help="List tool definitions and exit")
    return parser


def build_plugin_config(args: argparse.Namespace) -> dict[str, Any]:
    """Merge a config file with command line overrides."""
    config: dict[str, Any] = {}
    if args.config:
        config.update(load_plugin_config(args.config).model_dump(by_alias=True, exclude_none=True))

    overrides = {
        "apiKey": args.api_key,
        "apiBase": args.api_base,
        "defaultSubmolt": args.submolt,
        "requestTimeoutMs": args.timeout_ms,
    }
    config.update({key: value for key, value in overrides.items() if value is not None})
    return config


async def run_tool(registry: ToolRegistry, tool_name: str, arguments: dict[str, Any]) -> str:
    result = await registry.execute(tool_name, arguments)
    return result.text


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or get_settings().log_level)

    try:
        registry = ToolRegistry(plugin_config=build_plugin_config(args))
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    register(registry)

    if args.list:
        print(json.dumps(registry.get_tool_definitions(), indent=2))
        return 0

    if not args.tool:
        parser.error("a tool name is required unless --list is given")

    try:
        arguments = json.loads(args.args)
    except ValueError as e:
        print(f"error: --args is not valid JSON: {e}", file=sys.stderr)
        return 1
    if not isinstance(arguments, dict):
        print("error: --args must be a JSON object", file=sys.stderr)
        return 1

    try:
        print(asyncio.run(run_tool(registry, args.tool, arguments)))
    except (MoltbookError, ValueError) as e:
        logger.debug("Tool invocation failed", tool=args.tool, error_type=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
