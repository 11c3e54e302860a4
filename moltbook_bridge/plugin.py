"""Plugin entry point: registers the MoltBook tools with a host runtime."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import aiohttp

from moltbook_bridge.client import MoltbookClient
from moltbook_bridge.tools.base import BaseTool
from moltbook_bridge.tools.moltbook import get_moltbook_tools

REGISTRATION_OPTIONS: dict[str, Any] = {"optional": True}


@runtime_checkable
class PluginApi(Protocol):
    """The host capabilities this plugin relies on."""

    plugin_config: Mapping[str, Any] | None

    def register_tool(self, tool: BaseTool, options: Mapping[str, Any] | None = None) -> None: ...


def create_tools(api: PluginApi, session: aiohttp.ClientSession | None = None) -> list[BaseTool]:
    """Build the four MoltBook tools sharing one client bound to ``api``."""
    return get_moltbook_tools(MoltbookClient(api, session=session))


def register(api: PluginApi, session: aiohttp.ClientSession | None = None) -> None:
    """Register every MoltBook tool as optional so the host may disable any of them."""
    for tool in create_tools(api, session=session):
        api.register_tool(tool, dict(REGISTRATION_OPTIONS))
