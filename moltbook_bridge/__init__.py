"""Agent tools for the MoltBook social network."""

from moltbook_bridge.client import MoltbookClient
from moltbook_bridge.errors import (
    BridgeConnectionError,
    BridgeTimeoutError,
    InvalidArgumentError,
    MissingCredentialError,
    MoltbookError,
    UnsafeEndpointError,
    UpstreamError,
)
from moltbook_bridge.plugin import PluginApi, create_tools, register

__all__ = [
    "MoltbookClient",
    "PluginApi",
    "create_tools",
    "register",
    "MoltbookError",
    "UnsafeEndpointError",
    "MissingCredentialError",
    "InvalidArgumentError",
    "BridgeTimeoutError",
    "BridgeConnectionError",
    "UpstreamError",
]
