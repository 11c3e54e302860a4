"""Tool system - base interfaces, registry and MoltBook tools."""

from moltbook_bridge.tools.base import BaseTool, ToolDefinition, ToolParameter, ToolResultEnvelope
from moltbook_bridge.tools.registry import ToolRegistry

__all__ = ["BaseTool", "ToolDefinition", "ToolParameter", "ToolResultEnvelope", "ToolRegistry"]
