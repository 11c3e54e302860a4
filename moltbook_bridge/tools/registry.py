"""Tool registry acting as an in-process host for plugin tools."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from moltbook_bridge.tools.base import BaseTool, ToolExecutionContext, ToolResultEnvelope

logger = structlog.get_logger()


class ToolRegistry:
    """Registry for managing tools and their execution.

    Implements the host side of ``PluginApi``: ``plugin_config`` is a plain
    attribute so edits apply to the next tool call, and ``register_tool``
    honours the ``optional`` option for tools the host has disabled.
    """

    def __init__(
        self,
        plugin_config: Mapping[str, Any] | None = None,
        disabled_tools: Iterable[str] = (),
    ) -> None:
        self.plugin_config: dict[str, Any] = dict(plugin_config or {})
        self.disabled_tools = set(disabled_tools)
        self._tools: dict[str, BaseTool] = {}
        self._optional: set[str] = set()
        self._log = logger.bind(component="tool_registry")

    def register_tool(self, tool: BaseTool, options: Mapping[str, Any] | None = None) -> None:
        """Register a tool, skipping it if optional and disabled by the host."""
        optional = bool((options or {}).get("optional", False))

        if tool.name in self.disabled_tools:
            if not optional:
                raise ValueError(f"Tool {tool.name} is required and cannot be disabled")
            self._log.info("Skipped disabled tool", tool=tool.name)
            return

        if tool.name in self._tools:
            self._log.warning("Overwriting existing tool", tool=tool.name)

        self._tools[tool.name] = tool
        if optional:
            self._optional.add(tool.name)
        else:
            self._optional.discard(tool.name)
        self._log.info("Registered tool", tool=tool.name, optional=optional)

    def unregister(self, tool_name: str) -> bool:
        """Unregister a tool."""
        if tool_name in self._tools:
            del self._tools[tool_name]
            self._optional.discard(tool_name)
            self._log.info("Unregistered tool", tool=tool_name)
            return True
        return False

    def get(self, tool_name: str) -> BaseTool | None:
        """Get a tool by name."""
        return self._tools.get(tool_name)

    def is_optional(self, tool_name: str) -> bool:
        return tool_name in self._optional

    async def execute(
        self,
        tool_name: str,
        arguments: dict[str, Any] | None = None,
        tool_call_id: str | None = None,
    ) -> ToolResultEnvelope:
        """Execute a tool by name."""
        tool = self._tools.get(tool_name)
        if not tool:
            raise ValueError(f"Tool not found: {tool_name}")

        context = ToolExecutionContext(tool_call_id=tool_call_id or str(uuid.uuid4())[:8])
        self._log.debug(
            "Executing tool",
            tool=tool_name,
            tool_call_id=context.tool_call_id,
            started_at=context.timestamp.isoformat(),
        )

        try:
            result = await tool.execute(arguments or {}, context)
        except Exception as e:
            self._log.error("Tool execution failed", tool=tool_name, error=str(e))
            raise

        elapsed_ms = (datetime.now(timezone.utc) - context.timestamp).total_seconds() * 1000
        self._log.debug(
            "Tool execution complete",
            tool=tool_name,
            tool_call_id=context.tool_call_id,
            execution_time_ms=elapsed_ms,
        )
        return result

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """Get OpenAI-compatible tool definitions for all registered tools."""
        return [tool.get_definition().to_openai_format() for tool in self._tools.values()]

    @property
    def tool_names(self) -> list[str]:
        """Get list of registered tool names."""
        return list(self._tools.keys())

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
