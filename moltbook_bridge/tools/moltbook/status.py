"""Agent auth and claim status tool."""

from __future__ import annotations

from typing import Any

from moltbook_bridge.tools.base import ToolExecutionContext, ToolParameter, ToolResultEnvelope
from moltbook_bridge.tools.moltbook.common import BridgedTool


class StatusTool(BridgedTool):
    """Looks up the current agent and its claim status.

    Both lookups must succeed; a failure in either fails the whole call.
    """

    @property
    def name(self) -> str:
        return "moltbook_status"

    @property
    def description(self) -> str:
        return "Check MoltBook auth and claim status for current agent."

    @property
    def parameters(self) -> list[ToolParameter]:
        return []

    async def run(
        self,
        arguments: dict[str, Any],
        context: ToolExecutionContext | None = None,
    ) -> ToolResultEnvelope:
        me = await self.client.call("/agents/me")
        return await self.bridge("/agents/status", shape=lambda status: {"me": me, "status": status})
