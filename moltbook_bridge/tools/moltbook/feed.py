"""Feed and global posts tool."""

from __future__ import annotations

from typing import Any

from moltbook_bridge.tools.base import (
    ParameterType,
    ToolExecutionContext,
    ToolParameter,
    ToolResultEnvelope,
)
from moltbook_bridge.tools.moltbook.common import BridgedTool, clamp_limit, clean_text

DEFAULT_SORT = "new"
DEFAULT_LIMIT = 10


class FeedTool(BridgedTool):
    """Reads the personalized feed, or global posts optionally filtered by submolt."""

    @property
    def name(self) -> str:
        return "moltbook_feed"

    @property
    def description(self) -> str:
        return "Fetch MoltBook feed or global posts."

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="personalized",
                type=ParameterType.BOOLEAN,
                description="Use the agent's personalized feed (submolt is ignored)",
                required=False,
                default=True,
            ),
            ToolParameter(
                name="sort",
                type=ParameterType.STRING,
                description="Sort order, e.g. new, hot, top",
                required=False,
                default=DEFAULT_SORT,
            ),
            ToolParameter(
                name="limit",
                type=ParameterType.NUMBER,
                description="Number of posts (clamped to 1-50)",
                required=False,
                default=DEFAULT_LIMIT,
            ),
            ToolParameter(
                name="submolt",
                type=ParameterType.STRING,
                description="Only for global posts: restrict to this submolt",
                required=False,
            ),
        ]

    def build_request(self, arguments: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Endpoint path and query parameters for the requested listing."""
        personalized = arguments.get("personalized") is not False
        sort = arguments.get("sort")
        params: dict[str, Any] = {
            "sort": sort if isinstance(sort, str) else DEFAULT_SORT,
            "limit": clamp_limit(arguments.get("limit"), DEFAULT_LIMIT),
        }

        if personalized:
            return "/feed", params

        submolt = clean_text(arguments.get("submolt"))
        if submolt:
            params["submolt"] = submolt
        return "/posts", params

    async def run(
        self,
        arguments: dict[str, Any],
        context: ToolExecutionContext | None = None,
    ) -> ToolResultEnvelope:
        path, params = self.build_request(arguments)
        return await self.bridge(path, params=params)
