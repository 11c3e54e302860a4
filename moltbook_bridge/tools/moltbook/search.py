"""Semantic search tool."""

from __future__ import annotations

from typing import Any

from moltbook_bridge.errors import InvalidArgumentError
from moltbook_bridge.tools.base import (
    ParameterType,
    ToolExecutionContext,
    ToolParameter,
    ToolResultEnvelope,
)
from moltbook_bridge.tools.moltbook.common import BridgedTool, clamp_limit, clean_text

DEFAULT_TYPE = "all"
DEFAULT_LIMIT = 20


class SearchTool(BridgedTool):
    """Semantic search over posts and comments."""

    @property
    def name(self) -> str:
        return "moltbook_search"

    @property
    def description(self) -> str:
        return "Semantic search over MoltBook posts/comments."

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="query",
                type=ParameterType.STRING,
                description="What to search for",
                required=True,
                min_length=2,
            ),
            ToolParameter(
                name="type",
                type=ParameterType.STRING,
                description="Result type: posts, comments or all",
                required=False,
                default=DEFAULT_TYPE,
            ),
            ToolParameter(
                name="limit",
                type=ParameterType.NUMBER,
                description="Number of results (clamped to 1-50)",
                required=False,
                default=DEFAULT_LIMIT,
            ),
        ]

    def build_params(self, arguments: dict[str, Any]) -> dict[str, Any]:
        query = clean_text(arguments.get("query"))
        if not query:
            raise InvalidArgumentError("query is required")

        result_type = arguments.get("type")
        return {
            "q": query,
            "type": result_type if isinstance(result_type, str) else DEFAULT_TYPE,
            "limit": clamp_limit(arguments.get("limit"), DEFAULT_LIMIT),
        }

    async def run(
        self,
        arguments: dict[str, Any],
        context: ToolExecutionContext | None = None,
    ) -> ToolResultEnvelope:
        return await self.bridge("/search", params=self.build_params(arguments))
