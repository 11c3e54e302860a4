"""Post creation tool."""

from __future__ import annotations

from typing import Any

from moltbook_bridge.errors import InvalidArgumentError
from moltbook_bridge.tools.base import (
    ParameterType,
    ToolExecutionContext,
    ToolParameter,
    ToolResultEnvelope,
)
from moltbook_bridge.tools.moltbook.common import BridgedTool, clean_text
from moltbook_bridge.utils.config import DEFAULT_CHANNEL, PluginConfig


class PostTool(BridgedTool):
    """Creates a text or link post in a submolt."""

    @property
    def name(self) -> str:
        return "moltbook_post"

    @property
    def description(self) -> str:
        return "Create a text or link post on MoltBook."

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="submolt",
                type=ParameterType.STRING,
                description="Community to post in (defaults to the configured submolt)",
                required=False,
            ),
            ToolParameter(
                name="title",
                type=ParameterType.STRING,
                description="Post title",
                required=True,
                min_length=1,
            ),
            ToolParameter(
                name="content",
                type=ParameterType.STRING,
                description="Post body for a text post",
                required=False,
            ),
            ToolParameter(
                name="url",
                type=ParameterType.STRING,
                description="Link for a link post",
                required=False,
            ),
        ]

    def default_submolt(self) -> str:
        # Only the host config is read here, so a missing key surfaces later
        cfg = PluginConfig.from_host(self.client.api.plugin_config)
        return (cfg.default_submolt or "").strip() or DEFAULT_CHANNEL

    def build_body(self, arguments: dict[str, Any]) -> dict[str, str]:
        """Validate arguments and assemble the request body."""
        submolt = clean_text(arguments.get("submolt")) or self.default_submolt()
        title = clean_text(arguments.get("title"))
        content = clean_text(arguments.get("content"))
        url = clean_text(arguments.get("url"))

        if not title:
            raise InvalidArgumentError("title is required")
        if not content and not url:
            raise InvalidArgumentError("Either content or url is required")

        body = {"submolt": submolt, "title": title}
        if content:
            body["content"] = content
        if url:
            body["url"] = url
        return body

    async def run(
        self,
        arguments: dict[str, Any],
        context: ToolExecutionContext | None = None,
    ) -> ToolResultEnvelope:
        return await self.bridge("/posts", method="POST", body=self.build_body(arguments))
