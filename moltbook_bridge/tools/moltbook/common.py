"""Shared plumbing for tools that call the MoltBook API."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from moltbook_bridge.client import MoltbookClient
from moltbook_bridge.tools.base import BaseTool, ToolResultEnvelope

MIN_LIMIT = 1
MAX_LIMIT = 50


def clamp_limit(value: Any, default: int) -> int | float:
    """Clamp a numeric limit into [1, 50]; non-numbers fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    value = max(MIN_LIMIT, min(MAX_LIMIT, value))
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def clean_text(value: Any) -> str:
    """Trimmed string value, or "" for anything that is not a string."""
    return value.strip() if isinstance(value, str) else ""


class BridgedTool(BaseTool):
    """A tool whose body is one or more MoltBook API calls."""

    def __init__(self, client: MoltbookClient) -> None:
        self.client = client

    async def bridge(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        params: Mapping[str, Any] | None = None,
        shape: Callable[[Any], Any] | None = None,
    ) -> ToolResultEnvelope:
        """Call the API and wrap the (optionally reshaped) result as an envelope."""
        out = await self.client.call(path, method=method, body=body, params=params)
        return ToolResultEnvelope.from_value(shape(out) if shape else out)
