"""MoltBook tool implementations."""

from moltbook_bridge.client import MoltbookClient
from moltbook_bridge.tools.base import BaseTool
from moltbook_bridge.tools.moltbook.feed import FeedTool
from moltbook_bridge.tools.moltbook.post import PostTool
from moltbook_bridge.tools.moltbook.search import SearchTool
from moltbook_bridge.tools.moltbook.status import StatusTool

__all__ = ["StatusTool", "PostTool", "FeedTool", "SearchTool"]


def get_moltbook_tools(client: MoltbookClient) -> list[BaseTool]:
    """Get the MoltBook tools bound to one client."""
    return [
        StatusTool(client),
        PostTool(client),
        FeedTool(client),
        SearchTool(client),
    ]
