"""Tests for the MoltBook tools."""

from urllib.parse import parse_qs, urlsplit

import pytest

from moltbook_bridge.client import MoltbookClient
from moltbook_bridge.errors import InvalidArgumentError, MissingCredentialError, UpstreamError
from moltbook_bridge.tools.base import ToolResultEnvelope
from moltbook_bridge.tools.moltbook import FeedTool, PostTool, SearchTool, StatusTool
from moltbook_bridge.tools.moltbook.common import clamp_limit
from moltbook_bridge.tools.registry import ToolRegistry
from moltbook_bridge.utils.config import SAFE_BASE


def split_url(url: str) -> tuple[str, dict[str, list[str]]]:
    parts = urlsplit(url)
    return parts.path.removeprefix(urlsplit(SAFE_BASE).path), parse_qs(parts.query)


class TestEnvelope:
    """Tests for ToolResultEnvelope."""

    def test_from_value(self) -> None:
        envelope = ToolResultEnvelope.from_value({"id": 1, "title": "Héllo"})
        assert envelope.details == {"id": 1, "title": "Héllo"}
        assert envelope.content == [{"type": "text", "text": '{\n  "id": 1,\n  "title": "Héllo"\n}'}]
        assert envelope.to_dict()["details"] == {"id": 1, "title": "Héllo"}

    def test_clamp_limit(self) -> None:
        assert clamp_limit(500, 10) == 50
        assert clamp_limit(0, 10) == 1
        assert clamp_limit(-3, 10) == 1
        assert clamp_limit(25.0, 10) == 25
        assert clamp_limit("7", 10) == 10
        assert clamp_limit(None, 20) == 20


class TestStatusTool:
    """Tests for StatusTool."""

    @pytest.mark.asyncio
    async def test_combines_both_lookups(self, host: ToolRegistry, make_session, make_response) -> None:
        session = make_session(
            make_response(200, {"agent": {"name": "molty"}}),
            make_response(200, {"status": "claimed"}),
        )
        tool = StatusTool(MoltbookClient(host, session=session))

        result = await tool.execute({})

        assert result.details == {"me": {"agent": {"name": "molty"}}, "status": {"status": "claimed"}}
        assert [split_url(r["url"])[0] for r in session.requests] == ["/agents/me", "/agents/status"]

    @pytest.mark.asyncio
    async def test_no_partial_result(self, host: ToolRegistry, make_session, make_response) -> None:
        """Test a failing second lookup fails the whole call."""
        session = make_session(
            make_response(200, {"agent": {"name": "molty"}}),
            make_response(401, {"error": "Unauthorized"}),
        )
        tool = StatusTool(MoltbookClient(host, session=session))

        with pytest.raises(UpstreamError, match="401: Unauthorized"):
            await tool.execute()


class TestPostTool:
    """Tests for PostTool."""

    @pytest.fixture
    def post(self, client: MoltbookClient) -> PostTool:
        return PostTool(client)

    @pytest.mark.asyncio
    async def test_default_submolt(self, post: PostTool, session) -> None:
        """Test posts without a submolt go to "general"."""
        result = await post.execute({"title": "Hello", "content": "World"})

        assert result.details == {"ok": True}
        assert session.requests[0]["method"] == "POST"
        assert split_url(session.requests[0]["url"])[0] == "/posts"
        assert session.requests[0]["body"] == {"submolt": "general", "title": "Hello", "content": "World"}

    @pytest.mark.asyncio
    async def test_configured_submolt(self, post: PostTool, host: ToolRegistry, session) -> None:
        host.plugin_config["defaultSubmolt"] = "cats"
        await post.execute({"title": "Hello", "content": "World"})
        assert session.requests[0]["body"]["submolt"] == "cats"

    @pytest.mark.asyncio
    async def test_explicit_submolt_and_link(self, post: PostTool, session) -> None:
        await post.execute({
            "submolt": "  dogs ",
            "title": " Look ",
            "content": "   ",
            "url": "https://example.com/dog",
        })
        assert session.requests[0]["body"] == {
            "submolt": "dogs",
            "title": "Look",
            "url": "https://example.com/dog",
        }

    @pytest.mark.asyncio
    async def test_content_and_url(self, post: PostTool, session) -> None:
        await post.execute({"title": "Both", "content": "text", "url": "https://example.com"})
        body = session.requests[0]["body"]
        assert body["content"] == "text"
        assert body["url"] == "https://example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   ", "\n\t"])
    async def test_blank_title(self, post: PostTool, session, title: str) -> None:
        with pytest.raises(InvalidArgumentError):
            await post.execute({"title": title, "content": "World", "url": "https://example.com"})
        assert session.requests == []

    @pytest.mark.asyncio
    async def test_missing_title(self, post: PostTool, session) -> None:
        with pytest.raises(InvalidArgumentError, match="title"):
            await post.execute({"content": "World"})
        assert session.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("extra", [{}, {"content": "  "}, {"url": ""}, {"content": None, "url": None}])
    async def test_requires_content_or_url(self, post: PostTool, session, extra: dict) -> None:
        with pytest.raises(InvalidArgumentError, match="content or url"):
            await post.execute({"title": "Hello", **extra})
        assert session.requests == []

    @pytest.mark.asyncio
    async def test_validation_before_credential(self, session, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test argument errors win over a missing key."""
        monkeypatch.delenv("MOLTBOOK_API_KEY", raising=False)
        post = PostTool(MoltbookClient(ToolRegistry(), session=session))

        with pytest.raises(InvalidArgumentError):
            await post.execute({"title": " ", "content": "x"})
        with pytest.raises(MissingCredentialError):
            await post.execute({"title": "ok", "content": "x"})


class TestFeedTool:
    """Tests for FeedTool."""

    @pytest.fixture
    def feed(self, client: MoltbookClient) -> FeedTool:
        return FeedTool(client)

    @pytest.mark.asyncio
    async def test_defaults(self, feed: FeedTool, session) -> None:
        await feed.execute({})
        path, query = split_url(session.requests[0]["url"])
        assert path == "/feed"
        assert query == {"sort": ["new"], "limit": ["10"]}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit,expected", [(500, "50"), (0, "1"), (25, "25")])
    async def test_limit_clamped(self, feed: FeedTool, session, limit: int, expected: str) -> None:
        await feed.execute({"limit": limit})
        _, query = split_url(session.requests[0]["url"])
        assert query["limit"] == [expected]

    @pytest.mark.asyncio
    async def test_personalized_ignores_submolt(self, feed: FeedTool, session) -> None:
        await feed.execute({"personalized": True, "submolt": "cats", "sort": "hot"})
        path, query = split_url(session.requests[0]["url"])
        assert path == "/feed"
        assert "submolt" not in query
        assert query["sort"] == ["hot"]

    @pytest.mark.asyncio
    async def test_global_with_submolt(self, feed: FeedTool, session) -> None:
        await feed.execute({"personalized": False, "submolt": "cats"})
        assert session.requests[0]["params"] == {"sort": "new", "limit": 10, "submolt": "cats"}
        path, query = split_url(session.requests[0]["url"])
        assert path == "/posts"
        assert query == {"sort": ["new"], "limit": ["10"], "submolt": ["cats"]}

    @pytest.mark.asyncio
    async def test_global_blank_submolt(self, feed: FeedTool, session) -> None:
        await feed.execute({"personalized": False, "submolt": "  "})
        path, query = split_url(session.requests[0]["url"])
        assert path == "/posts"
        assert "submolt" not in query

    @pytest.mark.asyncio
    async def test_returns_list(self, host: ToolRegistry, make_session, make_response) -> None:
        posts = [{"id": "p1"}, {"id": "p2"}]
        feed = FeedTool(MoltbookClient(host, session=make_session(make_response(200, posts))))
        result = await feed.execute({})
        assert result.details == posts

    @pytest.mark.asyncio
    async def test_wrong_type_rejected(self, feed: FeedTool, session) -> None:
        with pytest.raises(InvalidArgumentError, match="limit"):
            await feed.execute({"limit": "many"})
        with pytest.raises(InvalidArgumentError, match="personalized"):
            await feed.execute({"personalized": "no"})
        assert session.requests == []


class TestSearchTool:
    """Tests for SearchTool."""

    @pytest.fixture
    def search(self, client: MoltbookClient) -> SearchTool:
        return SearchTool(client)

    @pytest.mark.asyncio
    async def test_basic_search(self, search: SearchTool, session) -> None:
        await search.execute({"query": " agent memory "})
        assert session.requests[0]["params"] == {"q": "agent memory", "type": "all", "limit": 20}
        path, query = split_url(session.requests[0]["url"])
        assert path == "/search"
        assert query == {"q": ["agent memory"], "type": ["all"], "limit": ["20"]}

    @pytest.mark.asyncio
    async def test_type_and_limit(self, search: SearchTool, session) -> None:
        await search.execute({"query": "cats", "type": "posts", "limit": 99})
        _, query = split_url(session.requests[0]["url"])
        assert query["type"] == ["posts"]
        assert query["limit"] == ["50"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["a", "", "   "])
    async def test_short_or_blank_query(self, search: SearchTool, session, query: str) -> None:
        with pytest.raises(InvalidArgumentError):
            await search.execute({"query": query})
        assert session.requests == []

    @pytest.mark.asyncio
    async def test_missing_query(self, search: SearchTool, session) -> None:
        with pytest.raises(InvalidArgumentError, match="Missing required parameter: query"):
            await search.execute({})
        assert session.requests == []


class TestDefinitions:
    """Tests for the published parameter schemas."""

    def test_schemas(self, client: MoltbookClient) -> None:
        schemas = {
            tool.name: tool.get_definition().to_json_schema()
            for tool in (StatusTool(client), PostTool(client), FeedTool(client), SearchTool(client))
        }

        assert schemas["moltbook_status"] == {"type": "object", "properties": {}, "required": []}
        assert schemas["moltbook_post"]["required"] == ["title"]
        assert schemas["moltbook_post"]["properties"]["title"]["minLength"] == 1
        assert schemas["moltbook_feed"]["properties"]["personalized"]["default"] is True
        assert schemas["moltbook_feed"]["properties"]["limit"]["default"] == 10
        assert schemas["moltbook_search"]["required"] == ["query"]
        assert schemas["moltbook_search"]["properties"]["query"]["minLength"] == 2
