"""Shared fixtures: a fake aiohttp session and a host with plugin config."""

from __future__ import annotations

import asyncio
import json
from typing import Any
from urllib.parse import urlencode

import pytest
import structlog

from moltbook_bridge.client import MoltbookClient
from moltbook_bridge.tools.registry import ToolRegistry


class FakeResponse:
    """Canned response with the attributes the bridge reads."""

    def __init__(self, status: int = 200, body: Any = None, headers: dict[str, str] | None = None) -> None:
        self.status = status
        self.headers = headers or {}
        if isinstance(body, bytes):
            self._body = body
        elif body is None or isinstance(body, str):
            self._body = (body or "").encode()
        else:
            self._body = json.dumps(body).encode()

    async def text(self, encoding: str | None = None, errors: str = "strict") -> str:
        return self._body.decode(encoding or "utf-8", errors)


class _RequestContext:
    def __init__(self, session: FakeSession, response: FakeResponse | None) -> None:
        self._session = session
        self._response = response

    async def __aenter__(self) -> FakeResponse:
        if self._response is None:
            try:
                await asyncio.sleep(3600)
            except asyncio.CancelledError:
                self._session.cancelled += 1
                raise
        return self._response

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


class FakeSession:
    """Stands in for ``aiohttp.ClientSession``.

    Responses are served in order; once one is left it is reused. A ``None``
    response never completes, to exercise the timeout path.
    """

    def __init__(self, *responses: FakeResponse | None) -> None:
        self.responses = list(responses) or [FakeResponse()]
        self.requests: list[dict[str, Any]] = []
        self.cancelled = 0

    def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        data: str | None = None,
    ) -> _RequestContext:
        if params:
            url = f"{url}?{urlencode(params)}"
        self.requests.append({
            "method": method,
            "url": url,
            "params": dict(params or {}),
            "headers": dict(headers or {}),
            "body": json.loads(data) if data else None,
        })
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return _RequestContext(self, response)


@pytest.fixture
def host() -> ToolRegistry:
    return ToolRegistry(plugin_config={"apiKey": "test-key"})


@pytest.fixture
def session() -> FakeSession:
    return FakeSession(FakeResponse(200, {"ok": True}))


@pytest.fixture
def client(host: ToolRegistry, session: FakeSession) -> MoltbookClient:
    return MoltbookClient(host, session=session)


@pytest.fixture
def make_session() -> type[FakeSession]:
    return FakeSession


@pytest.fixture
def make_response() -> type[FakeResponse]:
    return FakeResponse


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
