"""HTTP bridge to the MoltBook REST API."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import aiohttp
import structlog

from moltbook_bridge.errors import BridgeConnectionError, BridgeTimeoutError, UpstreamError
from moltbook_bridge.utils.config import EffectiveConfig, resolve_config

if TYPE_CHECKING:
    from moltbook_bridge.plugin import PluginApi

logger = structlog.get_logger()


def parse_body(text: str) -> Any:
    """Decode a response body, wrapping non-JSON text as ``{"raw": text}``."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return {"raw": text}


def error_detail(data: Any) -> str:
    """Pick a readable detail from an error body."""
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return json.dumps(data)


class MoltbookClient:
    """Performs one authenticated request per call.

    Configuration is resolved from ``api.plugin_config`` on every call. When no
    session is injected, a fresh ``aiohttp.ClientSession`` is opened and closed
    around each request.
    """

    def __init__(
        self,
        api: PluginApi,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.api = api
        self._session = session
        self._log = logger.bind(component="moltbook_client")

    def resolve_config(self) -> EffectiveConfig:
        return resolve_config(self.api.plugin_config)

    async def call(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded body.

        Raises:
            UnsafeEndpointError, MissingCredentialError: from config resolution.
            BridgeTimeoutError: if the request outlives ``timeout_ms``.
            BridgeConnectionError: if no response could be obtained.
            UpstreamError: on a non-2xx status.
        """
        config = self.resolve_config()

        request_headers = {
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
            **(headers or {}),
        }
        data = json.dumps(body) if body is not None else None

        self._log.debug("Sending request", method=method, path=path, timeout_ms=config.timeout_ms)

        try:
            status, response_headers, text = await asyncio.wait_for(
                self._send(method, f"{config.api_base}{path}", request_headers, data, params),
                timeout=config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            self._log.warning("Request timed out", method=method, path=path, timeout_ms=config.timeout_ms)
            raise BridgeTimeoutError(path, config.timeout_ms) from e
        except aiohttp.ClientError as e:
            self._log.error("Request failed", method=method, path=path, error=str(e))
            raise BridgeConnectionError(f"MoltBook API request to {path} failed: {e}") from e

        parsed = parse_body(text)

        if not 200 <= status < 300:
            retry_after = response_headers.get("retry-after")
            self._log.warning(
                "Upstream error",
                method=method,
                path=path,
                status=status,
                retry_after=retry_after,
            )
            raise UpstreamError(status, error_detail(parsed), retry_after)

        return parsed

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        data: str | None,
        params: Mapping[str, Any] | None,
    ) -> tuple[int, Mapping[str, str], str]:
        if self._session is not None:
            return await self._request(self._session, method, url, headers, data, params)

        async with aiohttp.ClientSession() as session:
            return await self._request(session, method, url, headers, data, params)

    @staticmethod
    async def _request(
        session: aiohttp.ClientSession,
        method: str,
        url: str,
        headers: dict[str, str],
        data: str | None,
        params: Mapping[str, Any] | None,
    ) -> tuple[int, Mapping[str, str], str]:
        async with session.request(
            method, url, headers=headers, params=params, data=data
        ) as response:
            # Undecodable bytes become U+FFFD so the body still reaches parse_body
            text = await response.text(errors="replace")
            return response.status, response.headers, text
