"""Asynchronous client for Model Context Protocol servers over HTTP."""

from __future__ import annotations

import json
import re
import time
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar
from urllib.parse import urlsplit

import httpx

from .errors import ApiError, ConfigError, HttpError, SerializationError
from .mcp_types import (
    ClientCapabilities,
    ExecutePromptParams,
    ExecutePromptResponse,
    GetResourceParams,
    JsonRpcRequest,
    JsonRpcResponse,
    ResourceResponse,
    SamplingResponse,
    ServerCapabilities,
    ToolCallParams,
    ToolCallResponse,
)

_T = TypeVar("_T")

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


def _parse_server_url(url: str) -> str:
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise ConfigError(f"Invalid server URL: {exc}") from exc
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        raise ConfigError("Invalid server URL: relative URL without a base")
    if parts.scheme.lower() in _HOST_SCHEMES and not parts.hostname:
        raise ConfigError("Invalid server URL: empty host")
    return url


def _generate_id() -> str:
    return f"req-{time.time_ns()}"


class MCPClient:
    """Talks JSON-RPC to one MCP server.

    Every call except ``initialize`` requires the client to have been
    initialized first.
    """

    def __init__(self, server_url: str, *, http_client: httpx.AsyncClient | None = None) -> None:
        self._server_url = _parse_server_url(str(server_url))
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient()
        self._capabilities: ServerCapabilities | None = None

    @property
    def server_url(self) -> str:
        return self._server_url

    async def __aenter__(self) -> MCPClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP client if this object created it."""
        if self._owns_http:
            await self._http.aclose()

    def capabilities(self) -> ServerCapabilities | None:
        """The server capabilities, or None before initialization."""
        return self._capabilities

    async def initialize(self, client_capabilities: ClientCapabilities) -> ServerCapabilities:
        """Exchange capabilities with the server and remember its answer."""
        request = JsonRpcRequest(
            id=_generate_id(),
            method="initialize",
            params={"capabilities": client_capabilities.to_dict()},
        )
        response = await self._send_request(request)
        capabilities = self._parse_response(response, ServerCapabilities.from_dict)
        self._capabilities = capabilities
        return capabilities

    async def get_resource(self, params: GetResourceParams) -> ResourceResponse:
        """Fetch a resource from the server."""
        return await self._call("getResource", params.to_dict(), ResourceResponse.from_dict)

    async def tool_call(self, params: ToolCallParams) -> ToolCallResponse:
        """Invoke a tool on the server."""
        return await self._call("toolCall", params.to_dict(), ToolCallResponse.from_dict)

    async def execute_prompt(self, params: ExecutePromptParams) -> ExecutePromptResponse:
        """Run a prompt on the server."""
        return await self._call(
            "executePrompt", params.to_dict(), ExecutePromptResponse.from_dict
        )

    async def respond_to_sampling(self, id: str, result: SamplingResponse) -> None:
        """Send the answer to a server's sampling request."""
        self._ensure_initialized()
        payload = JsonRpcResponse(id=id, result=result.to_dict())
        await self._post(payload.to_dict())

    async def _call(
        self, method: str, params: Any, parse: Callable[[Any], _T]
    ) -> _T:
        self._ensure_initialized()
        request = JsonRpcRequest(id=_generate_id(), method=method, params=params)
        response = await self._send_request(request)
        return self._parse_response(response, parse)

    async def _post(self, body: dict[str, Any]) -> httpx.Response:
        try:
            response = await self._http.post(self._server_url, json=body)
        except httpx.HTTPError as exc:
            raise HttpError(str(exc)) from exc
        if not response.is_success:
            try:
                text = response.text
            except (httpx.HTTPError, UnicodeDecodeError):
                text = ""
            raise ApiError(response.status_code, text)
        return response

    async def _send_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        response = await self._post(request.to_dict())
        try:
            decoded = json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise SerializationError(str(exc)) from exc
        return JsonRpcResponse.from_dict(decoded)

    @staticmethod
    def _parse_response(response: JsonRpcResponse, parse: Callable[[Any], _T]) -> _T:
        if response.error is not None:
            raise ApiError(response.error.code, response.error.message, response.error.data)
        if response.result is None:
            raise ConfigError("Response contains no result")
        return parse(response.result)

    def _ensure_initialized(self) -> None:
        if self._capabilities is None:
            raise ConfigError("MCP client not initialized")