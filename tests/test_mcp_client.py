import json

import httpx
import pytest

from routerkit.errors import ApiError, ConfigError, HttpError, SerializationError
from routerkit.mcp_client import MCPClient
from routerkit.mcp_types import (
    MCP_PROTOCOL_VERSION,
    ClientCapabilities,
    ExecutePromptParams,
    GetResourceParams,
    SamplingResponse,
    ToolCallParams,
)

URL = "http://mcp.example.com/rpc"


class Server:
    """Answers JSON-RPC calls from a table keyed by method name."""

    def __init__(self, answers=None, status=200, raw=None):
        self.answers = answers or {}
        self.status = status
        self.raw = raw
        self.seen = []

    def __call__(self, request):
        body = json.loads(request.content)
        self.seen.append(body)
        if self.status != 200:
            return httpx.Response(self.status, text="server exploded")
        if self.raw is not None:
            return httpx.Response(200, text=self.raw)
        method = body.get("method")
        answer = self.answers.get(method, {"result": {}})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], **answer})


def server_caps():
    return {
        "protocol_version": MCP_PROTOCOL_VERSION,
        "tools": {
            "tools": [
                {
                    "id": "calc",
                    "name": "Calculator",
                    "parameter_schema": {"type": "object"},
                    "return_schema": {"type": "number"},
                }
            ]
        },
        "requires_sampling": False,
    }


def make_client(server):
    http = httpx.AsyncClient(transport=httpx.MockTransport(server))
    return MCPClient(URL, http_client=http)


def client_caps():
    return ClientCapabilities(protocol_version=MCP_PROTOCOL_VERSION, supports_sampling=True)


@pytest.mark.parametrize("url", ["not a url", "", "http://"])
def test_invalid_url_is_config_error(url):
    with pytest.raises(ConfigError, match="Invalid server URL"):
        MCPClient(url)


@pytest.mark.asyncio
async def test_initialize_sends_request_and_stores_capabilities():
    server = Server({"initialize": {"result": server_caps()}})
    client = make_client(server)
    assert client.capabilities() is None
    caps = await client.initialize(client_caps())
    assert caps.protocol_version == MCP_PROTOCOL_VERSION
    assert caps.tools.tools[0].id == "calc"
    assert client.capabilities() == caps
    sent = server.seen[0]
    assert sent["jsonrpc"] == "2.0"
    assert sent["method"] == "initialize"
    assert sent["id"].startswith("req-")
    assert sent["params"] == {"capabilities": client_caps().to_dict()}


@pytest.mark.asyncio
async def test_calls_before_initialize_fail():
    server = Server()
    client = make_client(server)
    with pytest.raises(ConfigError, match="not initialized"):
        await client.tool_call(ToolCallParams(id="calc", parameters={}))
    with pytest.raises(ConfigError, match="not initialized"):
        await client.respond_to_sampling("req-1", SamplingResponse(result="x"))
    assert server.seen == []


@pytest.mark.asyncio
async def test_get_resource_round_trip():
    server = Server(
        {
            "initialize": {"result": server_caps()},
            "getResource": {"result": {"content": "hello", "mime_type": "text/plain"}},
        }
    )
    client = make_client(server)
    await client.initialize(client_caps())
    resource = await client.get_resource(GetResourceParams(id="doc", parameters={"page": 2}))
    assert resource.content == "hello"
    assert resource.mime_type == "text/plain"
    assert server.seen[-1]["method"] == "getResource"
    assert server.seen[-1]["params"] == {"id": "doc", "parameters": {"page": 2}}


@pytest.mark.asyncio
async def test_tool_call_and_execute_prompt():
    server = Server(
        {
            "initialize": {"result": server_caps()},
            "toolCall": {"result": {"result": [1, 2]}},
            "executePrompt": {"result": {"result": "done"}},
        }
    )
    client = make_client(server)
    await client.initialize(client_caps())
    tool = await client.tool_call(ToolCallParams(id="calc", parameters={"a": 1}))
    assert tool.result == [1, 2]
    prompt = await client.execute_prompt(ExecutePromptParams(id="p"))
    assert prompt.result == "done"
    assert [call["method"] for call in server.seen] == ["initialize", "toolCall", "executePrompt"]
    assert "parameters" not in server.seen[-1]["params"]


@pytest.mark.asyncio
async def test_respond_to_sampling_posts_response_payload():
    server = Server({"initialize": {"result": server_caps()}})
    client = make_client(server)
    await client.initialize(client_caps())
    await client.respond_to_sampling("req-42", SamplingResponse(result="sampled"))
    sent = server.seen[-1]
    assert sent == {"jsonrpc": "2.0", "id": "req-42", "result": {"result": "sampled"}}


@pytest.mark.asyncio
async def test_http_status_error_becomes_api_error():
    client = make_client(Server(status=500))
    with pytest.raises(ApiError) as info:
        await client.initialize(client_caps())
    assert info.value.code == 500
    assert info.value.message == "server exploded"
    assert client.capabilities() is None


@pytest.mark.asyncio
async def test_json_rpc_error_becomes_api_error():
    server = Server(
        {"initialize": {"error": {"code": 400, "message": "bad", "data": {"why": "x"}}}}
    )
    client = make_client(server)
    with pytest.raises(ApiError) as info:
        await client.initialize(client_caps())
    assert info.value.code == 400
    assert info.value.message == "bad"
    assert info.value.metadata == {"why": "x"}


@pytest.mark.asyncio
async def test_missing_result_is_config_error():
    server = Server({"initialize": {}})
    client = make_client(server)
    with pytest.raises(ConfigError, match="no result"):
        await client.initialize(client_caps())


@pytest.mark.asyncio
async def test_malformed_body_is_serialization_error():
    client = make_client(Server(raw="{not json"))
    with pytest.raises(SerializationError):
        await client.initialize(client_caps())


@pytest.mark.asyncio
async def test_result_of_wrong_shape_is_serialization_error():
    server = Server({"initialize": {"result": "just text"}})
    client = make_client(server)
    with pytest.raises(SerializationError):
        await client.initialize(client_caps())


@pytest.mark.asyncio
async def test_transport_failure_is_http_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = MCPClient(URL, http_client=http)
    with pytest.raises(HttpError):
        await client.initialize(client_caps())


@pytest.mark.asyncio
async def test_context_manager_closes_owned_client():
    async with MCPClient(URL) as client:
        assert client.server_url == URL
    assert client._http.is_closed