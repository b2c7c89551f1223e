# routerkit

Typed building blocks for working with an LLM routing API:

- chat and text-completion request/response models (`routerkit.chat`)
- tool-calling types (`routerkit.tool`)
- typed provider preferences (`routerkit.provider_preferences`) and free-form
  routing preferences with model coverage profiles (`routerkit.routing`)
- model catalogue parsing (`routerkit.model_info`)
- structured-output schema configuration (`routerkit.structured`)
- web search request/response types (`routerkit.web_search`)
- request validation and rough token estimates (`routerkit.validation`)
- API key loading from the environment (`routerkit.auth`)
- an asynchronous Model Context Protocol client (`routerkit.mcp_client`,
  `routerkit.mcp_types`)
- strategies for fitting a conversation into a context window
  (`routerkit.context_strategy`)

All errors derive from `routerkit.errors.RouterError`: `ConfigError`,
`MissingCredential`, `ApiError`, `ContextLengthExceeded`,
`SerializationError` and `HttpError`.

## Installation

```
pip install routerkit
```

To run the test suite:

```
pip install "routerkit[test]"
pytest
```

## Building and validating a chat request

```python
from routerkit.chat import ChatCompletionRequest, Message
from routerkit.validation import validate_chat_request, check_token_limits
from routerkit.errors import ConfigError, ContextLengthExceeded

request = ChatCompletionRequest(
    model="openai/gpt-4o",
    messages=[Message(role="user", content="Hello, world!")],
)

try:
    validate_chat_request(request)
    check_token_limits(request)
except ConfigError as exc:
    print("invalid request:", exc)
except ContextLengthExceeded as exc:
    print("too long:", exc)

payload = request.to_dict()   # ready to be sent as JSON
```

`validate_chat_request` rejects a blank model, an empty message list, roles
other than `user`, `assistant` and `system`, blank content without tool calls,
tool calls on non-assistant messages, malformed tool calls, and tools with
blank or duplicate names or non-object parameters.

`estimate_request_tokens` counts roughly one token per four bytes of text
plus fixed overheads; `check_token_limits` raises `ContextLengthExceeded` when
the estimate is above `MAX_TOKENS` (32,000).

Responses are parsed with `from_dict`, for example
`ChatCompletionResponse.from_dict(data)` or
`ChatCompletionChunk.from_dict(data)` for streamed chunks. Missing or
wrongly typed fields raise `SerializationError`.

## Provider preferences

```python
from routerkit.provider_preferences import (
    ProviderPreferences, DataCollection, ProviderSort, Quantization,
)

prefs = (
    ProviderPreferences()
    .with_order(["OpenAI", "Anthropic"])
    .with_allow_fallbacks(True)
    .with_data_collection(DataCollection.DENY)
    .with_quantizations([Quantization.FP8])
    .with_sort(ProviderSort.PRICE)
)
prefs.validate()              # raises ConfigError on an empty or duplicated order
print(prefs.to_dict())        # camelCase keys, unset fields left out
```

Each `with_*` method returns a new object and leaves the original unchanged.

## Routing profiles

```python
from routerkit.routing import (
    RouterConfig, RoutingPreferences, PredefinedProfile,
    general_profile, code_profile, long_context_profile,
)

profile = code_profile()
print(profile.primary, profile.fallbacks)

config = RouterConfig(
    profile=PredefinedProfile.LOWEST_COST,
    provider_preferences=RoutingPreferences().with_provider_option(
        "OpenAI", {"priority": 1}
    ),
)
print(config.to_dict())
```

## Listing models

```python
from routerkit.model_info import ModelsResponse

text = '{"data": []}'
models = ModelsResponse.from_json(text)
for model in models.data:
    print(model.id, model.context_length, model.pricing.prompt)
```

## API keys

`load_api_key_from_env()` reads `OPENROUTER_API_KEY`, falling back to
`OR_API_KEY`, and raises `MissingCredential` when neither holds a non-blank
value. The value is returned exactly as stored. `validate_api_key(key)`
raises `ConfigError` unless the trimmed key is non-empty and at least ten
bytes long, and returns the trimmed key.

```python
from routerkit.auth import load_api_key_from_env, validate_api_key

key = validate_api_key(load_api_key_from_env())
```

## MCP client

```python
import asyncio
from routerkit.mcp_client import MCPClient
from routerkit.mcp_types import ClientCapabilities, ToolCallParams, MCP_PROTOCOL_VERSION

async def main():
    async with MCPClient("http://localhost:8080/mcp") as client:
        server = await client.initialize(
            ClientCapabilities(protocol_version=MCP_PROTOCOL_VERSION)
        )
        print(server.protocol_version)
        reply = await client.tool_call(
            ToolCallParams(id="search", parameters={"query": "weather"})
        )
        print(reply.result)

asyncio.run(main())
```

The client also offers `get_resource`, `execute_prompt`,
`respond_to_sampling` and `capabilities()`. An existing `httpx.AsyncClient`
can be passed as `http_client=`; it is then not closed by `aclose()`.

Calls other than `initialize` raise `ConfigError` until the client has been
initialised. Non-success HTTP statuses and JSON-RPC error objects raise
`ApiError`; transport failures raise `HttpError`.

## Fitting a conversation into context

```python
from routerkit.context_strategy import (
    SlidingWindowStrategy, SummaryStrategy, merge_consecutive_roles,
)

window = SlidingWindowStrategy(window_size=6, always_include_first=True)
trimmed = window.fit_to_context(messages, max_tokens=4000)

merged = merge_consecutive_roles(messages)   # joins runs of the same role
```

`SummaryStrategy(summarizer, recent_count)` keeps the first message, replaces
the middle of the conversation with the message returned by `summarizer`, and
keeps the last `recent_count` messages as they are. Neither strategy looks at
`max_tokens`; they work on message counts.

## What this package does not do

routerkit builds and parses request and response bodies, but it has no HTTP
client for chat completions, text completions, streaming, the model list or
web search: send those bodies with an HTTP library of your choice. The only
networked component is `MCPClient`. There is no built-in summarizer that calls
a model; `SummaryStrategy` takes any callable you provide. There is no
command-line tool.