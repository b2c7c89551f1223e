import pytest

from routerkit.errors import SerializationError
from routerkit.tool import (
    FunctionCall,
    FunctionDescription,
    FunctionName,
    Tool,
    ToolCall,
    ToolChoice,
)

SCHEMA = {"type": "object", "properties": {"city": {"type": "string"}}}


def test_function_description_omits_missing_description():
    desc = FunctionDescription(name="get_weather", parameters=SCHEMA)
    data = desc.to_dict()
    assert "description" not in data
    assert data["parameters"] == SCHEMA
    assert FunctionDescription.from_dict(data) == desc


def test_function_description_round_trip_with_description():
    desc = FunctionDescription("get_weather", SCHEMA, "Look up weather")
    assert FunctionDescription.from_dict(desc.to_dict()) == desc


def test_function_description_requires_parameters():
    with pytest.raises(SerializationError):
        FunctionDescription.from_dict({"name": "get_weather"})


def test_tool_is_tagged_as_function():
    tool = Tool(FunctionDescription("get_weather", SCHEMA))
    data = tool.to_dict()
    assert data["type"] == "function"
    assert data["function"]["name"] == "get_weather"
    assert Tool.from_dict(data) == tool


def test_tool_rejects_unknown_tag():
    with pytest.raises(SerializationError):
        Tool.from_dict({"type": "retrieval", "function": {"name": "x", "parameters": {}}})


def test_tool_call_uses_wire_names():
    call = ToolCall("call_1", FunctionCall("get_weather", '{"city": "Paris"}'))
    data = call.to_dict()
    assert data["type"] == "function"
    assert data["function"] == {"name": "get_weather", "arguments": '{"city": "Paris"}'}
    assert ToolCall.from_dict(data) == call


def test_tool_call_requires_type():
    with pytest.raises(SerializationError):
        ToolCall.from_dict({"id": "call_1", "function": {"name": "f", "arguments": "{}"}})


def test_function_call_rejects_wrong_types():
    with pytest.raises(SerializationError):
        FunctionCall.from_dict({"name": "f", "arguments": {"a": 1}})


def test_tool_choice_simple_modes():
    assert ToolChoice.none().to_json() == "none"
    assert ToolChoice.auto().to_json() == "auto"


def test_tool_choice_function():
    choice = ToolChoice.function("get_weather")
    assert choice.to_json() == {"type": "function", "function": {"name": "get_weather"}}
    assert choice.selected == FunctionName("get_weather")
    assert ToolChoice.from_json(choice.to_json()) == choice


def test_tool_choice_string_round_trip():
    assert ToolChoice.from_json("auto") == ToolChoice.auto()


def test_tool_choice_rejects_other_values():
    with pytest.raises(SerializationError):
        ToolChoice.from_json(42)