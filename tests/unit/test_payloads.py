"""Unit tests for request assembly and response parsing."""

import json
from unittest.mock import Mock

import pytest

from mistral_llm_sdk.errors import ConfigurationError
from mistral_llm_sdk.models.generation import GenerationParams
from mistral_llm_sdk.models.tools import Tool
from mistral_llm_sdk.providers.mistral.parsers import (
    chat_output,
    format_tool_calls,
    inline_output,
    output_response,
    tokens,
)
from mistral_llm_sdk.providers.mistral.payloads import (
    build_chat_payload,
    form_messages,
    form_tools,
    setup,
)


class TestPayloads:
    """Request body assembly."""

    def test_setup_stream_flag(self):
        assert setup({}, stream=True) == {"stream": True}
        assert setup({}, stream=False) == {}

    def test_no_stream_options(self):
        payload = build_chat_payload("Hi", GenerationParams(), stream=True)
        assert payload["stream"] is True
        assert "stream_options" not in payload

    def test_string_prompt_becomes_user_turn(self):
        assert form_messages("Hello") == {"messages": [{"role": "user", "content": "Hello"}]}

    def test_messages_are_normalized(self):
        body = form_messages([
            {"role": "tool", "content": "42", "tool_call_id": "c1"},
            {"role": "user", "content": "and?"},
        ])
        assert body["messages"] == [{"role": "tool", "content": "42", "tool_call_id": "c1"}]

    def test_form_tools_from_tool_objects(self):
        tool = Tool(
            name="get_weather",
            description="Look up the weather",
            parameters={"type": "object", "properties": {"city": {"type": "string"}}},
        )
        assert form_tools([tool]) == [{
            "type": "function",
            "function": {
                "name": "get_weather",
                "description": "Look up the weather",
                "parameters": {"type": "object", "properties": {"city": {"type": "string"}}},
            },
        }]

    def test_form_tools_default_parameters(self):
        formatted = form_tools([{"name": "ping", "description": "Ping"}])
        assert formatted[0]["function"]["parameters"] == {"type": "object", "properties": {}}

    def test_form_tools_passthrough(self):
        tool = {"type": "function", "function": {"name": "ping", "parameters": {}}}
        assert form_tools([tool]) == [tool]

    def test_form_tools_without_name(self):
        with pytest.raises(ConfigurationError) as exc_info:
            form_tools([{"description": "nameless"}])
        assert "tools" in exc_info.value.errors
        assert "nameless" in str(exc_info.value)

    def test_form_tools_empty(self):
        assert form_tools(None) is None
        assert form_tools([]) is None

    def test_build_chat_payload(self):
        payload = build_chat_payload(
            [{"role": "user", "content": "Hi"}],
            GenerationParams(model="mistral-large-latest", max_tokens=20),
            tools=[Tool(name="ping", description="Ping")],
        )
        assert payload["model"] == "mistral-large-latest"
        assert payload["max_tokens"] == 20
        assert payload["messages"] == [{"role": "user", "content": "Hi"}]
        assert payload["tools"][0]["function"]["name"] == "ping"
        assert "stream" not in payload

    def test_no_tools_key_without_tools(self):
        assert "tools" not in build_chat_payload("Hi", GenerationParams())

    def test_bad_parameters_raise(self):
        with pytest.raises(ConfigurationError):
            build_chat_payload("Hi", GenerationParams(top_p=3))


def make_response(content="Hello", tool_calls=None, finish_reason="stop", usage=None):
    message = Mock(content=content, tool_calls=tool_calls)
    response = Mock()
    response.choices = [Mock(message=message, finish_reason=finish_reason)]
    response.usage = usage
    return response


class TestParsers:
    """Response parsing and tool-call turns."""

    def test_chat_output_text(self):
        usage = {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5}
        output = chat_output(make_response(usage=usage))
        assert output == {
            "text": "Hello",
            "tool_calls": None,
            "finish_reason": "stop",
            "usage": usage,
        }

    def test_chat_output_tool_calls(self):
        call = Mock(id="c1", type="function")
        call.function = Mock()
        call.function.name = "lookup"
        call.function.arguments = "{\"q\": 1}"
        output = chat_output(make_response(content=None, tool_calls=[call], finish_reason="tool_calls"))

        assert output["text"] == ""
        assert output["finish_reason"] == "tool_calls"
        assert output["tool_calls"] == [
            {"id": "c1", "function": {"name": "lookup", "arguments": "{\"q\": 1}"}, "type": "function"}
        ]

    def test_chat_output_dict_response(self):
        response = {
            "choices": [{"message": {"content": "Hi"}, "finish_reason": "length"}],
            "usage": {"total_tokens": 7},
        }
        output = chat_output(response)
        assert output["text"] == "Hi"
        assert output["finish_reason"] == "length"
        assert output["usage"] == {"total_tokens": 7}

    def test_inline_output(self):
        assert inline_output(make_response(content="inline")) == "inline"
        assert inline_output({"choices": []}) is None

    def test_tokens(self):
        assert tokens({"total_tokens": 12}) == 12
        assert tokens({"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 0}) == 7
        assert tokens(None) is None

    def test_format_tool_calls(self):
        calls = [{"id": "c1", "function": {"name": "f", "arguments": "{}"}, "type": "function", "index": 0}]
        assert format_tool_calls(calls) == {
            "role": "assistant",
            "content": None,
            "tool_calls": [{"id": "c1", "function": {"name": "f", "arguments": "{}"}, "type": "function"}],
        }

    def test_output_response(self):
        call = {"id": "c1", "function": {"name": "f"}}
        assert output_response(call, "done") == {"role": "tool", "tool_call_id": "c1", "content": "done"}
        assert json.loads(output_response(call, {"a": 1})["content"]) == {"a": 1}
