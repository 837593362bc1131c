"""Unit tests for stream normalization and tool-call reassembly."""

from types import SimpleNamespace

import pytest

from mistral_llm_sdk.streaming import StreamAdapter, ToolCallAccumulator
from tests.helpers.streaming_mocks import (
    create_chunk,
    create_usage_mock,
    tool_call_fragment,
)


class TestToolCallAccumulator:

    def test_reassembles_split_arguments(self):
        acc = ToolCallAccumulator()
        acc.add(tool_call_fragment(0, id="c1", name="get_weather", arguments=""))
        acc.add(tool_call_fragment(0, arguments="{\"city\": "))
        acc.add(tool_call_fragment(0, arguments="\"Paris\"}"))

        assert acc.get_tool_calls() == [{
            "id": "c1",
            "type": "function",
            "function": {"name": "get_weather", "arguments": "{\"city\": \"Paris\"}"},
        }]

    def test_interleaved_indexes(self):
        acc = ToolCallAccumulator()
        acc.add(tool_call_fragment(1, id="c2", name="second", arguments="{"))
        acc.add(tool_call_fragment(0, id="c1", name="first", arguments="{}"))
        acc.add(tool_call_fragment(1, arguments="}"))

        calls = acc.get_tool_calls()
        assert [c["id"] for c in calls] == ["c1", "c2"]
        assert calls[1]["function"]["arguments"] == "{}"

    def test_object_fragments(self):
        acc = ToolCallAccumulator()
        function = SimpleNamespace(name="ping", arguments="{}")
        acc.add(SimpleNamespace(index=0, id="c1", type="function", function=function))
        assert acc.get_tool_calls()[0]["function"] == {"name": "ping", "arguments": "{}"}

    def test_missing_id_gets_default(self):
        acc = ToolCallAccumulator()
        acc.add(tool_call_fragment(0, name="ping", arguments="{}"))
        acc.add(tool_call_fragment(2, name="pong", arguments="{}"))
        assert [c["id"] for c in acc.get_tool_calls()] == ["call_0", "call_2"]

    def test_empty(self):
        acc = ToolCallAccumulator()
        assert not acc.has_calls()
        assert acc.get_tool_calls() is None


class TestStreamAdapter:

    def test_normalize_text_delta(self):
        adapter = StreamAdapter("Mistral")
        delta = adapter.normalize_delta(create_chunk(content="Hello"))
        assert adapter.provider == "mistral"
        assert delta.get_text() == "Hello"
        assert delta.tool_call_deltas == []

    def test_finish_reason_recorded(self):
        adapter = StreamAdapter("mistral")
        adapter.normalize_delta(create_chunk(content="x"))
        adapter.normalize_delta(create_chunk(finish_reason="stop"))
        assert adapter.finish_reason == "stop"

    def test_tool_calls_accumulated(self):
        adapter = StreamAdapter("mistral")
        adapter.normalize_delta(create_chunk(tool_calls=[tool_call_fragment(0, id="c1", name="f", arguments="{\"a\"")]))
        adapter.normalize_delta(create_chunk(tool_calls=[tool_call_fragment(0, arguments=": 1}")]))
        assert adapter.get_tool_calls()[0]["function"]["arguments"] == "{\"a\": 1}"

    def test_usage_on_final_chunk(self):
        adapter = StreamAdapter("mistral")
        plain = create_chunk(content="x")
        final = create_chunk(finish_reason="stop", usage=create_usage_mock(4, 6))

        assert not adapter.should_emit_usage(plain)
        assert adapter.should_emit_usage(final)
        assert adapter.extract_usage(final) == {
            "prompt_tokens": 4, "completion_tokens": 6, "total_tokens": 10
        }
        assert adapter.extract_usage(plain) is None

    def test_usage_dict(self):
        adapter = StreamAdapter("mistral")
        chunk = SimpleNamespace(choices=[], usage={"total_tokens": 3})
        assert adapter.extract_usage(chunk) == {"total_tokens": 3}

    def test_chunk_without_choices(self):
        adapter = StreamAdapter("mistral")
        assert adapter.normalize_delta(SimpleNamespace(choices=[], usage=None)).get_text() == ""

    @pytest.mark.asyncio
    async def test_metrics(self):
        adapter = StreamAdapter("mistral", "mistral-small-latest")
        await adapter.start_stream()
        await adapter.track_chunk(5)
        await adapter.track_chunk(7)
        await adapter.complete_stream()

        metrics = adapter.get_metrics()
        assert metrics["chunks"] == 2
        assert metrics["total_chars"] == 12
        assert metrics["tool_calls"] == 0
        assert adapter._stream_completed
