"""Unit tests for the Mistral provider."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
from openai import AsyncOpenAI

from mistral_llm_sdk.errors import ConfigurationError
from mistral_llm_sdk.models.conversation_types import ConversationMessage, TurnRole as ConversationRole
from mistral_llm_sdk.models.generation import GenerationParams
from mistral_llm_sdk.models.tools import Tool
from mistral_llm_sdk.providers.base import ProviderError
from mistral_llm_sdk.providers.mistral import MistralProvider
from mistral_llm_sdk.reliability.error_classifier import ErrorCategory
from tests.conftest import make_completion
from tests.helpers.streaming_mocks import (
    create_error_stream,
    create_interrupted_stream,
    create_mistral_stream,
    create_tool_call_stream,
    tool_call_fragment,
)


class TestMistralProvider:
    """Test Mistral provider."""

    @pytest.fixture
    def provider(self):
        """Create Mistral provider instance."""
        with patch.dict('os.environ', {'MISTRAL_API_KEY': 'test-key'}):
            return MistralProvider()

    @pytest.mark.asyncio
    async def test_generate_simple_prompt(self, provider, mock_mistral_client):
        """Test generation with simple prompt."""
        provider._client = mock_mistral_client

        params = GenerationParams(model="mistral-small-latest", max_tokens=100, temperature=0.7)
        response = await provider.generate("Test prompt", params)

        assert response.text == "Test response"
        assert response.model == "mistral-small-latest"
        assert response.usage["total_tokens"] == 15
        assert response.provider == "mistral"
        assert response.finish_reason == "stop"
        assert response.tool_calls is None

        call_args = mock_mistral_client.chat.completions.create.call_args
        assert call_args.kwargs["messages"] == [{"role": "user", "content": "Test prompt"}]
        assert call_args.kwargs["max_tokens"] == 100
        assert "stream" not in call_args.kwargs

    @pytest.mark.asyncio
    async def test_generate_conversation_is_normalized(self, provider, mock_mistral_client,
                                                       sample_conversation_messages):
        """The user turn after the tool turn never reaches the API."""
        provider._client = mock_mistral_client

        await provider.generate(sample_conversation_messages, GenerationParams())

        sent = mock_mistral_client.chat.completions.create.call_args.kwargs["messages"]
        assert [m["role"] for m in sent] == ["system", "user", "assistant", "tool"]
        assert sent[-1]["tool_call_id"] == "call_1"

    @pytest.mark.asyncio
    async def test_generate_with_tools(self, provider, mock_mistral_client):
        call = MagicMock(id="c1", type="function")
        call.function.name = "get_weather"
        call.function.arguments = "{\"city\": \"Paris\"}"
        mock_mistral_client.chat.completions.create = AsyncMock(
            return_value=make_completion(content=None, tool_calls=[call], finish_reason="tool_calls")
        )
        provider._client = mock_mistral_client

        tool = Tool(name="get_weather", description="Weather", parameters={"type": "object"})
        response = await provider.generate("Weather in Paris?", GenerationParams(), tools=[tool])

        kwargs = mock_mistral_client.chat.completions.create.call_args.kwargs
        assert kwargs["tools"][0]["function"]["name"] == "get_weather"
        assert response.finish_reason == "tool_calls"
        assert response.tool_calls[0].id == "c1"
        assert response.tool_calls[0].function["arguments"] == "{\"city\": \"Paris\"}"

    @pytest.mark.asyncio
    async def test_invalid_params_rejected_before_request(self, provider, mock_mistral_client):
        provider._client = mock_mistral_client

        with pytest.raises(ConfigurationError) as exc_info:
            await provider.generate("Hi", GenerationParams(temperature=5))

        assert "temperature" in exc_info.value.errors
        mock_mistral_client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_generate_stream(self, provider, mock_mistral_client):
        """Test streaming generation."""
        provider._client = mock_mistral_client

        chunks = []
        async for chunk in provider.generate_stream("Test", GenerationParams()):
            chunks.append(chunk)

        assert chunks == ["Test", " response", " streaming"]
        kwargs = mock_mistral_client.chat.completions.create.call_args.kwargs
        assert kwargs["stream"] is True
        assert "stream_options" not in kwargs

    @pytest.mark.asyncio
    async def test_generate_stream_with_usage(self, provider, mock_mistral_client):
        provider._client = mock_mistral_client

        items = []
        async for item in provider.generate_stream_with_usage("Test", GenerationParams()):
            items.append(item)

        assert [text for text, _ in items[:-1]] == ["Test", " response", " streaming"]
        text, data = items[-1]
        assert text is None
        assert data["usage"] == {"prompt_tokens": 10, "completion_tokens": 6, "total_tokens": 16}
        assert data["model"] == "mistral-small-latest"
        assert data["provider"] == "mistral"
        assert data["finish_reason"] == "stop"
        assert data["tool_calls"] is None

    @pytest.mark.asyncio
    async def test_stream_without_usage_reports_zeros(self, provider):
        client = AsyncMock()
        client.chat.completions.create = AsyncMock(
            return_value=create_mistral_stream(["a", "b"], with_usage=False)
        )
        provider._client = client

        items = [item async for item in provider.generate_stream_with_usage("Hi", GenerationParams())]

        assert items[-1][1]["usage"] == {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}

    @pytest.mark.asyncio
    async def test_stream_reassembles_tool_calls(self, provider):
        client = AsyncMock()
        client.chat.completions.create = AsyncMock(return_value=create_tool_call_stream([
            tool_call_fragment(0, id="c1", name="get_weather", arguments="{\"ci"),
            tool_call_fragment(0, arguments="ty\": \"Rome\"}"),
        ]))
        provider._client = client

        items = [item async for item in provider.generate_stream_with_usage("Hi", GenerationParams())]

        assert len(items) == 1
        data = items[0][1]
        assert data["finish_reason"] == "tool_calls"
        assert data["tool_calls"][0].id == "c1"
        assert data["tool_calls"][0].function == {"name": "get_weather", "arguments": "{\"city\": \"Rome\"}"}

    @pytest.mark.asyncio
    async def test_stream_tool_call_without_id(self, provider):
        client = AsyncMock()
        client.chat.completions.create = AsyncMock(return_value=create_tool_call_stream([
            tool_call_fragment(0, name="ping", arguments="{}"),
        ]))
        provider._client = client

        items = [item async for item in provider.generate_stream_with_usage("Hi", GenerationParams())]

        assert items[-1][1]["tool_calls"][0].id == "call_0"
        assert items[-1][1]["tool_calls"][0].function["name"] == "ping"

    @pytest.mark.asyncio
    async def test_stream_error_is_mapped(self, provider):
        client = AsyncMock()
        client.chat.completions.create = AsyncMock(
            return_value=create_error_stream(httpx.ReadTimeout("read timed out"))
        )
        provider._client = client

        with pytest.raises(ProviderError) as exc_info:
            async for _ in provider.generate_stream("Hi", GenerationParams()):
                pass

        assert exc_info.value.provider == "mistral"
        assert exc_info.value.is_retryable
        assert exc_info.value.error_category == ErrorCategory.TIMEOUT

    @pytest.mark.asyncio
    async def test_interrupted_stream(self, provider):
        client = AsyncMock()
        client.chat.completions.create = AsyncMock(return_value=create_interrupted_stream(2))
        provider._client = client

        received = []
        with pytest.raises(ProviderError) as exc_info:
            async for chunk in provider.generate_stream("Hi", GenerationParams()):
                received.append(chunk)

        assert received == ["Hello", " world"]
        assert exc_info.value.error_category == ErrorCategory.NETWORK

    @pytest.mark.asyncio
    async def test_api_error_is_mapped(self, provider, mock_mistral_client):
        error = Exception("Internal server error")
        error.status_code = 503
        mock_mistral_client.chat.completions.create = AsyncMock(side_effect=error)
        provider._client = mock_mistral_client

        with pytest.raises(ProviderError) as exc_info:
            await provider.generate("Hi", GenerationParams())

        assert exc_info.value.status_code == 503
        assert exc_info.value.is_retryable
        assert str(exc_info.value).startswith("Mistral API error")

    def test_is_available_with_key(self, provider):
        assert provider.is_available()
        assert provider.get_provider_name() == "mistral"

    def test_is_available_without_key(self):
        assert not MistralProvider().is_available()

    def test_explicit_key(self):
        provider = MistralProvider(api_key="explicit")
        assert provider.get_headers()["Authorization"] == "Bearer explicit"

    def test_client_without_key_raises(self):
        provider = MistralProvider()
        with pytest.raises(ConfigurationError) as exc_info:
            provider.client
        assert exc_info.value.errors == {"api_key": "MISTRAL_API_KEY is not set"}

    def test_client_configuration(self, monkeypatch):
        monkeypatch.setenv("MISTRAL_API_KEY", "env-key")
        monkeypatch.setenv("MISTRAL_BASE_URL", "https://proxy.example/v1")
        monkeypatch.setenv("MISTRAL_TIMEOUT", "12")

        client = MistralProvider().client

        assert isinstance(client, AsyncOpenAI)
        assert str(client.base_url).rstrip("/") == "https://proxy.example/v1"
        assert client.timeout == 12.0

    @pytest.mark.asyncio
    async def test_conversation_message_roles(self, provider, mock_mistral_client):
        provider._client = mock_mistral_client
        messages = [
            ConversationMessage(role=ConversationRole.SYSTEM, content="You are helpful"),
            ConversationMessage(role=ConversationRole.USER, content="Hello"),
        ]
        await provider.generate(messages, GenerationParams(model="open-mistral-nemo"))

        kwargs = mock_mistral_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "open-mistral-nemo"
        assert kwargs["messages"] == [
            {"role": "system", "content": "You are helpful"},
            {"role": "user", "content": "Hello"},
        ]
