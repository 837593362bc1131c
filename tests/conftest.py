"""Shared pytest fixtures for Mistral LLM SDK tests."""

import pytest
from unittest.mock import AsyncMock, Mock

from mistral_llm_sdk.models.generation import GenerationParams
from mistral_llm_sdk.models.conversation_types import ConversationMessage, TurnRole as ConversationRole
from tests.helpers.streaming_mocks import create_mistral_stream, create_usage_mock


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep tests independent of the developer's environment and .env file."""
    for name in ("MISTRAL_API_KEY", "MISTRAL_MODEL", "MISTRAL_TIMEOUT", "MISTRAL_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    env_vars = {"MISTRAL_API_KEY": "test-mistral-key"}
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def sample_generation_params():
    """Sample generation parameters."""
    return GenerationParams(
        model="mistral-small-latest",
        max_tokens=100,
        temperature=0.7,
        top_p=0.95
    )


@pytest.fixture
def sample_conversation_messages():
    """Conversation with a tool round trip and a stray user turn."""
    return [
        ConversationMessage(role=ConversationRole.SYSTEM, content="You are a helpful assistant."),
        ConversationMessage(role=ConversationRole.USER, content="What is the weather in Paris?"),
        ConversationMessage(
            role=ConversationRole.ASSISTANT,
            content=None,
            tool_calls=[{
                "id": "call_1",
                "type": "function",
                "function": {"name": "get_weather", "arguments": "{\"city\": \"Paris\"}"}
            }]
        ),
        ConversationMessage(role=ConversationRole.TOOL, content="18C and sunny", tool_call_id="call_1"),
        ConversationMessage(role=ConversationRole.USER, content="Thanks!"),
    ]


def make_completion(content="Test response", tool_calls=None, finish_reason="stop",
                    model="mistral-small-latest"):
    """Mock non-streamed completion."""
    completion = Mock()
    message = Mock(content=content, tool_calls=tool_calls)
    completion.choices = [Mock(message=message, finish_reason=finish_reason)]
    completion.usage = create_usage_mock(10, 5)
    completion.model = model
    return completion


@pytest.fixture
def mock_mistral_client():
    """Mock OpenAI-compatible client pointed at Mistral."""
    client = AsyncMock()
    completion = make_completion()
    chunks = ["Test", " response", " streaming"]

    async def create_response(**kwargs):
        if kwargs.get("stream"):
            return create_mistral_stream(chunks)
        return completion

    client.chat.completions.create = AsyncMock(side_effect=create_response)
    return client
