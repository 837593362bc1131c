"""Main client interface for Mistral LLM SDK."""

from typing import Any, AsyncGenerator, Dict, List, Optional, Sequence, Union

from ..config.schema import describe_schema
from ..core.normalization.params import build_params
from ..core.registry import MODEL_CONFIGS, calculate_cost
from ..models.conversation_types import ConversationMessage
from ..models.generation import GenerationResponse, StreamingResponseWithUsage
from ..models.tools import Tool
from ..providers.mistral.adapter import MistralProvider
from ..reliability.retry import RetryConfig, RetryManager


def _cost(usage: Dict[str, Any], model: Optional[str]) -> Optional[float]:
    config = MODEL_CONFIGS.get(model) if model else None
    if config is None:
        return None
    return calculate_cost(usage, config)


class MistralClient:
    """High-level client for the Mistral chat-completions endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        retry_config: Optional[RetryConfig] = None,
        provider: Optional[MistralProvider] = None
    ):
        """
        Initialize the client.

        Args:
            api_key: Optional Mistral API key (defaults to MISTRAL_API_KEY)
            retry_config: Retry non-streaming calls on retryable errors when set
            provider: Pre-built provider, mostly for tests
        """
        self.provider = provider or MistralProvider(api_key=api_key)
        self.retry_config = retry_config
        self.retry_manager = RetryManager() if retry_config else None

    async def generate(
        self,
        messages: Union[str, List[ConversationMessage]],
        model: Optional[str] = None,
        tools: Optional[Sequence[Tool]] = None,
        raw_params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> GenerationResponse:
        """Generate a completion.

        Args:
            messages: Input messages (string or list of ConversationMessage)
            model: Model ID; falls back to MISTRAL_MODEL then the default model
            tools: Optional tool definitions
            raw_params: Dictionary of parameters (keyword arguments override it)
            **kwargs: Additional parameters (temperature, max_tokens, ...)

        Returns:
            GenerationResponse: text, usage, cost and tool calls
        """
        params = build_params(raw_params, model=model, **kwargs)

        async def _call() -> GenerationResponse:
            return await self.provider.generate(messages, params, tools=tools)

        if self.retry_manager:
            response = await self.retry_manager.execute_with_retry(_call, self.retry_config)
        else:
            response = await _call()

        response.cost_usd = _cost(response.usage, response.model)
        return response

    async def stream(
        self,
        messages: Union[str, List[ConversationMessage]],
        model: Optional[str] = None,
        tools: Optional[Sequence[Tool]] = None,
        raw_params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> AsyncGenerator[str, None]:
        """Stream text chunks.

        Yields:
            str: Text chunks
        """
        params = build_params(raw_params, model=model, **kwargs)
        async for chunk in self.provider.generate_stream(messages, params, tools=tools):
            yield chunk

    async def stream_with_usage(
        self,
        messages: Union[str, List[ConversationMessage]],
        model: Optional[str] = None,
        tools: Optional[Sequence[Tool]] = None,
        raw_params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> StreamingResponseWithUsage:
        """Stream a completion and collect the full text plus usage data.

        Returns:
            StreamingResponseWithUsage: Object containing full text and usage data
        """
        params = build_params(raw_params, model=model, **kwargs)
        response_wrapper = StreamingResponseWithUsage()

        async for chunk, usage_data in self.provider.generate_stream_with_usage(
            messages, params, tools=tools
        ):
            if chunk is not None:
                response_wrapper.add_chunk(chunk)
            if usage_data is not None:
                usage_data["cost_usd"] = _cost(usage_data["usage"], usage_data["model"])
                response_wrapper.set_usage(**usage_data)

        return response_wrapper

    def get_schema(self) -> List[Dict[str, Any]]:
        """Describe the accepted request parameters."""
        return describe_schema()

    def is_available(self) -> bool:
        return self.provider.is_available()


# Convenience function for quick usage
async def generate(
    prompt: str,
    model: Optional[str] = None,
    **kwargs
) -> GenerationResponse:
    """Quick generation function."""
    client = MistralClient()
    return await client.generate(prompt, model, **kwargs)
