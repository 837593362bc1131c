from typing import Any, AsyncGenerator, Dict, List, Optional, Sequence, Union

from openai import AsyncOpenAI

from ..base import ProviderAdapter
from ..errors import ErrorMapper
from ...config.constants import (
    ADAPTER_NAME,
    ADAPTER_OPTS,
    ENV,
    FEATURES,
    FORMATTED_NAME,
    MISTRAL_CHAT_URL,
    ROLES,
)
from ...config.environment import get_base_url, get_env_values, get_timeout, render_headers
from ...errors import ConfigurationError
from ...models.conversation_types import ConversationMessage, ToolCall
from ...models.generation import GenerationParams, GenerationResponse
from ...models.tools import Tool
from ...core.normalization.usage import normalize_usage
from ...observability.logging import ProviderLogger
from ...streaming import StreamAdapter
from .payloads import build_chat_payload
from .parsers import chat_output
from .streaming import stream_chat, stream_chat_with_usage

logger = ProviderLogger(ADAPTER_NAME)


class MistralProvider(ProviderAdapter):
    """Mistral chat-completions provider.

    Transport goes through the OpenAI-compatible client pointed at the
    Mistral base URL. This class only shapes requests and reads responses.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None):
        self._client: Optional[AsyncOpenAI] = None
        self._env_values = get_env_values({"api_key": api_key})
        self._api_key = self._env_values.get("api_key")
        self._base_url = base_url or get_base_url()
        self._timeout = timeout if timeout is not None else get_timeout()

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of the API client."""
        if self._client is None:
            if not self._api_key:
                raise ConfigurationError(
                    "Mistral API key not found in environment variables",
                    errors={"api_key": "MISTRAL_API_KEY is not set"}
                )
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                default_headers=self.get_headers(),
            )
        return self._client

    @staticmethod
    def get_metadata() -> Dict[str, Any]:
        """Static description of the adapter."""
        return {
            "name": ADAPTER_NAME,
            "formatted_name": FORMATTED_NAME,
            "url": MISTRAL_CHAT_URL,
            "roles": dict(ROLES),
            "options": dict(ADAPTER_OPTS),
            "features": dict(FEATURES),
            "env": dict(ENV),
        }

    def get_headers(self) -> Dict[str, str]:
        """Request headers rendered from the header templates."""
        return render_headers(self._env_values)

    @staticmethod
    def _request_id(params: GenerationParams) -> Optional[str]:
        return params.metadata.get('request_id') if params.metadata else None

    async def generate(
        self,
        messages: Union[str, List[ConversationMessage]],
        params: GenerationParams,
        tools: Optional[Sequence[Tool]] = None
    ) -> GenerationResponse:
        """Generate a completion with conversation and tool support."""
        with logger.track_request("generate", params.model, request_id=self._request_id(params)) as request_info:
            payload = build_chat_payload(
                messages, params, tools=tools, request_id=request_info['request_id']
            )
            model = payload["model"]

            try:
                response = await self.client.chat.completions.create(**payload, timeout=self._timeout)
            except ConfigurationError:
                raise
            except Exception as e:
                raise ErrorMapper.map_mistral_error(e)

            output = chat_output(response)
            usage = normalize_usage(output["usage"], ADAPTER_NAME)
            logger.log_usage(usage, model, request_info['request_id'])

            tool_calls = output["tool_calls"]
            return GenerationResponse(
                text=output["text"],
                model=model,
                usage=usage,
                provider=ADAPTER_NAME,
                finish_reason=output["finish_reason"],
                tool_calls=[ToolCall(**tc) for tc in tool_calls] if tool_calls else None
            )

    async def generate_stream(
        self,
        messages: Union[str, List[ConversationMessage]],
        params: GenerationParams,
        tools: Optional[Sequence[Tool]] = None
    ) -> AsyncGenerator[str, None]:
        """Generate a completion with streaming support."""
        with logger.track_request("stream", params.model, request_id=self._request_id(params)) as request_info:
            payload = build_chat_payload(
                messages, params, tools=tools, stream=True, request_id=request_info['request_id']
            )
            adapter = StreamAdapter(ADAPTER_NAME, payload["model"])
            await adapter.start_stream()

            try:
                async for text in stream_chat(self.client, payload, adapter, timeout=self._timeout):
                    yield text
            except ConfigurationError:
                await adapter.complete_stream(error=None)
                raise
            except Exception as e:
                await adapter.complete_stream(error=e)
                raise ErrorMapper.map_mistral_error(e)
            finally:
                if not adapter._stream_completed:
                    await adapter.complete_stream()

                metrics = adapter.get_metrics()
                logger.debug(
                    "Streaming metrics",
                    model=payload["model"],
                    request_id=request_info['request_id'],
                    chunks=metrics['chunks'],
                    total_chars=metrics['total_chars'],
                    duration_ms=int(metrics['duration_seconds'] * 1000),
                    chunks_per_second=metrics['chunks_per_second']
                )

    async def generate_stream_with_usage(
        self,
        messages: Union[str, List[ConversationMessage]],
        params: GenerationParams,
        tools: Optional[Sequence[Tool]] = None
    ) -> AsyncGenerator[tuple, None]:
        """Generate a streamed completion with usage data.

        Yields (chunk, None) while streaming and a final (None, data) where
        data carries usage, model, provider, finish_reason and tool_calls.
        """
        with logger.track_request("stream_with_usage", params.model,
                                  request_id=self._request_id(params)) as request_info:
            payload = build_chat_payload(
                messages, params, tools=tools, stream=True, request_id=request_info['request_id']
            )
            adapter = StreamAdapter(ADAPTER_NAME, payload["model"])
            await adapter.start_stream()

            try:
                async for item in stream_chat_with_usage(self.client, payload, adapter, timeout=self._timeout):
                    text, data = item
                    if data is not None:
                        logger.log_usage(data["usage"], payload["model"], request_info['request_id'])
                        tool_calls = data.get("tool_calls")
                        data["tool_calls"] = [ToolCall(**tc) for tc in tool_calls] if tool_calls else None
                        data["cost_usd"] = None
                    yield (text, data)
            except ConfigurationError:
                await adapter.complete_stream(error=None)
                raise
            except Exception as e:
                await adapter.complete_stream(error=e)
                raise ErrorMapper.map_mistral_error(e)
            finally:
                if not adapter._stream_completed:
                    await adapter.complete_stream()

                metrics = adapter.get_metrics()
                logger.debug(
                    "Streaming metrics (with usage)",
                    model=payload["model"],
                    request_id=request_info['request_id'],
                    chunks=metrics['chunks'],
                    total_chars=metrics['total_chars'],
                    tool_calls=metrics['tool_calls'],
                    duration_ms=int(metrics['duration_seconds'] * 1000)
                )

    def is_available(self) -> bool:
        """Check if the Mistral API is configured."""
        return bool(self._api_key)
