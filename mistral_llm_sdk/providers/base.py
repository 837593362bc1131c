"""
Base Provider Adapter Interface

This module defines the abstract base class for provider adapters and the
exception raised for transport and API failures.
"""

from abc import ABC, abstractmethod
from typing import AsyncGenerator, Dict, List, Optional, Sequence, Tuple, Union

from ..models.conversation_types import ConversationMessage
from ..models.generation import GenerationParams, GenerationResponse
from ..models.tools import Tool


class ProviderAdapter(ABC):
    """
    Abstract base class for LLM provider adapters.

    The adapter is responsible for:
    - Shaping the conversation and parameters into a request body
    - Making API calls to the provider
    - Normalizing responses to SDK format
    - Mapping provider errors to ProviderError
    """

    @abstractmethod
    async def generate(
        self,
        messages: Union[str, List[ConversationMessage]],
        params: GenerationParams,
        tools: Optional[Sequence[Tool]] = None
    ) -> GenerationResponse:
        """
        Generate a completion from the provider.

        Args:
            messages: Either a string prompt or list of conversation messages
            params: Generation parameters
            tools: Optional tool definitions the model may call

        Returns:
            GenerationResponse with normalized fields:
            - text: The generated text
            - usage: Dict with prompt_tokens, completion_tokens, total_tokens
            - model: The model used
            - provider: The provider name
            - finish_reason: Why generation stopped (optional)
            - tool_calls: Tool calls requested by the model (optional)

        Raises:
            ProviderError: For transport and API errors
            ConfigurationError: For rejected parameters, before any request
        """
        pass

    @abstractmethod
    async def generate_stream(
        self,
        messages: Union[str, List[ConversationMessage]],
        params: GenerationParams,
        tools: Optional[Sequence[Tool]] = None
    ) -> AsyncGenerator[str, None]:
        """
        Generate a streaming completion from the provider.

        Yields:
            str: Text chunks as they arrive from the provider
        """
        pass

    @abstractmethod
    async def generate_stream_with_usage(
        self,
        messages: Union[str, List[ConversationMessage]],
        params: GenerationParams,
        tools: Optional[Sequence[Tool]] = None
    ) -> AsyncGenerator[Tuple[Optional[str], Optional[Dict]], None]:
        """
        Generate a streaming completion with usage data.

        Yields:
            - (text_chunk, None) during streaming
            - (None, final_dict) at completion, where final_dict carries
              "usage", "model", "provider", "finish_reason" and "tool_calls"
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the provider is available and configured.

        Returns:
            bool: True if an API key is present
        """
        pass

    def get_provider_name(self) -> str:
        """
        Get the name of this provider.

        By default, returns the class name without 'Provider' suffix.
        """
        class_name = self.__class__.__name__
        if class_name.endswith("Provider"):
            return class_name[:-8].lower()
        return class_name.lower()


class ProviderError(Exception):
    """
    Base exception for provider-related errors.

    This should be raised for:
    - API transport errors
    - Authentication failures
    - Rate limiting
    - Transient failures that may be retryable

    Attributes:
        message: Error message
        provider: Provider name
        status_code: HTTP status code if applicable
        retry_after: Seconds to wait before retry if applicable
        is_retryable: Whether this error should be retried
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.retry_after = retry_after
        self.is_retryable = False  # Set by the error mapper
        self.original_error = None
        self.error_category = None
